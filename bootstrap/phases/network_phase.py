# guest_config_agent/bootstrap/phases/network_phase.py
from __future__ import annotations
import logging

from bootstrap.exceptions import NetworkConfigError, NetworkFailure
from bootstrap.states import BootstrapState
from domain.ports.errors import CollaboratorError
from .base_phase import BootstrapPhase, PhaseResult

logger = logging.getLogger(__name__)


class NetworkPhase(BootstrapPhase):
    """
    Applies ``netconf`` to the primary interface: assign address, bring the
    link up, install the default route. Both fields are decoded before the
    first mutating call. Steps already applied are not rolled back when a
    later one fails.
    """

    STATE = BootstrapState.CONFIGURING_NETWORK

    async def execute(self, context) -> PhaseResult:
        logger.info('start network config')
        document = context.require_document()
        interface = context.interface

        netconf = context.extractor.net_config(document)
        address = netconf.address_with_prefix

        admin = context.network_admin
        try:
            await admin.add_address(interface, address)
        except (CollaboratorError, OSError) as e:
            raise NetworkConfigError(NetworkFailure.ADDRESS_ASSIGN_FAILED,
                                     f'Can not configure {interface}: {e}') from e
        logger.info(f'✓ address {address} assigned to {interface}')

        try:
            await admin.set_link_up(interface)
        except (CollaboratorError, OSError) as e:
            raise NetworkConfigError(NetworkFailure.INTERFACE_UP_FAILED,
                                     f'Can not bring up {interface}: {e}') from e
        logger.info(f'✓ {interface} is up')

        try:
            await admin.add_default_route(netconf.gateway, interface)
        except (CollaboratorError, OSError) as e:
            raise NetworkConfigError(NetworkFailure.ROUTE_ADD_FAILED,
                                     f'Can not configure default route via {netconf.gateway}: {e}') from e
        logger.info(f'✓ default route via {netconf.gateway} dev {interface}')

        logger.info('end network config')
        return PhaseResult.success_result(
            message=f'{interface} configured with {address}',
            metadata={'interface': interface, 'address': address, 'gateway': netconf.gateway}
        )
