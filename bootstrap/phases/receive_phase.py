# guest_config_agent/bootstrap/phases/receive_phase.py
from __future__ import annotations
import logging

from bootstrap.exceptions import TransportError
from bootstrap.states import BootstrapState
from domain.ports.errors import CollaboratorError
from .base_phase import BootstrapPhase, PhaseResult

logger = logging.getLogger(__name__)


class ReceivePhase(BootstrapPhase):
    """
    Waits for the host to deliver the configuration document and writes it
    to the document path. This is the only step that blocks on the outside
    world; there is no timeout.
    """

    STATE = BootstrapState.RECEIVING

    async def execute(self, context) -> PhaseResult:
        path = context.document_path
        logger.info(f'Waiting for configuration document -> {path}')
        try:
            written = await context.transport.receive(path)
        except (CollaboratorError, OSError) as e:
            raise TransportError(f'Can not receive file {path}: {e}', phase='receive') from e

        return PhaseResult.success_result(
            message=f'received {written} bytes into {path}',
            metadata={'bytes_received': written, 'document_path': str(path)}
        )
