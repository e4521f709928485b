# guest_config_agent/infrastructure/network/iproute2_admin.py
from __future__ import annotations

import logging

from infrastructure.process_runner import CommandRunner

logger = logging.getLogger(__name__)


class IpRoute2NetworkAdmin:
    """NetworkAdminPort implemented with the iproute2 ``ip`` utility."""

    def __init__(self, runner: CommandRunner, ip_binary: str = '/sbin/ip') -> None:
        self.runner = runner
        self.ip_binary = ip_binary

    async def add_address(self, interface: str, address_with_prefix: str) -> None:
        await self.runner.run([self.ip_binary, 'addr', 'add', address_with_prefix, 'dev', interface])

    async def set_link_up(self, interface: str) -> None:
        await self.runner.run([self.ip_binary, 'link', 'set', interface, 'up'])

    async def add_default_route(self, gateway: str, interface: str) -> None:
        await self.runner.run([self.ip_binary, 'route', 'add', 'default', 'via', gateway, 'dev', interface])
