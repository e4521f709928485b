# guest_config_agent/domain/ports/network_admin_port.py
from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class NetworkAdminPort(Protocol):
    """Interface-level network administration. Every method raises CollaboratorError on failure."""

    async def add_address(self, interface: str, address_with_prefix: str) -> None:
        ...

    async def set_link_up(self, interface: str) -> None:
        ...

    async def add_default_route(self, gateway: str, interface: str) -> None:
        ...
