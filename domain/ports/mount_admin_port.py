# guest_config_agent/domain/ports/mount_admin_port.py
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from domain.models import MountEntry


@runtime_checkable
class MountAdminPort(Protocol):
    async def mount(self, entry: MountEntry) -> None:
        """Mount ``entry``; raises CollaboratorError on failure."""
        ...
