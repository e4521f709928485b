# guest_config_agent/infrastructure/mount/command_mount_admin.py
from __future__ import annotations

from domain.models import MountEntry
from infrastructure.process_runner import CommandRunner


class CommandMountAdmin:
    """MountAdminPort implemented with mount(8)."""

    def __init__(self, runner: CommandRunner, mount_binary: str = 'mount') -> None:
        self.runner = runner
        self.mount_binary = mount_binary

    async def mount(self, entry: MountEntry) -> None:
        await self.runner.run([self.mount_binary, *entry.command_args()])
