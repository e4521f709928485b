# guest_config_agent/infrastructure/process_runner.py
"""
Async execution of external administration utilities.

Every ``ip``/``mount``/helper invocation goes through ``CommandRunner`` so that
exit status checking, stderr capture and dry-run handling live in one place.
"""
from __future__ import annotations

import asyncio
import logging
import shlex
from dataclasses import dataclass
from typing import List, Sequence

from domain.ports.errors import CollaboratorError

logger = logging.getLogger(__name__)


class CommandFailedError(CollaboratorError):
    """An external command could not be started or exited non-zero."""


@dataclass(frozen=True)
class CommandResult:
    argv: List[str]
    returncode: int
    stdout: str = ''
    stderr: str = ''
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    def __init__(self, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    async def run(self, argv: Sequence[str], check: bool = True) -> CommandResult:
        """Run ``argv`` to completion; raise CommandFailedError on non-zero exit when ``check``."""
        command = [str(part) for part in argv]
        rendered = shlex.join(command)

        if self.dry_run:
            logger.info(f'[dry-run] {rendered}')
            return CommandResult(argv=command, returncode=0, dry_run=True)

        logger.debug(f'Running: {rendered}')
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CommandFailedError(f'Cannot execute {command[0]}: {e}', command=command) from e

        stdout, stderr = await process.communicate()
        result = CommandResult(
            argv=command,
            returncode=process.returncode,
            stdout=stdout.decode('utf-8', errors='replace'),
            stderr=stderr.decode('utf-8', errors='replace'),
        )
        if check and not result.ok:
            raise CommandFailedError(
                f'Command failed: {rendered}',
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result
