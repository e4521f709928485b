# guest_config_agent/infrastructure/transport/helper_receiver.py
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from infrastructure.process_runner import CommandFailedError

logger = logging.getLogger(__name__)


class HelperProcessReceiver:
    """
    TransportPort that delegates the rendezvous to an external helper
    (``nc-vsock <service_port> <peer_port>``) and redirects its stdout into
    the destination file. Success means the helper exited with status 0.
    """

    def __init__(self, helper_path: str, service_port: int, peer_port: int) -> None:
        self.helper_path = helper_path
        self.service_port = service_port
        self.peer_port = peer_port

    @property
    def argv(self) -> list[str]:
        return [self.helper_path, str(self.service_port), str(self.peer_port)]

    async def receive(self, destination: Path) -> int:
        logger.debug(f'Waiting for configuration via {" ".join(self.argv)}')
        with open(destination, 'wb') as out:
            try:
                process = await asyncio.create_subprocess_exec(
                    *self.argv,
                    stdout=out,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                raise CommandFailedError(f'Cannot execute {self.helper_path}: {e}', command=self.argv) from e
            _, stderr = await process.communicate()

        if process.returncode != 0:
            raise CommandFailedError(
                f'Transport helper {self.helper_path} failed',
                command=self.argv,
                returncode=process.returncode,
                stderr=stderr.decode('utf-8', errors='replace'),
            )
        return destination.stat().st_size
