# guest_config_agent/domain/ports/transport_port.py
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TransportPort(Protocol):
    """
    Receives the single configuration payload sent by the host.
    """

    async def receive(self, destination: Path) -> int:
        """
        Block until one payload arrives and write it verbatim to ``destination``,
        replacing any existing content.

        Returns:
            Number of bytes written.

        Raises:
            CollaboratorError or OSError when the transport fails.
        """
        ...
