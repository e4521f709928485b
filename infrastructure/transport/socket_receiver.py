# guest_config_agent/infrastructure/transport/socket_receiver.py
"""
Native rendezvous: listen on the service port, accept one connection from the
expected peer port and copy everything it sends (until EOF) to the destination.
"""
from __future__ import annotations

import asyncio
import logging
import socket
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class SocketReceiver:
    def __init__(
        self,
        service_port: int,
        peer_port: Optional[int] = None,
        family: str = 'vsock',
        bind_host: str = '127.0.0.1',
    ) -> None:
        if family not in ('vsock', 'inet'):
            raise ValueError(f"Unsupported socket family '{family}'")
        self.service_port = service_port
        self.peer_port = peer_port
        self.family = family
        self.bind_host = bind_host
        self.bound_address: Optional[Any] = None
        self.listening = asyncio.Event()
        self._claimed = False

    def _listening_socket(self) -> socket.socket:
        if self.family == 'vsock':
            sock = socket.socket(socket.AF_VSOCK, socket.SOCK_STREAM)
            address: Any = (socket.VMADDR_CID_ANY, self.service_port)
        else:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            address = (self.bind_host, self.service_port)
        try:
            sock.bind(address)
            sock.listen(1)
            sock.setblocking(False)
        except OSError:
            sock.close()
            raise
        return sock

    def _peer_matches(self, peername: Any) -> bool:
        if self.peer_port is None:
            return True
        try:
            return int(peername[1]) == self.peer_port
        except (TypeError, IndexError, ValueError):
            return False

    async def _copy(self, reader: asyncio.StreamReader, destination: Path) -> int:
        written = 0
        with open(destination, 'wb') as out:
            while True:
                chunk = await reader.read(CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk)
                written += len(chunk)
        return written

    async def receive(self, destination: Path) -> int:
        loop = asyncio.get_running_loop()
        done: asyncio.Future[int] = loop.create_future()

        async def _handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            peer = writer.get_extra_info('peername')
            try:
                if self._claimed:
                    logger.warning(f'Ignoring extra connection from {peer}: payload already claimed')
                    return
                if not self._peer_matches(peer):
                    logger.warning(f'Rejecting connection from {peer}: expected peer port {self.peer_port}')
                    return
                self._claimed = True
                logger.info(f'Accepted configuration connection from {peer}')
                try:
                    written = await self._copy(reader, destination)
                except OSError as e:
                    if not done.done():
                        done.set_exception(e)
                else:
                    if not done.done():
                        done.set_result(written)
            finally:
                writer.close()

        sock = self._listening_socket()
        server = await asyncio.start_server(_handle, sock=sock)
        self.bound_address = sock.getsockname()
        logger.info(f'Listening for configuration on {self.family} {self.bound_address}')
        self.listening.set()
        try:
            return await done
        finally:
            server.close()
            await server.wait_closed()
