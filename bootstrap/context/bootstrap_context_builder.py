"""
Bootstrap Context Builder - assembles the collaborators for one boot.

Anything not injected explicitly is created from the agent configuration,
so tests can swap in doubles for a single capability and keep the rest.
"""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional, Union

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.config.bootstrap_config import AgentConfig
from bootstrap.exceptions import BootstrapContextBuildError
from bootstrap.extraction import FieldExtractor
from domain.ports.document_decoder_port import DocumentDecoderPort
from domain.ports.mount_admin_port import MountAdminPort
from domain.ports.network_admin_port import NetworkAdminPort
from domain.ports.transport_port import TransportPort
from infrastructure.decoding.json_decoder import JsonDocumentDecoder
from infrastructure.mount.command_mount_admin import CommandMountAdmin
from infrastructure.network.iproute2_admin import IpRoute2NetworkAdmin
from infrastructure.process_runner import CommandRunner
from infrastructure.transport.helper_receiver import HelperProcessReceiver
from infrastructure.transport.socket_receiver import SocketReceiver

logger = logging.getLogger(__name__)


class BootstrapContextBuilder:
    def __init__(self, config: AgentConfig):
        self._config = config
        self._run_id: Optional[str] = None
        self._document_path: Optional[Path] = None
        self._transport: Optional[TransportPort] = None
        self._decoder: Optional[DocumentDecoderPort] = None
        self._network_admin: Optional[NetworkAdminPort] = None
        self._mount_admin: Optional[MountAdminPort] = None
        self._runner: Optional[CommandRunner] = None

    def with_run_id(self, run_id: str) -> 'BootstrapContextBuilder':
        self._run_id = run_id
        return self

    def with_document_path(self, path: Union[str, Path]) -> 'BootstrapContextBuilder':
        self._document_path = Path(path)
        return self

    def with_transport(self, transport: TransportPort) -> 'BootstrapContextBuilder':
        self._transport = transport
        return self

    def with_decoder(self, decoder: DocumentDecoderPort) -> 'BootstrapContextBuilder':
        self._decoder = decoder
        return self

    def with_network_admin(self, admin: NetworkAdminPort) -> 'BootstrapContextBuilder':
        self._network_admin = admin
        return self

    def with_mount_admin(self, admin: MountAdminPort) -> 'BootstrapContextBuilder':
        self._mount_admin = admin
        return self

    def with_command_runner(self, runner: CommandRunner) -> 'BootstrapContextBuilder':
        self._runner = runner
        return self

    def _command_runner(self) -> CommandRunner:
        if self._runner is None:
            self._runner = CommandRunner(dry_run=self._config.dry_run)
            if self._config.dry_run:
                logger.warning('Dry-run enabled: network and mount commands will only be logged')
        return self._runner

    def _default_transport(self) -> TransportPort:
        settings = self._config.transport
        if settings.backend == 'socket':
            return SocketReceiver(
                service_port=settings.service_port,
                peer_port=settings.peer_port,
                family=settings.socket_family,
                bind_host=settings.bind_host,
            )
        if settings.peer_port is None:
            raise BootstrapContextBuildError('transport.peer_port is required for the helper backend')
        return HelperProcessReceiver(
            helper_path=settings.helper_path,
            service_port=settings.service_port,
            peer_port=settings.peer_port,
        )

    def build(self) -> BootstrapContext:
        if self._document_path is None:
            raise BootstrapContextBuildError('A document path is required')

        decoder = self._decoder or JsonDocumentDecoder()
        context = BootstrapContext(
            config=self._config,
            run_id=self._run_id or f'boot_{uuid.uuid4().hex[:12]}',
            document_path=self._document_path,
            transport=self._transport or self._default_transport(),
            decoder=decoder,
            network_admin=self._network_admin or IpRoute2NetworkAdmin(self._command_runner(), self._config.commands.ip),
            mount_admin=self._mount_admin or CommandMountAdmin(self._command_runner(), self._config.commands.mount),
            extractor=FieldExtractor(decoder),
        )
        logger.debug(f'BootstrapContext built for run_id={context.run_id}')
        return context


def create_bootstrap_context(config: AgentConfig, document_path: Union[str, Path]) -> BootstrapContext:
    return BootstrapContextBuilder(config).with_document_path(document_path).build()
