from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bootstrap.config.bootstrap_config import AgentConfig
from bootstrap.extraction import FieldExtractor
from domain.models import ConfigDocument
from domain.ports.document_decoder_port import DocumentDecoderPort
from domain.ports.mount_admin_port import MountAdminPort
from domain.ports.network_admin_port import NetworkAdminPort
from domain.ports.transport_port import TransportPort


@dataclass
class BootstrapContext:
    config: AgentConfig
    run_id: str
    document_path: Path
    transport: TransportPort
    decoder: DocumentDecoderPort
    network_admin: NetworkAdminPort
    mount_admin: MountAdminPort
    extractor: FieldExtractor
    document: Optional[ConfigDocument] = None

    @property
    def interface(self) -> str:
        return self.config.interface

    def require_document(self) -> ConfigDocument:
        if self.document is None:
            raise ValueError('BootstrapContext has no validated document yet')
        return self.document
