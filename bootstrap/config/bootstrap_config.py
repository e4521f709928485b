# guest_config_agent/bootstrap/config/bootstrap_config.py
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TransportSettings(BaseModel):
    model_config = ConfigDict(extra='forbid')

    backend: Literal['helper', 'socket'] = Field('helper',
        description="'helper' runs an external rendezvous helper; 'socket' listens natively.")
    helper_path: str = Field('/bin/nc-vsock',
        description='Helper executable invoked as `<helper> <service_port> <peer_port>`.')
    service_port: int = Field(2, ge=0, le=0xFFFFFFFF,
        description='Well-known local port the payload is delivered to.')
    peer_port: Optional[int] = Field(0, ge=0, le=0xFFFFFFFF,
        description='Expected origin port of the host. None accepts any origin (socket backend).')
    socket_family: Literal['vsock', 'inet'] = Field('vsock',
        description="Address family for the socket backend; 'inet' is meant for local testing.")
    bind_host: str = Field('127.0.0.1',
        description='Bind address when socket_family is inet.')


class CommandSettings(BaseModel):
    model_config = ConfigDict(extra='forbid')

    ip: str = Field('/sbin/ip', description='iproute2 binary.')
    mount: str = Field('mount', description='mount(8) binary.')


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra='forbid')

    level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'
    stream: Literal['stdout', 'stderr'] = 'stdout'


class AgentConfig(BaseModel):
    """Configuration of the agent itself (not the document received from the host)."""

    model_config = ConfigDict(extra='forbid')

    env: str = 'default'
    interface: str = Field('eth0', min_length=1,
        description='Primary network interface the address and default route are bound to.')
    transport: TransportSettings = Field(default_factory=TransportSettings)
    commands: CommandSettings = Field(default_factory=CommandSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    dry_run: bool = Field(False,
        description='Log network and mount commands instead of executing them.')

    @classmethod
    def get_default_dict(cls) -> Dict[str, Any]:
        return cls().model_dump()
