# guest_config_agent/domain/models.py
"""
Typed views of the configuration document received from the host.

The document is decoded once. ``ConfigDocument`` keeps the ``netconf`` and
``mounts`` sections untyped so that a missing or malformed field surfaces at
the step that needs it (network or mount) with that step's error kind, rather
than as a blanket validation failure.
"""
from __future__ import annotations

import shlex
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class NetConfig(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    ipaddr: StrictStr = Field(..., description='Guest IPv4/IPv6 address, without prefix.')
    cidr: StrictStr = Field(..., description='Prefix length, consumed as an opaque string.')
    gateway: StrictStr = Field(..., description='Default gateway address.')

    @property
    def address_with_prefix(self) -> str:
        return f'{self.ipaddr}/{self.cidr}'


class MountEntry(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True, populate_by_name=True)

    flags: StrictStr = Field(..., description="Extra mount(8) arguments, e.g. '-o ro'.")
    device: StrictStr = Field(..., alias='dev')
    mount_point: StrictStr = Field(..., alias='mountpoint')

    @field_validator('flags')
    @classmethod
    def flags_must_split(cls, value: str) -> str:
        try:
            shlex.split(value)
        except ValueError as e:
            raise ValueError(f'flags cannot be split into arguments: {e}') from e
        return value

    def command_args(self) -> List[str]:
        """mount(8) arguments: the split flags followed by device and target."""
        return shlex.split(self.flags) + [self.device, self.mount_point]

    def __str__(self) -> str:
        return ' '.join(self.command_args())


class ConfigDocument(BaseModel):
    """The single, read-only configuration document for one boot."""

    model_config = ConfigDict(extra='allow', frozen=True)

    netconf: Optional[Any] = None
    mounts: Optional[Any] = None

    @classmethod
    def from_decoded(cls, data: Any) -> 'ConfigDocument':
        if not isinstance(data, dict):
            return cls()
        return cls.model_validate(data)

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
