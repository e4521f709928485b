# guest_config_agent/bootstrap/extraction.py
"""
Field Extractor - reads values out of a validated configuration document.

Two entry points:

* ``extract(path, expression)`` evaluates a path expression (see
  ``domain.query``) against the document stored at ``path`` and returns the
  rendered scalar. Used by the ``--query`` CLI.
* ``net_config()`` / ``mount_count()`` / ``mount_entry()`` decode the typed
  sections the network and mount phases consume, mapping the first failing
  field to that phase's error kind.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from bootstrap.exceptions import (
    ExtractionError,
    MountError,
    MountFailure,
    NetworkConfigError,
    NetworkFailure,
    ValidationError,
)
from domain.models import ConfigDocument, MountEntry, NetConfig
from domain.ports.document_decoder_port import DocumentDecoderPort
from domain.ports.errors import DocumentDecodeError
from domain.query import QueryError, evaluate, render

logger = logging.getLogger(__name__)

_ADDRESS_FIELDS = ('ipaddr', 'cidr')


class FieldExtractor:
    def __init__(self, decoder: DocumentDecoderPort) -> None:
        self.decoder = decoder

    def load(self, path: Union[str, Path]) -> Any:
        """Read and decode the document at ``path``; raises ValidationError if it is not well-formed."""
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ValidationError(f'Cannot read {path}', diagnostic=str(e), path=str(path)) from e
        try:
            return self.decoder.decode(raw)
        except DocumentDecodeError as e:
            raise ValidationError(f'{path} is not a well-formed document', diagnostic=e.diagnostic,
                                  path=str(path)) from e

    def evaluate(self, document: Any, expression: str) -> str:
        if isinstance(document, ConfigDocument):
            document = document.as_dict()
        try:
            value = render(evaluate(document, expression))
        except QueryError as e:
            raise ExtractionError(f"Cannot evaluate '{expression}': {e}", expression=expression) from e
        logger.debug(f"Evaluated '{expression}'")
        return value

    def extract(self, path: Union[str, Path], expression: str) -> str:
        return self.evaluate(self.load(path), expression)

    # Typed decode used by the phases

    def net_config(self, document: ConfigDocument) -> NetConfig:
        try:
            return NetConfig.model_validate(document.netconf)
        except PydanticValidationError as e:
            failing = [err['loc'][0] if err['loc'] else None for err in e.errors()]
            detail = '; '.join(f"{err['loc'][0] if err['loc'] else 'netconf'}: {err['msg']}" for err in e.errors())
            if not failing or any(f is None or f in _ADDRESS_FIELDS for f in failing):
                raise NetworkConfigError(NetworkFailure.MISSING_ADDRESS,
                                         f'can not get ipaddr param ({detail})') from e
            raise NetworkConfigError(NetworkFailure.MISSING_GATEWAY,
                                     f'no gateway address param ({detail})') from e

    def mount_count(self, document: ConfigDocument) -> int:
        if not isinstance(document.mounts, list):
            kind = 'missing' if document.mounts is None else type(document.mounts).__name__
            raise MountError(MountFailure.COUNT_UNAVAILABLE,
                             f'Can not get number of mountpoints (mounts is {kind})')
        return len(document.mounts)

    def mount_entry(self, document: ConfigDocument, index: int) -> MountEntry:
        try:
            return MountEntry.model_validate(document.mounts[index])
        except (PydanticValidationError, IndexError, TypeError) as e:
            raise MountError(MountFailure.ENTRY_UNAVAILABLE,
                             f'Can not get device entry {index}: {e}', index=index) from e
