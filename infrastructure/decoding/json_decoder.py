# guest_config_agent/infrastructure/decoding/json_decoder.py
from __future__ import annotations

import json
from typing import Any

from domain.ports.errors import DocumentDecodeError


class JsonDocumentDecoder:
    """DocumentDecoderPort backed by the json module."""

    def __init__(self, encoding: str = 'utf-8') -> None:
        self.encoding = encoding

    def decode(self, raw: bytes) -> Any:
        try:
            text = raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise DocumentDecodeError(f'payload is not valid {self.encoding}: {e}') from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentDecodeError(
                f'{e.msg} at line {e.lineno}, column {e.colno}'
            ) from e
