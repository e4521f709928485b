# guest_config_agent/domain/ports/document_decoder_port.py
from __future__ import annotations
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentDecoderPort(Protocol):
    """
    Parses raw configuration bytes into plain Python data.
    """

    def decode(self, raw: bytes) -> Any:
        """
        Decode ``raw`` into dicts, lists and scalars.

        Raises:
            DocumentDecodeError: the payload is not well-formed; ``diagnostic``
                carries the parser's message verbatim.
        """
        ...
