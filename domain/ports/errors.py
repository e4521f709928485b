from __future__ import annotations

from typing import Optional, Sequence


class CollaboratorError(RuntimeError):
    """Raised by a capability adapter when the underlying operation fails."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None, stderr: str = ''):
        super().__init__(message)
        self.command = list(command) if command is not None else None
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        base_msg = super().__str__()
        details = []
        if self.returncode is not None:
            details.append(f'status {self.returncode}')
        if self.stderr:
            details.append(self.stderr.strip())
        if details:
            return f"{base_msg} ({'; '.join(details)})"
        return base_msg


class DocumentDecodeError(ValueError):
    """Raised by a decoder when the payload is not a well-formed document."""

    def __init__(self, diagnostic: str):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic
