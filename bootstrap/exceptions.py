"""
Exception classes for the guest configuration bootstrap.

Every failure in the pipeline is terminal for the boot: phases raise one of
these, the orchestrator logs it and the process exits non-zero.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class BootstrapError(RuntimeError):
    """
    Base exception for all bootstrap-related errors.

    Carries the name of the phase that raised it so the final log line can
    say where the boot stopped.
    """

    def __init__(self, message: str, phase: Optional[str] = None):
        super().__init__(message)
        self.phase = phase

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.phase:
            return f"{base_msg} (phase={self.phase})"
        return base_msg


class ConfigurationError(BootstrapError):
    """
    Raised when the agent's own YAML configuration cannot be loaded or
    does not validate.
    """
    pass


class TransportError(BootstrapError):
    """Raised when the configuration payload cannot be received from the host."""
    pass


class ValidationError(BootstrapError):
    """
    Raised when the received document is not well-formed.

    ``diagnostic`` holds the decoder's message verbatim.
    """

    def __init__(self, message: str, diagnostic: str = '', path: Optional[str] = None):
        super().__init__(message, phase='validation')
        self.diagnostic = diagnostic
        self.path = path

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.diagnostic:
            return f"{base_msg}\nDecoder reports: {self.diagnostic}"
        return base_msg


class ExtractionError(BootstrapError):
    """
    Raised when a query expression fails to evaluate against a valid
    document. An expression that evaluates to an empty string is not an error.
    """

    def __init__(self, message: str, expression: str):
        super().__init__(message, phase='extraction')
        self.expression = expression


class NetworkFailure(Enum):
    MISSING_ADDRESS = 'missing_address'
    MISSING_GATEWAY = 'missing_gateway'
    ADDRESS_ASSIGN_FAILED = 'address_assign_failed'
    INTERFACE_UP_FAILED = 'interface_up_failed'
    ROUTE_ADD_FAILED = 'route_add_failed'


class NetworkConfigError(BootstrapError):
    """Raised when one of the network configuration steps fails."""

    def __init__(self, kind: NetworkFailure, message: str):
        super().__init__(message, phase='network')
        self.kind = kind


class MountFailure(Enum):
    COUNT_UNAVAILABLE = 'count_unavailable'
    ENTRY_UNAVAILABLE = 'entry_unavailable'
    MOUNT_FAILED = 'mount_failed'


class MountError(BootstrapError):
    """Raised when the mount list cannot be read or a mount call fails."""

    def __init__(self, kind: MountFailure, message: str, index: Optional[int] = None):
        super().__init__(message, phase='mount')
        self.kind = kind
        self.index = index


class BootstrapContextBuildError(BootstrapError):
    """Raised when BootstrapContextBuilder cannot assemble a valid BootstrapContext."""
    pass


class PhaseExecutionError(BootstrapError):
    """
    Raised when a bootstrap phase fails with an exception outside the
    taxonomy above. Wraps the original error for the final report.
    """

    def __init__(self, message: str, phase: str, original_error: Optional[Exception] = None):
        super().__init__(message, phase=phase)
        self.original_error = original_error

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg}\nCaused by: {type(self.original_error).__name__}: {self.original_error}"
        return base_msg


__all__ = [
    'BootstrapError', 'ConfigurationError', 'TransportError', 'ValidationError',
    'ExtractionError', 'NetworkFailure', 'NetworkConfigError', 'MountFailure',
    'MountError', 'BootstrapContextBuildError', 'PhaseExecutionError',
]
