"""
Base Phase - Abstract interface for all bootstrap phases.

Each phase owns one state of the bootstrap state machine and either completes
or raises a ``BootstrapError`` subclass describing why the boot must stop.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional

from bootstrap.exceptions import BootstrapError, PhaseExecutionError
from bootstrap.states import BootstrapState

if TYPE_CHECKING:
    from bootstrap.bootstrap_context import BootstrapContext

logger = logging.getLogger(__name__)


@dataclass
class PhaseResult:
    """Result of a bootstrap phase execution."""
    success: bool
    message: str
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BootstrapError] = None

    @classmethod
    def success_result(
        cls,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> 'PhaseResult':
        """Create a successful phase result."""
        return cls(
            success=True,
            message=message,
            metadata=metadata or {}
        )

    @classmethod
    def failure_result(
        cls,
        message: str,
        error: BootstrapError,
        metadata: Optional[Dict[str, Any]] = None
    ) -> 'PhaseResult':
        """Create a failed phase result."""
        return cls(
            success=False,
            message=message,
            errors=[str(error)],
            metadata=metadata or {},
            error=error
        )


class BootstrapPhase(ABC):
    """
    Abstract base class for all bootstrap phases.

    Subclasses set ``STATE`` to the orchestrator state they run in and
    implement ``execute``. Failures are raised, never returned silently.
    """

    STATE: ClassVar[BootstrapState]

    def __init__(self):
        self.phase_name = self.__class__.__name__
        self.logger = logging.getLogger(f"bootstrap.{self.phase_name.lower()}")

    @abstractmethod
    async def execute(self, context: BootstrapContext) -> PhaseResult:
        """
        Execute this bootstrap phase.

        Args:
            context: BootstrapContext containing the collaborators and the document

        Returns:
            PhaseResult on success

        Raises:
            BootstrapError subclass describing the failure
        """
        pass

    async def pre_execute(self, context: BootstrapContext) -> None:
        self.logger.debug(f"Starting phase: {self.phase_name}")

    async def post_execute(self, context: BootstrapContext, result: PhaseResult) -> None:
        if result.success:
            self.logger.info(f"✓ Phase completed: {self.phase_name} - {result.message}")
        else:
            self.logger.error(f"✗ Phase failed: {self.phase_name} - {result.message}")
            for error in result.errors:
                self.logger.error(f"  Error: {error}")

    def validate_context(self, context: BootstrapContext) -> None:
        """
        Validate that context contains required elements for this phase.
        Raises ValueError if context is invalid.
        """
        required_attrs = ['config', 'run_id', 'document_path']
        for attr in required_attrs:
            if getattr(context, attr, None) is None:
                raise ValueError(f"BootstrapContext missing required attribute: {attr}")

    async def execute_with_hooks(self, context: BootstrapContext) -> PhaseResult:
        """
        Execute phase with pre/post hooks and error handling.

        This is the entry point called by the phase executor. A
        ``BootstrapError`` becomes a failed result carrying that error; any
        other exception is wrapped in ``PhaseExecutionError``.
        """
        try:
            self.validate_context(context)
            await self.pre_execute(context)
            result = await self.execute(context)
        except BootstrapError as e:
            if e.phase is None:
                e.phase = self.phase_name
            result = PhaseResult.failure_result(
                message=f"{self.STATE.value} failed",
                error=e,
                metadata={'error_type': type(e).__name__}
            )
        except Exception as e:
            self.logger.error(f"Unexpected error in phase {self.phase_name}: {e}", exc_info=True)
            wrapped = PhaseExecutionError(
                f"Unexpected error in phase {self.phase_name}",
                phase=self.phase_name,
                original_error=e
            )
            result = PhaseResult.failure_result(
                message=f"Phase {self.phase_name} failed with exception",
                error=wrapped,
                metadata={'exception_type': type(e).__name__}
            )

        await self.post_execute(context, result)
        return result
