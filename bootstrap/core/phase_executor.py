"""
Bootstrap Phase Executor - Consistent phase execution with timing and reporting.

Runs one phase at a time on behalf of the orchestrator and keeps a record of
every execution for the end-of-boot summary.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from datetime import datetime, timezone
from dataclasses import dataclass, field

from bootstrap.exceptions import BootstrapError

if TYPE_CHECKING:
    from bootstrap.bootstrap_context import BootstrapContext
    from bootstrap.phases.base_phase import BootstrapPhase

logger = logging.getLogger(__name__)


@dataclass
class PhaseExecutionResult:
    """Result of executing a bootstrap phase."""
    phase_name: str
    success: bool
    duration_seconds: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BootstrapError] = None


@dataclass
class PhaseExecutionSummary:
    """Summary of all phase executions."""
    total_phases: int
    successful_phases: int
    failed_phases: int
    total_duration: float
    results: List[PhaseExecutionResult] = field(default_factory=list)


class BootstrapPhaseExecutor:
    """
    Executes bootstrap phases with timing and error collection.
    """

    def __init__(self, context: BootstrapContext):
        self.context = context
        self.execution_results: List[PhaseExecutionResult] = []

    async def run_phase(self, phase: BootstrapPhase) -> PhaseExecutionResult:
        """Execute a single phase with timing and error handling."""
        phase_name = phase.__class__.__name__
        start_time = datetime.now(timezone.utc)

        phase_result = await phase.execute_with_hooks(self.context)

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        result = PhaseExecutionResult(
            phase_name=phase_name,
            success=phase_result.success,
            duration_seconds=duration,
            errors=phase_result.errors.copy(),
            metadata=phase_result.metadata.copy(),
            error=phase_result.error
        )
        self.execution_results.append(result)

        if result.success:
            logger.debug(f'Phase {phase_name} completed in {duration:.2f}s')
        else:
            logger.debug(f'Phase {phase_name} failed after {duration:.2f}s')
        return result

    def summary(self) -> PhaseExecutionSummary:
        successful = sum(1 for r in self.execution_results if r.success)
        return PhaseExecutionSummary(
            total_phases=len(self.execution_results),
            successful_phases=successful,
            failed_phases=len(self.execution_results) - successful,
            total_duration=sum(r.duration_seconds for r in self.execution_results),
            results=self.execution_results.copy()
        )

    def log_summary(self) -> None:
        """Log a summary of phase execution."""
        summary = self.summary()
        logger.info('=== Bootstrap Phase Execution Summary ===')
        logger.info(f'Phases run: {summary.total_phases}')
        logger.info(f'Successful: {summary.successful_phases}')
        logger.info(f'Failed: {summary.failed_phases}')
        logger.info(f'Total duration: {summary.total_duration:.2f}s')
        for result in summary.results:
            if not result.success:
                logger.warning(f'  - {result.phase_name}: {result.errors}')
        logger.info('=== End Bootstrap Phase Summary ===')
