"""
Bootstrap Orchestrator - the one-shot state machine that configures the guest.

    Idle -> Receiving -> Validating -> ConfiguringNetwork -> Mounting -> Done
    (any non-terminal state) -> Failed

Each state runs exactly one phase. The first failure moves the machine to
Failed and ends the run; nothing is retried and nothing is rolled back.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.core.phase_executor import BootstrapPhaseExecutor
from bootstrap.phases.base_phase import BootstrapPhase
from bootstrap.phases.mount_phase import MountPhase
from bootstrap.phases.network_phase import NetworkPhase
from bootstrap.phases.receive_phase import ReceivePhase
from bootstrap.phases.validation_phase import ValidationPhase
from bootstrap.result_builder import BootstrapResult
from bootstrap.states import BootstrapState, can_transition

logger = logging.getLogger(__name__)


def default_phases() -> List[BootstrapPhase]:
    return [ReceivePhase(), ValidationPhase(), NetworkPhase(), MountPhase()]


class InvalidTransitionError(RuntimeError):
    pass


class BootstrapOrchestrator:
    def __init__(self, context: BootstrapContext, phases: Optional[Sequence[BootstrapPhase]] = None):
        self.context = context
        self.phases: List[BootstrapPhase] = list(phases) if phases is not None else default_phases()
        self.executor = BootstrapPhaseExecutor(context)
        self.state = BootstrapState.IDLE
        self.history: List[BootstrapState] = [BootstrapState.IDLE]

    def _transition(self, target: BootstrapState) -> None:
        if not can_transition(self.state, target):
            raise InvalidTransitionError(f'Illegal transition {self.state.value} -> {target.value}')
        logger.debug(f'State {self.state.value} -> {target.value}')
        self.state = target
        self.history.append(target)

    async def run(self) -> BootstrapResult:
        if self.state is not BootstrapState.IDLE:
            raise InvalidTransitionError('BootstrapOrchestrator.run() may only be called once')

        logger.info('start VM config')
        start_time = datetime.now(timezone.utc)

        for phase in self.phases:
            self._transition(phase.STATE)
            result = await self.executor.run_phase(phase)
            if not result.success:
                failed_state = self.state
                self._transition(BootstrapState.FAILED)
                logger.error(f'✗ Bootstrap failed in state {failed_state.value}: {result.errors[0] if result.errors else "unknown error"}')
                self.executor.log_summary()
                return self._result(start_time, failed_state=failed_state, error=result.error)

        self._transition(BootstrapState.DONE)
        self.executor.log_summary()
        logger.info('End VM config')
        return self._result(start_time)

    def _result(self, start_time: datetime, failed_state: Optional[BootstrapState] = None,
                error=None) -> BootstrapResult:
        return BootstrapResult(
            run_id=self.context.run_id,
            final_state=self.state,
            document_path=self.context.document_path,
            states_visited=list(self.history),
            failed_state=failed_state,
            error=error,
            bootstrap_duration=(datetime.now(timezone.utc) - start_time).total_seconds(),
        )


async def run_bootstrap(context: BootstrapContext) -> BootstrapResult:
    return await BootstrapOrchestrator(context).run()
