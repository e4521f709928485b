# guest_config_agent/bootstrap/states.py
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class BootstrapState(Enum):
    IDLE = 'Idle'
    RECEIVING = 'Receiving'
    VALIDATING = 'Validating'
    CONFIGURING_NETWORK = 'ConfiguringNetwork'
    MOUNTING = 'Mounting'
    DONE = 'Done'
    FAILED = 'Failed'

    @property
    def is_terminal(self) -> bool:
        return self in (BootstrapState.DONE, BootstrapState.FAILED)


# Linear pipeline; FAILED is reachable from every non-terminal state.
ALLOWED_TRANSITIONS: Dict[BootstrapState, FrozenSet[BootstrapState]] = {
    BootstrapState.IDLE: frozenset({BootstrapState.RECEIVING, BootstrapState.FAILED}),
    BootstrapState.RECEIVING: frozenset({BootstrapState.VALIDATING, BootstrapState.FAILED}),
    BootstrapState.VALIDATING: frozenset({BootstrapState.CONFIGURING_NETWORK, BootstrapState.FAILED}),
    BootstrapState.CONFIGURING_NETWORK: frozenset({BootstrapState.MOUNTING, BootstrapState.FAILED}),
    BootstrapState.MOUNTING: frozenset({BootstrapState.DONE, BootstrapState.FAILED}),
    BootstrapState.DONE: frozenset(),
    BootstrapState.FAILED: frozenset(),
}


def can_transition(current: BootstrapState, target: BootstrapState) -> bool:
    return target in ALLOWED_TRANSITIONS[current]
