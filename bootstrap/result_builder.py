"""
Bootstrap result for one run of the guest configuration pipeline.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from bootstrap.exceptions import BootstrapError
from bootstrap.states import BootstrapState

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """
    Outcome of the bootstrap: where the state machine ended, the state it
    failed in (if any) and the error that stopped it.
    """

    run_id: str
    final_state: BootstrapState
    document_path: Path
    states_visited: List[BootstrapState] = field(default_factory=list)
    failed_state: Optional[BootstrapState] = None
    error: Optional[BootstrapError] = None
    bootstrap_duration: Optional[float] = None
    creation_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def success(self) -> bool:
        return self.final_state is BootstrapState.DONE

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def get_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the bootstrap result.

        Returns:
            Dictionary with key bootstrap facts
        """
        return {
            'run_id': self.run_id,
            'success': self.success,
            'final_state': self.final_state.value,
            'failed_state': self.failed_state.value if self.failed_state else None,
            'error': str(self.error) if self.error else None,
            'error_type': type(self.error).__name__ if self.error else None,
            'states_visited': [s.value for s in self.states_visited],
            'document_path': str(self.document_path),
            'bootstrap_duration': self.bootstrap_duration,
            'creation_time': self.creation_time.isoformat(),
        }
