# guest_config_agent/bootstrap/__init__.py
from __future__ import annotations

__version__ = '1.0.0'
__description__ = 'Guest-side configuration agent for lightweight VMs'

from .exceptions import *
from .states import BootstrapState
from .config.bootstrap_config import AgentConfig
from .extraction import FieldExtractor
from .bootstrap_context import BootstrapContext
from .context.bootstrap_context_builder import BootstrapContextBuilder, create_bootstrap_context
from .core.phase_executor import BootstrapPhaseExecutor, PhaseExecutionResult, PhaseExecutionSummary
from .result_builder import BootstrapResult
from .orchestrator import BootstrapOrchestrator, run_bootstrap

__all__ = [
    'AgentConfig',
    'BootstrapContext', 'BootstrapContextBuilder', 'create_bootstrap_context',
    'BootstrapOrchestrator', 'run_bootstrap', 'BootstrapState',
    'BootstrapPhaseExecutor', 'PhaseExecutionResult', 'PhaseExecutionSummary',
    'BootstrapResult', 'FieldExtractor',
    'BootstrapError', 'ConfigurationError', 'TransportError', 'ValidationError',
    'ExtractionError', 'NetworkFailure', 'NetworkConfigError', 'MountFailure',
    'MountError', 'BootstrapContextBuildError', 'PhaseExecutionError',
    '__version__', '__description__',
]
