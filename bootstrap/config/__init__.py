# bootstrap/config/__init__.py
"""
Bootstrap Configuration Module

Typed agent settings; the YAML loading itself lives in ``configs``.
"""

from .bootstrap_config import AgentConfig, CommandSettings, LoggingSettings, TransportSettings

__all__ = ['AgentConfig', 'CommandSettings', 'LoggingSettings', 'TransportSettings']
