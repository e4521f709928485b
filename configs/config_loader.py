from __future__ import annotations
import asyncio
import copy
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional, Sequence
import yaml
from pydantic import ValidationError as PydanticValidationError

from bootstrap.config.bootstrap_config import AgentConfig
from bootstrap.exceptions import ConfigurationError
from configs.config_utils import ConfigMerger

__all__: Sequence[str] = ('ConfigLoader', 'DEFAULT_CONFIG', 'CONFIG_PATH_ENV')
logger = logging.getLogger(__name__)

_ENV_DEFAULT: Final[str] = 'default'
CONFIG_PATH_ENV: Final[str] = 'GUEST_AGENT_CONFIG'
DRY_RUN_ENV: Final[str] = 'GUEST_AGENT_DRY_RUN'
LOG_LEVEL_ENV: Final[str] = 'GUEST_AGENT_LOG_LEVEL'

DEFAULT_CONFIG: Dict[str, Any] = {
    'env': _ENV_DEFAULT,
    'interface': 'eth0',
    'dry_run': False,
    'logging': {
        'level': 'INFO',
        'stream': 'stdout',
    },
}

_RE_ENV_DEFAULT: Final[re.Pattern[str]] = re.compile('\\$\\{([A-Za-z_][A-Za-z0-9_]*):?-(.*?)\\}')
_TRUTHY: Final[frozenset[str]] = frozenset({'1', 'true', 'yes', 'on'})


def _interpolate_env(value: str) -> str:
    if not isinstance(value, str):
        return value

    def _repl(match: re.Match[str]) -> str:
        var, default = (match.group(1), match.group(2))
        return os.getenv(var, default)

    before = value
    value = _RE_ENV_DEFAULT.sub(_repl, value)
    value = os.path.expandvars(value)

    if before != value:
        logger.debug("Env expand: '%s' → '%s'", before, value)
    elif '${' in before:
        logger.warning("Unresolved env var in '%s'", before)

    return value


def _expand_tree(node: Any) -> Any:
    if isinstance(node, dict):
        return {k: _expand_tree(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_expand_tree(v) for v in node]
    if isinstance(node, str):
        return _interpolate_env(node)
    return node


def _load_yaml(path: Path, required: bool = False) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        if required:
            raise ConfigurationError(f'Config file not found: {path}')
        logger.debug('Config file not found: %s', path)
        return {}
    except OSError as exc:
        raise ConfigurationError(f'Cannot read {path}: {exc}') from exc

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f'Invalid YAML in {path}: {exc}') from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f'{path} does not contain a top-level mapping')
    return data


class ConfigLoader:

    def __init__(self, package_root: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> None:
        self._package_root: Path = package_root if package_root is not None else Path(__file__).resolve().parents[1]
        self._environ: Mapping[str, str] = environ if environ is not None else os.environ

    @property
    def default_config_path(self) -> Path:
        return self._package_root / 'configs' / 'default' / 'agent_config.yaml'

    async def load_global_config(self, config_path: Optional[Path] = None,
                                 provided_config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge defaults, the packaged YAML, an optional override file and env overrides."""
        if provided_config is not None:
            logger.info('Using provided agent configuration object.')
            return _expand_tree(provided_config)

        cfg: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        default_data = await asyncio.to_thread(_load_yaml, self.default_config_path)
        if default_data:
            cfg = ConfigMerger.merge(cfg, default_data, 'DEFAULT_AGENT_CONFIG')
            logger.debug('Merged DEFAULT_AGENT_CONFIG: %s', self.default_config_path)

        override_path = config_path or self._override_path()
        if override_path is not None:
            override = await asyncio.to_thread(_load_yaml, override_path, config_path is not None)
            if override:
                cfg = ConfigMerger.merge(cfg, override, 'OVERRIDE_AGENT_CONFIG')
                logger.info('Merged agent config override: %s', override_path)

        cfg = _expand_tree(cfg)
        cfg = self._apply_env_overrides(cfg)
        logger.debug('Resolved agent config keys: %s', list(cfg))
        return cfg

    async def load_agent_config(self, config_path: Optional[Path] = None,
                                provided_config: Optional[Dict[str, Any]] = None) -> AgentConfig:
        raw = await self.load_global_config(config_path=config_path, provided_config=provided_config)
        try:
            return AgentConfig.model_validate(raw)
        except PydanticValidationError as exc:
            problems = '; '.join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigurationError(f'Invalid agent configuration: {problems}') from exc

    def _override_path(self) -> Optional[Path]:
        value = self._environ.get(CONFIG_PATH_ENV)
        return Path(value) if value else None

    def _apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        dry_run = self._environ.get(DRY_RUN_ENV)
        if dry_run is not None:
            overrides['dry_run'] = dry_run.strip().lower() in _TRUTHY
        level = self._environ.get(LOG_LEVEL_ENV)
        if level:
            overrides['logging'] = {'level': level.strip().upper()}
        if not overrides:
            return cfg
        return ConfigMerger.merge(cfg, overrides, 'ENV_OVERRIDES')
