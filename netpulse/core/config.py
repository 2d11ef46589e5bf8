"""
Configuration Helper - Engine settings and target list loading

Settings come from an optional YAML file and NETPULSE_* environment
variables. Target lists are read from YAML or JSON files; entries that do not
look like targets are dropped rather than rejected.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..models import Target

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when settings or a target file cannot be used"""


@dataclass
class Settings:
    """Engine settings"""
    interval_seconds: float = 5.0
    timeout_ms: int = 2000
    max_workers: int = 20
    stats_window_seconds: int = 300
    webhook_url: Optional[str] = None
    log_level: str = "INFO"


_SETTING_TYPES = {
    'interval_seconds': float,
    'timeout_ms': int,
    'max_workers': int,
    'stats_window_seconds': int,
    'webhook_url': str,
    'log_level': str,
}

_ENV_OVERRIDES = {
    'NETPULSE_INTERVAL': ('interval_seconds', float),
    'NETPULSE_TIMEOUT_MS': ('timeout_ms', int),
    'NETPULSE_MAX_WORKERS': ('max_workers', int),
    'NETPULSE_WEBHOOK_URL': ('webhook_url', str),
    'NETPULSE_LOG_LEVEL': ('log_level', str),
}


def _read_yaml(path: Union[str, Path]) -> Any:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"File not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}")


def _coerce(name: str, value: Any, kind: type) -> Any:
    if kind is str:
        return str(value)
    if isinstance(value, bool):
        raise ConfigError(f"Invalid value for {name}: {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid value for {name}: {value!r}")


def load_settings(path: Optional[Union[str, Path]] = None,
                  environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build Settings from an optional YAML file plus environment overrides.

    The file may hold the keys at top level or under a `settings:` mapping.

    Args:
        path: YAML settings file
        environ: Environment mapping, os.environ when omitted

    Returns:
        Settings instance
    """
    environ = os.environ if environ is None else environ
    settings = Settings()

    if path is not None:
        data = _read_yaml(path) or {}
        if isinstance(data, dict) and isinstance(data.get('settings'), dict):
            data = data['settings']
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")

        for key, value in data.items():
            if key not in _SETTING_TYPES:
                logger.warning(f"Ignoring unknown setting '{key}'")
                continue
            if value is None:
                continue
            setattr(settings, key, _coerce(key, value, _SETTING_TYPES[key]))

    for env_name, (attr, kind) in _ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw:
            setattr(settings, attr, _coerce(env_name, raw, kind))

    if settings.interval_seconds <= 0:
        raise ConfigError("interval_seconds must be positive")
    if settings.max_workers < 1:
        raise ConfigError("max_workers must be at least 1")
    if settings.timeout_ms < 0:
        raise ConfigError("timeout_ms must not be negative")

    return settings


def _looks_like_target(entry: Any) -> bool:
    return (
        isinstance(entry, dict)
        and isinstance(entry.get('id'), str)
        and isinstance(entry.get('name'), str)
        and isinstance(entry.get('host'), str)
        and isinstance(entry.get('port'), int)
        and not isinstance(entry.get('port'), bool)
    )


def parse_targets(data: Any) -> List[Target]:
    """
    Turn decoded target data into Target records.

    Accepts a list of mappings, or a mapping with a `targets:` list. Entries
    missing a string id/name/host or an integer port are skipped; a missing
    probe_type defaults to tcp.

    Raises:
        ConfigError: if the data is not a list of entries
    """
    if isinstance(data, dict):
        data = data.get('targets')
    if not isinstance(data, list):
        raise ConfigError("Target data must be a list")

    targets = []
    for entry in data:
        if not _looks_like_target(entry):
            logger.warning(f"Skipping malformed target entry: {entry!r}")
            continue
        targets.append(Target.from_dict(entry))
    return targets


def load_targets(path: Union[str, Path]) -> List[Target]:
    """
    Load targets from a YAML or JSON file.

    Args:
        path: Path to the targets file

    Returns:
        List of targets in file order
    """
    targets = parse_targets(_read_yaml(path))
    logger.info(f"Loaded {len(targets)} targets from {path}")
    return targets
