"""Package configuration.

Defaults come from the packaged ``config.yaml``; environment variables
override individual keys:

  TASKDATE_WEEK_START       first day of the week, 1 (Monday) .. 7 (Sunday)
  TASKDATE_FUZZY_THRESHOLD  minimum score (0-100) for "did you mean" hints

Invalid overrides are ignored with a warning.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent / "config.yaml"

_FALLBACK = {
    "week_start": 1,
    "fuzzy_threshold": 80,
}

_ENV_OVERRIDES = {
    "week_start": ("TASKDATE_WEEK_START", 1, 7),
    "fuzzy_threshold": ("TASKDATE_FUZZY_THRESHOLD", 0, 100),
}

_CONFIG: Optional[Dict[str, Any]] = None


def _coerce_bounded_int(value: Any, low: int, high: int) -> Optional[int]:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    if low <= number <= high:
        return number
    return None


def _read_config_file() -> Dict[str, Any]:
    if not CONFIG_PATH.exists():
        return {}

    with open(CONFIG_PATH, 'r') as f:
        return yaml.safe_load(f) or {}


def _load_config() -> Dict[str, Any]:
    """Load settings from config.yaml, then apply environment overrides."""
    config = dict(_FALLBACK)

    file_config = _read_config_file()
    for key, (_, low, high) in _ENV_OVERRIDES.items():
        if key not in file_config:
            continue
        value = _coerce_bounded_int(file_config[key], low, high)
        if value is None:
            logger.warning(f"Ignoring invalid {key}={file_config[key]!r} in {CONFIG_PATH}")
            continue
        config[key] = value

    for key, (env_var, low, high) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_var)
        if raw is None or not raw.strip():
            continue
        value = _coerce_bounded_int(raw, low, high)
        if value is None:
            logger.warning(
                f"Ignoring {env_var}={raw!r}: expected an integer in [{low}, {high}]"
            )
            continue
        logger.info(f"Using {key}={value} from {env_var}")
        config[key] = value

    return config


def get_config() -> Dict[str, Any]:
    """Return a copy of the effective settings."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config()
    return dict(_CONFIG)


def reload_config() -> Dict[str, Any]:
    """Drop cached settings and reload them (picks up env changes)."""
    global _CONFIG
    _CONFIG = None
    return get_config()


def default_week_start() -> int:
    return get_config()["week_start"]


def fuzzy_threshold() -> int:
    return get_config()["fuzzy_threshold"]


__all__ = [
    "get_config",
    "reload_config",
    "default_week_start",
    "fuzzy_threshold",
]
