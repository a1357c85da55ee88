# File: pagewindow/config.py

"""
Configuration for datasets: defaults, JSON option files and environment overrides.
"""

import os
import json
import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PAGEWINDOW_"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "page_size": 25,
    "load_horizon": 1,
    "unload_horizon": None,       # None means never unload
    "initial_read_offset": 0,
    "coalesce_notifications": False,
    "cancel_stale_fetches": False,
}

_INT_OPTIONS = ("page_size", "load_horizon", "initial_read_offset")
_BOOL_OPTIONS = ("coalesce_notifications", "cancel_stale_fetches")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class DatasetOptions:
    """Options a Dataset is built from (everything except fetch/observe)."""
    page_size: int = 25
    load_horizon: int = 1
    unload_horizon: Optional[float] = None
    initial_read_offset: int = 0
    coalesce_notifications: bool = False
    cancel_stale_fetches: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DatasetOptions":
        unknown = set(data) - set(DEFAULT_OPTIONS)
        if unknown:
            raise ConfigurationError(sorted(unknown)[0], f"Unknown dataset options: {', '.join(sorted(unknown))}")
        merged = {**DEFAULT_OPTIONS, **data}
        return cls(
            page_size=merged["page_size"],
            load_horizon=merged["load_horizon"],
            unload_horizon=merged["unload_horizon"],
            initial_read_offset=merged["initial_read_offset"],
            coalesce_notifications=merged["coalesce_notifications"],
            cancel_stale_fetches=merged["cancel_stale_fetches"],
        )


def _parse_int(option: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(option, f"{option} must be an integer, got {raw!r}") from e


def _parse_bool(option: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(option, f"{option} must be a boolean, got {raw!r}")


def _parse_horizon(option: str, raw: str) -> Optional[float]:
    if raw.strip().lower() in ("", "none", "inf", "infinity", "unbounded"):
        return None
    return _parse_int(option, raw)


def options_from_env(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect PAGEWINDOW_* overrides from the environment."""
    env = os.environ if env is None else env
    overrides: Dict[str, Any] = {}
    for option in DEFAULT_OPTIONS:
        raw = env.get(ENV_PREFIX + option.upper())
        if raw is None:
            continue
        if option in _INT_OPTIONS:
            overrides[option] = _parse_int(option, raw)
        elif option in _BOOL_OPTIONS:
            overrides[option] = _parse_bool(option, raw)
        else:
            overrides[option] = _parse_horizon(option, raw)
    if overrides:
        logger.debug(f"Dataset options from environment: {overrides}")
    return overrides


def load_options_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load dataset options from a JSON file. A missing file yields no options."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Dataset options file not found: {path}")
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading dataset options from {path}: {e}")
        raise ConfigurationError("path", f"Cannot read dataset options from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("path", f"Dataset options file {path} must contain a JSON object")
    # JSON has no infinity; accept the same spellings as the environment
    if isinstance(data.get("unload_horizon"), str):
        data["unload_horizon"] = _parse_horizon("unload_horizon", data["unload_horizon"])
    logger.info(f"Loaded dataset options from {path}")
    return data


def load_options(
    path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> DatasetOptions:
    """
    Build DatasetOptions from defaults, an optional JSON file and the environment.

    Later sources win: defaults < file < environment.

    Args:
        path: Optional JSON options file
        env: Environment mapping, os.environ by default

    Returns:
        DatasetOptions

    Raises:
        ConfigurationError: If the file or an override is malformed
    """
    options: Dict[str, Any] = {}
    if path is not None:
        options.update(load_options_file(path))
    options.update(options_from_env(env))
    if options.get("unload_horizon") == math.inf:
        options["unload_horizon"] = None
    return DatasetOptions.from_dict(options)
