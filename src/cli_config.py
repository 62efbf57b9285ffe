"""Configuration file loading and merge with CLI arguments.

Precedence is CLI flag, then configuration file, then built-in default.
A configuration file may look like::

    verbose: true
    timeout: 10
    a:
      lockfile: https://example.com/Cargo.lock
      pkg_name: my-crate
      exclude: [windows-sys, winapi]
    b:
      lockfile: ./Cargo.lock
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import yaml

from constants import Constants
from errors import ConfigError
from universe.models import Spec

logger = logging.getLogger(__name__)


def comma_separated_list(value: Any) -> List[str]:
    """Split a comma-separated string (or list of strings) into names.

    Whitespace around items is stripped and empty items are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        raise ConfigError(f"expected a list or comma-separated string, got {value!r}")
    return [item.strip() for item in items if item.strip()]


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file.

    Args:
        config_path: Path to the file; None means no configuration.

    Returns:
        Configuration dict (empty when no path is given).

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not load config file {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    logger.debug("Loaded configuration from %s", config_path)
    return data


def _side_config(config: Dict[str, Any], side: str) -> Dict[str, Any]:
    section = config.get(side) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{side}' must be a mapping")
    return section


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _build_spec(args: Any, config: Dict[str, Any], side: str) -> Spec:
    suffix = side.upper()
    section = _side_config(config, side)
    src = _first(getattr(args, f"lockfile_{side}", None), section.get("lockfile"))
    if not src:
        raise ConfigError(f"No lockfile given for side {suffix}")
    cli_exclude = getattr(args, f"EXCLUDE_PKG_{suffix}", None)
    exclude = comma_separated_list(cli_exclude if cli_exclude is not None else section.get("exclude"))
    pkg_name = _first(getattr(args, f"PKG_NAME_{suffix}", None), section.get("pkg_name"))
    pkg_hash = _first(getattr(args, f"PKG_HASH_{suffix}", None), section.get("pkg_hash"))
    return Spec(
        src=str(src),
        pkg_name=None if pkg_name is None else str(pkg_name),
        pkg_hash=None if pkg_hash is None else str(pkg_hash),
        exclude_pkgs=set(exclude),
    )


def build_specs(args: Any, config: Dict[str, Any]) -> Tuple[Spec, Spec, bool]:
    """Merge CLI arguments and configuration into both sides' specs.

    Returns:
        (spec_a, spec_b, verbose)

    Raises:
        ConfigError: If a side has no lockfile location or a section is malformed.
    """
    spec_a = _build_spec(args, config, Constants.CONFIG_SIDES[0])
    spec_b = _build_spec(args, config, Constants.CONFIG_SIDES[1])
    verbose = bool(getattr(args, "VERBOSE", False) or config.get("verbose", False))
    return spec_a, spec_b, verbose


def resolve_timeout(args: Any, config: Dict[str, Any]) -> float:
    """HTTP timeout in seconds from CLI, config, or Constants.REQUEST_TIMEOUT."""
    value = _first(getattr(args, "TIMEOUT", None), config.get("timeout"), Constants.REQUEST_TIMEOUT)
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout: {value!r}") from e
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout}")
    return timeout
