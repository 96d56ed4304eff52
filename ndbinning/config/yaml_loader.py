"""Loader for defaults.yaml

defaults.yaml tunes two things: which grid types the type-erased registry
pre-registers (``any_grid``) and the thresholds used by warn_if_unsafe
(``warnings``). The file is parsed once, checked section by section and
cached. Missing sections or keys are allowed; callers pass their own
fallback to get_default.

Only enums are imported from the config package, so every other config
module can depend on this one.

Usage:
    from ndbinning.config.yaml_loader import get_default
    max_dims = get_default('any_grid.max_dimensions')
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from ndbinning.config.enums import ValueType

ENV_DEFAULTS_PATH = "NDBINNING_DEFAULTS_PATH"

_PACKAGED_DEFAULTS = Path(__file__).parent / "defaults.yaml"

# Keys that must hold a positive integer when present
_POSITIVE_INT_KEYS = {
    "any_grid": ("max_dimensions",),
    "warnings": ("max_storage_cells", "min_closed_bins"),
}


def defaults_path() -> Path:
    """Path of the defaults file in use.

    NDBINNING_DEFAULTS_PATH wins when it names an existing file, otherwise
    the defaults.yaml shipped next to this module is used.

    Raises:
        FileNotFoundError: If neither file exists.
    """
    env_path = os.getenv(ENV_DEFAULTS_PATH)
    if env_path and Path(env_path).is_file():
        return Path(env_path)

    if not _PACKAGED_DEFAULTS.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {_PACKAGED_DEFAULTS}\n"
            f"Set {ENV_DEFAULTS_PATH} environment variable if file is relocated."
        )
    return _PACKAGED_DEFAULTS


def check_defaults(cfg: Any) -> list[str]:
    """Problems in a parsed defaults mapping.

    Returns:
        List of error messages (empty if usable)
    """
    if not isinstance(cfg, dict):
        return [f"top level must be a mapping, got {type(cfg).__name__}"]

    errors = []
    for section, keys in _POSITIVE_INT_KEYS.items():
        values = cfg.get(section)
        if values is None:
            continue
        if not isinstance(values, dict):
            errors.append(f"'{section}' must be a mapping, got {type(values).__name__}")
            continue
        for key in keys:
            if key not in values:
                continue
            value = values[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                errors.append(f"'{section}.{key}' must be a positive integer, got {value!r}")

    any_grid = cfg.get("any_grid")
    if isinstance(any_grid, dict) and "value_types" in any_grid:
        value_types = any_grid["value_types"]
        known = [v.value for v in ValueType]
        if not isinstance(value_types, list):
            errors.append(f"'any_grid.value_types' must be a list, got {value_types!r}")
        else:
            unknown = [v for v in value_types if v not in known]
            if unknown:
                errors.append(
                    f"'any_grid.value_types' has unknown entries {unknown}. Options: {known}"
                )

    return errors


def _load_yaml_config() -> dict[str, Any]:
    path = defaults_path()
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        cfg = {}

    errors = check_defaults(cfg)
    if errors:
        raise ValueError(
            f"Invalid defaults file {path}:\n" + "\n".join(f"  - {err}" for err in errors)
        )
    return cfg


_CONFIG_CACHE: dict[str, Any] | None = None


def _get_config() -> dict[str, Any]:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = _load_yaml_config()
    return _CONFIG_CACHE


def get_defaults() -> dict[str, Any]:
    """Shallow copy of the whole defaults mapping."""
    return _get_config().copy()


def get_default(key_path: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key path.

    Args:
        key_path: Dotted path to the value (e.g., 'warnings.min_closed_bins')
        default: Returned if any part of the path is missing

    Example:
        >>> get_default('any_grid.max_dimensions')
        3
        >>> get_default('nonexistent.key', 'fallback')
        'fallback'
    """
    value = _get_config()
    for key in key_path.split("."):
        if not isinstance(value, dict) or key not in value:
            return default
        value = value[key]
    return default if value is None else value


def reload_defaults() -> None:
    """Drop the cache and read the defaults file again.

    Raises:
        ValueError: If the file fails check_defaults; the previous cache
            is kept in that case.
    """
    global _CONFIG_CACHE
    _CONFIG_CACHE = _load_yaml_config()
