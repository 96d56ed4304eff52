"""Variant records for axes and grids.

A variant record is a plain ``{"type": ..., "payload": {...}}`` dictionary
that describes the configuration of an axis or a grid. Cell contents are
never part of a record: a grid restored from a record is empty.

Record formats:
    EquidistantAxis: {"min", "max", "nBins", "boundaryType"}
    VariableAxis:    {"edges", "boundaryType"}
    Grid:            {"valueType", "axes": [axis records]}

Import Policy:
    from ndbinning.io.variant import to_variant, from_variant, save_variant, load_variant

DO NOT use: from ndbinning.io.variant import *
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ndbinning.config.defaults import (
    DEFAULT_BOUNDARY_TYPE,
    DEFAULT_VALUE_TYPE,
    VARIANT_PAYLOAD_KEY,
    VARIANT_TYPE_KEY,
)
from ndbinning.config.enums import AxisBoundaryType, AxisType, ValueType
from ndbinning.config.grid_config import AxisConfig, GridConfig
from ndbinning.config.validation import ConfigurationError, validate_config
from ndbinning.core.axis import Axis
from ndbinning.core.grid import Grid

logger = logging.getLogger(__name__)

Variant = Dict[str, Any]

EQUIDISTANT_AXIS_TYPE = "EquidistantAxis"
VARIABLE_AXIS_TYPE = "VariableAxis"
GRID_TYPE = "Grid"


def _record(type_name: str, payload: Dict[str, Any]) -> Variant:
    return {VARIANT_TYPE_KEY: type_name, VARIANT_PAYLOAD_KEY: payload}


def _unpack(record: Any) -> tuple:
    if not isinstance(record, dict):
        raise ConfigurationError(f"Variant record must be a mapping, got {type(record).__name__}")
    if VARIANT_TYPE_KEY not in record or VARIANT_PAYLOAD_KEY not in record:
        raise ConfigurationError(
            f"Variant record needs '{VARIANT_TYPE_KEY}' and '{VARIANT_PAYLOAD_KEY}' keys, "
            f"got {sorted(record)}"
        )
    payload = record[VARIANT_PAYLOAD_KEY]
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Variant payload must be a mapping, got {type(payload).__name__}")
    return record[VARIANT_TYPE_KEY], payload


def _require(payload: Dict[str, Any], key: str, type_name: str) -> Any:
    if key not in payload:
        raise ConfigurationError(f"{type_name} payload is missing '{key}'")
    return payload[key]


def _number(payload: Dict[str, Any], key: str, type_name: str) -> float:
    value = _require(payload, key, type_name)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{type_name} payload '{key}' must be a number, got {value!r}") from exc


def _number_list(payload: Dict[str, Any], key: str, type_name: str) -> list:
    values = _require(payload, key, type_name)
    if not isinstance(values, list):
        raise ConfigurationError(f"{type_name} payload '{key}' must be a list, got {values!r}")
    try:
        return [float(v) for v in values]
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{type_name} payload '{key}' must hold numbers, got {values!r}") from exc


def _boundary_from_name(name: Any) -> AxisBoundaryType:
    try:
        return AxisBoundaryType(name)
    except ValueError as exc:
        options = ", ".join(b.value for b in AxisBoundaryType)
        raise ConfigurationError(f"Unknown boundary type {name!r}. Options: {options}") from exc


# ----------------------------------------------------------------------
# Axes
# ----------------------------------------------------------------------

def axis_to_variant(axis: Axis) -> Variant:
    """Variant record of an axis."""
    config = axis.to_config()
    if config.axis_type == AxisType.VARIABLE:
        return _record(VARIABLE_AXIS_TYPE, {
            "edges": [float(e) for e in config.edges],
            "boundaryType": config.boundary_type.value,
        })
    return _record(EQUIDISTANT_AXIS_TYPE, {
        "min": float(config.min),
        "max": float(config.max),
        "nBins": int(config.n_bins),
        "boundaryType": config.boundary_type.value,
    })


def axis_config_from_variant(record: Variant) -> AxisConfig:
    """Axis configuration described by a record, without validating it.

    Raises:
        ConfigurationError: If the record is malformed or not an axis record.
    """
    type_name, payload = _unpack(record)
    boundary = _boundary_from_name(payload.get("boundaryType", DEFAULT_BOUNDARY_TYPE.value))

    if type_name == EQUIDISTANT_AXIS_TYPE:
        return AxisConfig(
            axis_type=AxisType.EQUIDISTANT,
            boundary_type=boundary,
            min=_number(payload, "min", type_name),
            max=_number(payload, "max", type_name),
            n_bins=_require(payload, "nBins", type_name),
        )
    if type_name == VARIABLE_AXIS_TYPE:
        return AxisConfig(
            axis_type=AxisType.VARIABLE,
            boundary_type=boundary,
            edges=_number_list(payload, "edges", type_name),
        )
    raise ConfigurationError(f"Unknown axis record type {type_name!r}")


def axis_from_variant(record: Variant) -> Axis:
    """Rebuild an axis from its record.

    Raises:
        ConfigurationError: If the record is malformed or describes an
            invalid axis.
    """
    return axis_config_from_variant(record).build()


# ----------------------------------------------------------------------
# Grids
# ----------------------------------------------------------------------

def grid_to_variant(grid: Grid) -> Variant:
    """Variant record of a grid's configuration (cell contents excluded)."""
    try:
        value_type = ValueType.from_shape(grid.value_shape)
    except ValueError as exc:
        raise ConfigurationError(
            f"Grid with cell shape {grid.value_shape} has no serializable value type"
        ) from exc
    return _record(GRID_TYPE, {
        "valueType": value_type.value,
        "axes": [axis_to_variant(axis) for axis in grid.axes],
    })


def grid_config_from_variant(record: Variant) -> GridConfig:
    """Grid configuration described by a record, without validating it."""
    type_name, payload = _unpack(record)
    if type_name != GRID_TYPE:
        raise ConfigurationError(f"Expected a {GRID_TYPE} record, got {type_name!r}")
    try:
        value_type = ValueType(payload.get("valueType", DEFAULT_VALUE_TYPE.value))
    except ValueError as exc:
        raise ConfigurationError(f"Unknown value type {payload.get('valueType')!r}") from exc
    axes = _require(payload, "axes", type_name)
    if not isinstance(axes, list):
        raise ConfigurationError(f"{GRID_TYPE} payload 'axes' must be a list")
    return GridConfig(
        axes=[axis_config_from_variant(a) for a in axes],
        value_type=value_type,
    )


def grid_from_variant(record: Variant) -> Grid:
    """Rebuild an empty grid from its record.

    Raises:
        ConfigurationError: If the record is malformed or describes an
            invalid grid.
    """
    config = grid_config_from_variant(record)
    validate_config(config)
    return config.build()


# ----------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------

def to_variant(obj: Union[Axis, Grid]) -> Variant:
    """Variant record of an axis or grid."""
    if isinstance(obj, Axis):
        return axis_to_variant(obj)
    if isinstance(obj, Grid):
        return grid_to_variant(obj)
    raise TypeError(f"Cannot convert {type(obj).__name__} to a variant record")


def from_variant(record: Variant) -> Union[Axis, Grid]:
    """Rebuild an axis or grid, dispatching on the record type."""
    type_name, _ = _unpack(record)
    if type_name == GRID_TYPE:
        return grid_from_variant(record)
    return axis_from_variant(record)


def config_from_variant(record: Variant) -> Union[AxisConfig, GridConfig]:
    """Configuration described by a record, dispatching on the record type."""
    type_name, _ = _unpack(record)
    if type_name == GRID_TYPE:
        return grid_config_from_variant(record)
    return axis_config_from_variant(record)


# ----------------------------------------------------------------------
# Files
# ----------------------------------------------------------------------

def _is_json(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def save_variant(obj: Union[Axis, Grid], path: Union[str, Path]) -> Path:
    """Write the record of ``obj`` to ``path``.

    JSON is used for ``.json`` files, YAML otherwise.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    record = to_variant(obj)

    with open(path, "w", encoding="utf-8") as f:
        if _is_json(path):
            json.dump(record, f, indent=2)
        else:
            yaml.dump(record, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved {record[VARIANT_TYPE_KEY]} record to {path}")
    return path


def load_record(path: Union[str, Path]) -> Variant:
    """Read a variant record from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Variant file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            record = json.load(f) if _is_json(path) else yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Cannot parse {path}: {exc}") from exc

    logger.info(f"Loaded variant record from {path}")
    return record


def load_variant(path: Union[str, Path]) -> Union[Axis, Grid]:
    """Rebuild an axis or grid from a YAML or JSON file."""
    return from_variant(load_record(path))
