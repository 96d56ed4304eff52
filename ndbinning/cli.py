"""Command-line interface for inspecting axis and grid records.

Usage:
    python -m ndbinning.cli describe grid.yaml
    python -m ndbinning.cli validate grid.json
    python -m ndbinning.cli locate grid.yaml 0.25 0.75
"""

import argparse
import logging
import sys
import warnings

from ndbinning.config.grid_config import AxisConfig, GridConfig
from ndbinning.config.validation import (
    ConfigurationError,
    DimensionMismatchError,
    validate_config,
    warn_if_unsafe,
)
from ndbinning.io.variant import config_from_variant, load_record

logger = logging.getLogger(__name__)


def _load_grid_config(path) -> GridConfig:
    config = config_from_variant(load_record(path))
    if isinstance(config, AxisConfig):
        config = GridConfig(axes=[config])
    return config


def cmd_describe(args: argparse.Namespace) -> int:
    """Print the axes and storage size of a record."""
    config = _load_grid_config(args.path)
    validate_config(config)

    print("\n" + "=" * 60)
    print(f"GRID: {args.path}")
    print("=" * 60)
    print(f"  Value type:    {config.value_type.value}")
    print(f"  Dimensions:    {len(config.axes)}")
    print(f"  Storage cells: {config.storage_cells()}")

    print("\n[Axes]")
    for i, axis in enumerate(config.axes):
        if axis.edges is not None:
            domain = f"edges {axis.edges}"
        else:
            domain = f"[{axis.min}, {axis.max})"
        print(
            f"  {i}. {axis.axis_type.value:<11s} {axis.boundary_type.value:<6s} "
            f"{axis.get_n_bins():4d} bins  {domain}"
        )
    print("=" * 60)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a record, reporting errors and warnings."""
    config = _load_grid_config(args.path)

    is_valid, errors = validate_config(config, raise_on_error=False)
    if not is_valid:
        for err in errors:
            logger.error(err)
        logger.error(f"{args.path}: {len(errors)} error(s)")
        return 1

    with warnings.catch_warnings(record=True):
        warnings.simplefilter("always")
        messages = warn_if_unsafe(config)
    for msg in messages:
        logger.warning(msg)

    logger.info(f"{args.path}: valid ({len(messages)} warning(s))")
    return 0


def cmd_locate(args: argparse.Namespace) -> int:
    """Print the bins of a point."""
    grid = _load_grid_config(args.path).build()

    try:
        local = grid.get_local_bin_indices_from_point(args.point)
    except DimensionMismatchError as e:
        logger.error(str(e))
        return 1

    print(f"  Point:           {tuple(args.point)}")
    print(f"  Inside:          {grid.is_inside(args.point)}")
    print(f"  Local indices:   {local}")
    print(f"  Global index:    {grid.get_global_bin_index_from_local(local)}")
    print(f"  Closest points:  {sorted(grid.closest_points_indices_from_local(local))}")
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Inspect ndbinning axis and grid records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the axes of a grid record
  python -m ndbinning.cli describe grid.yaml

  # Check a record for errors and unsafe choices
  python -m ndbinning.cli validate grid.json

  # Find the bins of a point
  python -m ndbinning.cli locate grid.yaml 0.25 0.75
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    describe_parser = subparsers.add_parser("describe", help="Show axes and storage size")
    describe_parser.add_argument("path", help="YAML or JSON record file")

    validate_parser = subparsers.add_parser("validate", help="Validate a record")
    validate_parser.add_argument("path", help="YAML or JSON record file")

    locate_parser = subparsers.add_parser("locate", help="Find the bins of a point")
    locate_parser.add_argument("path", help="YAML or JSON record file")
    locate_parser.add_argument("point", type=float, nargs="+", help="Point coordinates")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    commands = {
        "describe": cmd_describe,
        "validate": cmd_validate,
        "locate": cmd_locate,
    }
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        return commands[args.command](args)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
