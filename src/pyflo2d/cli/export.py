"""
``pyflo2d export-hdf5`` subcommand.

Loads a FLO-2D project and writes its dataset groups to a FLO-2D HDF5
results file.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from pyflo2d.cli._common import add_load_arguments, load_options_from_args

logger = logging.getLogger(__name__)


def add_export_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``export-hdf5`` subcommand."""
    p = subparsers.add_parser(
        "export-hdf5",
        help="Write dataset groups to a FLO-2D HDF5 file.",
        description=(
            "Load a FLO-2D project and append its dataset groups to an HDF5 "
            "results file (created if it does not exist)."
        ),
    )
    add_load_arguments(p)
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="HDF5 file to write",
    )
    p.add_argument(
        "--groups",
        nargs="+",
        metavar="NAME",
        default=None,
        help="Names of the groups to export (default: all)",
    )
    p.set_defaults(func=run_export)


def run_export(args: argparse.Namespace) -> int:
    """Run the ``export-hdf5`` subcommand."""
    from pyflo2d.cli import configure_logging
    from pyflo2d.io.loader import load_mesh, persist

    configure_logging(args.debug)

    result = load_mesh(args.path, load_options_from_args(args))
    if not result.success:
        print(f"ERROR: {result.error}")
        return 1

    mesh = result.mesh
    assert mesh is not None
    groups = mesh.dataset_groups
    if args.groups:
        missing = [name for name in args.groups if name not in mesh.dataset_group_names]
        if missing:
            print(f"ERROR: Unknown dataset groups: {', '.join(missing)}")
            return 1
        groups = [g for g in groups if g.name in args.groups]

    output = str(args.output)
    for group in groups:
        error = persist(replace(group, uri=output))
        if error is not None:
            print(f"ERROR: {error}")
            return 1
        logger.info("Exported %s", group.name)

    print(f"Wrote {len(groups)} dataset groups to {output}")
    return 0
