"""
``pyflo2d info`` subcommand.

Loads a FLO-2D project and prints the mesh size, extent and dataset groups.
"""

from __future__ import annotations

import argparse
import logging

from pyflo2d.cli._common import add_load_arguments, load_options_from_args

logger = logging.getLogger(__name__)


def add_info_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``info`` subcommand."""
    p = subparsers.add_parser(
        "info",
        help="Summarize a FLO-2D project.",
        description="Load a FLO-2D project and print its mesh and dataset groups.",
    )
    add_load_arguments(p)
    p.set_defaults(func=run_info)


def run_info(args: argparse.Namespace) -> int:
    """Run the ``info`` subcommand."""
    from pyflo2d.cli import configure_logging
    from pyflo2d.io.loader import load_mesh

    configure_logging(args.debug)

    result = load_mesh(args.path, load_options_from_args(args))
    if not result.success:
        print(f"ERROR: {result.error}")
        return 1

    mesh = result.mesh
    assert mesh is not None
    xmin, ymin, xmax, ymax = mesh.bounding_box
    print(f"Mesh: {mesh.n_vertices} vertices, {mesh.n_faces} faces")
    print(f"Extent: ({xmin:g}, {ymin:g}) to ({xmax:g}, {ymax:g})")
    print(f"Results source: {'HDF5' if result.used_hdf5 else 'text files'}")
    for warning in result.warnings:
        print(f"  note: {warning}")

    print(f"Dataset groups ({len(mesh.dataset_groups)}):")
    for group in mesh.dataset_groups:
        kind = "scalar" if group.is_scalar else "vector"
        timing = "static" if group.static else f"{group.n_datasets} times"
        stats = group.statistics
        print(
            f"  {group.name:<24} {kind:<7} {timing:<12} "
            f"min={stats.minimum:g} max={stats.maximum:g}"
        )
    return 0
