"""Shared helpers for CLI subcommands."""

from __future__ import annotations

import argparse

from pyflo2d.io.config import LoadOptions


def add_load_arguments(p: argparse.ArgumentParser) -> None:
    """Add the project path and load switches to a subcommand parser."""
    p.add_argument(
        "path",
        help="FLO-2D project directory or any file inside it",
    )
    p.add_argument(
        "--no-hdf5",
        action="store_true",
        help="Ignore TIMDEP.HDF5 and read the text output files",
    )
    p.add_argument(
        "--any-neighbor",
        action="store_true",
        help="Derive the cell size from the first neighbour in any direction",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )


def load_options_from_args(args: argparse.Namespace) -> LoadOptions:
    return LoadOptions(
        use_hdf5=not args.no_hdf5,
        any_neighbor_cell_size=args.any_neighbor,
    )
