"""I/O handlers for FLO-2D file formats."""

from __future__ import annotations

from pyflo2d.io.ascii import (
    read_depth_maxima,
    read_text_datasets,
    read_timdep,
    read_velocity_maxima,
)
from pyflo2d.io.config import Flo2DFileConfig, LoadOptions
from pyflo2d.io.geometry import (
    build_mesh,
    calc_cell_size,
    read_cell_centers,
    read_connectivity,
    read_geometry,
)
from pyflo2d.io.hdf5 import (
    HDF5DatasetsResult,
    TimdepHDF5Writer,
    probe_dataset_source,
    read_timdep_hdf5,
    write_group_hdf5,
)
from pyflo2d.io.loader import (
    MeshLoadResult,
    load_dataset_group_into,
    load_mesh,
    persist,
    probe_geometry,
)

__all__ = [
    # Configuration
    "Flo2DFileConfig",
    "LoadOptions",
    # Geometry
    "read_cell_centers",
    "read_connectivity",
    "calc_cell_size",
    "build_mesh",
    "read_geometry",
    # ASCII results
    "read_timdep",
    "read_depth_maxima",
    "read_velocity_maxima",
    "read_text_datasets",
    # HDF5 results
    "HDF5DatasetsResult",
    "TimdepHDF5Writer",
    "probe_dataset_source",
    "read_timdep_hdf5",
    "write_group_hdf5",
    # Loader
    "MeshLoadResult",
    "probe_geometry",
    "load_mesh",
    "load_dataset_group_into",
    "persist",
]
