"""
pyflo2d - Python package for FLO-2D flood model files.

This package provides tools for:
- Reconstructing the FLO-2D grid as a quad mesh
- Reading time-varying and maximum results from text and HDF5 output
- Writing result groups to FLO-2D HDF5 files
"""

from __future__ import annotations

__version__ = "0.1.0"

from pyflo2d.core.dataset import DataLocation, Dataset, DatasetGroup, Statistics
from pyflo2d.core.exceptions import (
    Flo2DError,
    IncompatibleMeshError,
    InvalidDataError,
    MalformedRecordError,
    MeshError,
    NotFoundError,
    UnsupportedLayoutError,
)
from pyflo2d.core.mesh import CellCenter, Mesh, Vertex
from pyflo2d.io.config import Flo2DFileConfig, LoadOptions
from pyflo2d.io.loader import (
    MeshLoadResult,
    load_dataset_group_into,
    load_mesh,
    persist,
    probe_dataset_source,
    probe_geometry,
)

__all__ = [
    "__version__",
    # Core classes
    "CellCenter",
    "Vertex",
    "Mesh",
    "DataLocation",
    "Dataset",
    "DatasetGroup",
    "Statistics",
    # Configuration
    "Flo2DFileConfig",
    "LoadOptions",
    # Loader
    "MeshLoadResult",
    "probe_geometry",
    "probe_dataset_source",
    "load_mesh",
    "load_dataset_group_into",
    "persist",
    # Exceptions
    "Flo2DError",
    "MeshError",
    "IncompatibleMeshError",
    "NotFoundError",
    "MalformedRecordError",
    "InvalidDataError",
    "UnsupportedLayoutError",
]
