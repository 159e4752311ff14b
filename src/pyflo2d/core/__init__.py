"""Core data structures for pyflo2d."""

from __future__ import annotations

from pyflo2d.core.dataset import DataLocation, Dataset, DatasetGroup, Statistics
from pyflo2d.core.exceptions import (
    Flo2DError,
    Flo2DIOError,
    IncompatibleMeshError,
    InvalidDataError,
    MalformedRecordError,
    MeshError,
    NotFoundError,
    UnsupportedLayoutError,
)
from pyflo2d.core.mesh import CellCenter, Mesh, Vertex, VertexIndex, vertex_key

__all__ = [
    # Mesh classes
    "CellCenter",
    "Vertex",
    "VertexIndex",
    "Mesh",
    "vertex_key",
    # Datasets
    "DataLocation",
    "Dataset",
    "DatasetGroup",
    "Statistics",
    # Exceptions
    "Flo2DError",
    "Flo2DIOError",
    "MeshError",
    "IncompatibleMeshError",
    "NotFoundError",
    "MalformedRecordError",
    "InvalidDataError",
    "UnsupportedLayoutError",
]
