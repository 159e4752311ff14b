"""
Mesh classes for FLO-2D model representation.

This module provides the core mesh data structures including:

- :class:`CellCenter`: A FLO-2D grid cell as stored in the input files
- :class:`Vertex`: A mesh vertex derived from cell corners
- :class:`VertexIndex`: Spatial deduplication of vertices
- :class:`Mesh`: The complete quad mesh with its dataset groups

FLO-2D stores only cell centers and the ids of the four cardinal
neighbours, so vertices and faces are always derived (see
:mod:`pyflo2d.io.geometry`).

Example
-------
Build a one-cell mesh by hand:

>>> import numpy as np
>>> from pyflo2d.core.mesh import Mesh
>>> mesh = Mesh(
...     vertices=np.array([[1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]),
...     faces=np.array([[0, 1, 2, 3]]),
... )
>>> print(f"Mesh: {mesh.n_vertices} vertices, {mesh.n_faces} faces")
Mesh: 4 vertices, 1 faces
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from pyflo2d.core.dataset import DatasetGroup
from pyflo2d.core.exceptions import IncompatibleMeshError, MeshError

# Neighbour slots of CellCenter.conn
NORTH = 0
EAST = 1
SOUTH = 2
WEST = 3

NO_NEIGHBOR = -1

MAX_VERTICES_PER_FACE = 4

# Scales of the vertex identity key. Coordinates whose keys compare equal
# are the same vertex; very large coordinates can alias.
VERTEX_KEY_X_SCALE = 1e6
VERTEX_KEY_Y_SCALE = 1e3


def vertex_key(x: float, y: float) -> float:
    """Return the identity key of the point ``(x, y)``."""
    return x * VERTEX_KEY_X_SCALE + y * VERTEX_KEY_Y_SCALE


@dataclass
class CellCenter:
    """
    A FLO-2D grid cell.

    Parameters
    ----------
    id : int
        Cell index (0-based; FLO-2D numbers cells from 1).
    x : float
        X coordinate of the cell center.
    y : float
        Y coordinate of the cell center.
    conn : list of int
        Neighbour cell indices ordered north, east, south, west.
        ``-1`` marks an open boundary.

    Examples
    --------
    >>> cell = CellCenter(id=0, x=5.0, y=5.0, conn=[2, 1, -1, -1])
    >>> cell.has_neighbor
    True
    >>> cell.neighbor(EAST)
    1
    """

    id: int
    x: float
    y: float
    conn: list[int] = field(default_factory=lambda: [NO_NEIGHBOR] * 4)

    @property
    def has_neighbor(self) -> bool:
        return any(c > NO_NEIGHBOR for c in self.conn)

    def neighbor(self, slot: int) -> int:
        """Return the neighbour index in ``slot`` (NORTH, EAST, SOUTH or WEST)."""
        return self.conn[slot]

    def __repr__(self) -> str:
        return f"CellCenter(id={self.id}, x={self.x}, y={self.y})"


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex."""

    x: float
    y: float

    @property
    def key(self) -> float:
        return vertex_key(self.x, self.y)

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.x, self.y)


class VertexIndex:
    """
    Insertion-ordered set of vertices keyed by :func:`vertex_key`.

    >>> index = VertexIndex()
    >>> index.add(Vertex(10.0, 0.0)), index.add(Vertex(0.0, 0.0)), index.add(Vertex(10.0, 0.0))
    (0, 1, 0)
    >>> len(index)
    2
    """

    def __init__(self) -> None:
        self._index: dict[float, int] = {}
        self._vertices: list[Vertex] = []

    def add(self, vertex: Vertex) -> int:
        """Return the index of ``vertex``, registering it when first seen."""
        key = vertex.key
        idx = self._index.get(key)
        if idx is None:
            idx = len(self._vertices)
            self._index[key] = idx
            self._vertices.append(vertex)
        return idx

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def to_array(self) -> NDArray[np.float64]:
        """Return vertex coordinates as an ``(n, 2)`` array."""
        if not self._vertices:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([v.coordinates for v in self._vertices], dtype=np.float64)


@dataclass
class Mesh:
    """
    A FLO-2D quad mesh and the results attached to it.

    Parameters
    ----------
    vertices : NDArray
        Vertex coordinates, shape ``(n_vertices, 2)``.
    faces : NDArray
        0-based vertex indices, shape ``(n_faces, 4)``.
    uri : str, optional
        File the mesh was loaded from.
    dataset_groups : list of DatasetGroup, optional
        Groups in the order they were attached.

    Examples
    --------
    >>> import numpy as np
    >>> mesh = Mesh(
    ...     vertices=np.array([[1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]),
    ...     faces=np.array([[0, 1, 2, 3]]),
    ... )
    >>> mesh.bounding_box
    (0.0, 0.0, 1.0, 1.0)
    """

    vertices: NDArray[np.float64]
    faces: NDArray[np.int64]
    uri: str = ""
    dataset_groups: list[DatasetGroup] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 2)
        self.faces = np.asarray(self.faces, dtype=np.int64).reshape(-1, MAX_VERTICES_PER_FACE)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    @property
    def x(self) -> NDArray[np.float64]:
        return self.vertices[:, 0]

    @property
    def y(self) -> NDArray[np.float64]:
        return self.vertices[:, 1]

    @property
    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return bounding box as (xmin, ymin, xmax, ymax)."""
        if self.n_vertices == 0:
            return (math.nan, math.nan, math.nan, math.nan)
        x = self.x
        y = self.y
        return (float(x.min()), float(y.min()), float(x.max()), float(y.max()))

    @property
    def dataset_group_names(self) -> list[str]:
        return [g.name for g in self.dataset_groups]

    def get_dataset_group(self, name: str) -> DatasetGroup:
        """Get a dataset group by name. Raises KeyError if not found."""
        for group in self.dataset_groups:
            if group.name == name:
                return group
        raise KeyError(name)

    def add_dataset_group(self, group: DatasetGroup) -> None:
        """
        Attach a dataset group to the mesh.

        Raises:
            IncompatibleMeshError: If the group was built for another face count
        """
        if group.n_faces != self.n_faces:
            raise IncompatibleMeshError(
                f"Group '{group.name}' has {group.n_faces} faces, mesh has {self.n_faces}"
            )
        self.dataset_groups.append(group)

    def validate(self) -> None:
        """
        Validate mesh integrity.

        Raises:
            MeshError: If mesh is invalid
        """
        if self.n_vertices == 0:
            raise MeshError("Mesh has no vertices")
        if self.n_faces == 0:
            raise MeshError("Mesh has no faces")
        if self.faces.min() < 0 or self.faces.max() >= self.n_vertices:
            raise MeshError("Mesh has face vertex references out of range")
        for i, face in enumerate(self.faces):
            if len(set(face.tolist())) != MAX_VERTICES_PER_FACE:
                raise MeshError(f"Face {i} has duplicate vertices")

    def __repr__(self) -> str:
        return (
            f"Mesh(n_vertices={self.n_vertices}, n_faces={self.n_faces}, "
            f"n_groups={len(self.dataset_groups)})"
        )
