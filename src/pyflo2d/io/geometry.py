"""
Mesh reconstruction from FLO-2D grid files.

FLO-2D never stores mesh vertices. The grid is described by:

- ``CADPTS.DAT``: cell center coordinates (``ID X Y``)
- ``FPLAIN.DAT``: cell connectivity and bed elevation
  (``ID N E S W MANNING BED_ELEV``, neighbour ``0`` = boundary)

Cells are uniform squares, so the cell size is recovered from the
distance between two neighbouring centers and each cell is expanded into
a quad whose corners are shared with the adjacent cells.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from pyflo2d.core.exceptions import IncompatibleMeshError
from pyflo2d.core.mesh import (
    NO_NEIGHBOR,
    NORTH,
    SOUTH,
    CellCenter,
    Mesh,
    Vertex,
    VertexIndex,
)
from pyflo2d.io.config import Flo2DFileConfig
from pyflo2d.io.flo2d_reader import (
    check_field_count,
    iter_records,
    parse_float,
    parse_int,
    require_file,
)

logger = logging.getLogger(__name__)

# Corner offsets (in units of half the cell size), in face winding order
CORNER_OFFSETS: tuple[tuple[int, int], ...] = ((1, -1), (1, 1), (-1, 1), (-1, -1))


def read_cell_centers(filepath: Path | str) -> list[CellCenter]:
    """
    Read cell center coordinates from a CADPTS.DAT file.

    Expected format (one line per cell)::

        ID  X  Y

    Args:
        filepath: Path to CADPTS.DAT

    Returns:
        Cells in file order, with 0-based ids and no neighbours yet

    Raises:
        NotFoundError: If the file does not exist
        MalformedRecordError: If a line is not ``ID X Y``
    """
    filepath = Path(filepath)
    require_file(filepath, "Cell center file")

    cells: list[CellCenter] = []
    for line_num, parts in iter_records(filepath):
        check_field_count(parts, 3, filepath, line_num)
        cell_id = parse_int(parts[0], "cell ID", filepath, line_num)
        x = parse_float(parts[1], "cell X", filepath, line_num)
        y = parse_float(parts[2], "cell Y", filepath, line_num)
        cells.append(CellCenter(id=cell_id - 1, x=x, y=y))

    logger.debug("Read %d cell centers from %s", len(cells), filepath)
    return cells


def read_connectivity(filepath: Path | str, cells: list[CellCenter]) -> NDArray[np.float64]:
    """
    Read cell connectivity and bed elevations from an FPLAIN.DAT file.

    Expected format (one line per cell)::

        ID  NORTH  EAST  SOUTH  WEST  MANNING_N  BED_ELEV

    The neighbour lists of ``cells`` are filled in place.

    Args:
        filepath: Path to FPLAIN.DAT
        cells: Cells read by :func:`read_cell_centers`

    Returns:
        Bed elevations in file order (one per cell)

    Raises:
        NotFoundError: If the file does not exist
        MalformedRecordError: If a line does not have 7 numeric fields
        IncompatibleMeshError: If a cell or neighbour id is out of range,
            or the number of records differs from the number of cells
    """
    filepath = Path(filepath)
    require_file(filepath, "Connectivity file")

    n_cells = len(cells)
    elevations: list[float] = []
    for line_num, parts in iter_records(filepath):
        check_field_count(parts, 7, filepath, line_num)
        cell_idx = parse_int(parts[0], "cell ID", filepath, line_num) - 1
        if cell_idx < 0 or cell_idx >= n_cells:
            raise IncompatibleMeshError(
                f"{filepath.name}:{line_num}: cell {cell_idx + 1} is not in the cell "
                f"center file ({n_cells} cells)"
            )
        conn = []
        for slot in range(4):
            neighbor = parse_int(parts[slot + 1], "neighbour ID", filepath, line_num) - 1
            if neighbor < NO_NEIGHBOR or neighbor >= n_cells:
                raise IncompatibleMeshError(
                    f"{filepath.name}:{line_num}: neighbour {neighbor + 1} of cell "
                    f"{cell_idx + 1} is out of range"
                )
            conn.append(neighbor)
        cells[cell_idx].conn = conn
        elevations.append(parse_float(parts[6], "bed elevation", filepath, line_num))

    if len(elevations) != n_cells:
        raise IncompatibleMeshError(
            f"{filepath.name} has {len(elevations)} records, expected {n_cells}"
        )

    logger.debug("Read connectivity for %d cells from %s", n_cells, filepath)
    return np.array(elevations, dtype=np.float64)


def calc_cell_size(cells: list[CellCenter], any_neighbor: bool = False) -> float:
    """
    Recover the uniform cell size from the first cell that has a neighbour.

    By default only the north neighbour is looked at: cells without one are
    skipped, and the size is the vertical distance to it. FLO-2D's own
    reader behaves this way. With ``any_neighbor=True`` the first
    non-boundary slot is used instead, measuring vertical distance for
    north/south and horizontal distance for east/west neighbours.

    Raises:
        IncompatibleMeshError: If no usable neighbour exists or the
            resulting size is zero
    """
    slots = range(4) if any_neighbor else (NORTH,)
    for cell in cells:
        for slot in slots:
            idx = cell.neighbor(slot)
            if idx == NO_NEIGHBOR:
                continue
            other = cells[idx]
            if slot in (NORTH, SOUTH):
                size = abs(other.y - cell.y)
            else:
                size = abs(other.x - cell.x)
            if size == 0.0:
                raise IncompatibleMeshError(
                    f"Cells {cell.id + 1} and {other.id + 1} share the same center"
                )
            return size
    raise IncompatibleMeshError("No cell has a neighbour; cannot determine cell size")


def corner_vertices(cell: CellCenter, half_cell_size: float) -> list[Vertex]:
    """Return the 4 corners of ``cell`` in face winding order."""
    return [
        Vertex(cell.x + dx * half_cell_size, cell.y + dy * half_cell_size)
        for dx, dy in CORNER_OFFSETS
    ]


def build_mesh(cells: list[CellCenter], half_cell_size: float, uri: str = "") -> Mesh:
    """
    Expand cells into quad faces, sharing corners between adjacent cells.

    Corners are merged through :class:`~pyflo2d.core.mesh.VertexIndex`;
    vertex indices follow the order in which corners are first seen.

    Args:
        cells: Grid cells in file order
        half_cell_size: Distance from a cell center to its edges
        uri: Source location stored on the mesh

    Returns:
        Mesh with one face per cell
    """
    index = VertexIndex()
    faces = np.empty((len(cells), 4), dtype=np.int64)
    for i, cell in enumerate(cells):
        for position, vertex in enumerate(corner_vertices(cell, half_cell_size)):
            faces[i, position] = index.add(vertex)

    return Mesh(vertices=index.to_array(), faces=faces, uri=uri)


def read_geometry(
    config: Flo2DFileConfig,
    any_neighbor: bool = False,
    uri: str = "",
) -> tuple[Mesh, NDArray[np.float64]]:
    """
    Read CADPTS.DAT and FPLAIN.DAT and reconstruct the mesh.

    Args:
        config: Project file configuration
        any_neighbor: See :func:`calc_cell_size`
        uri: Source location stored on the mesh

    Returns:
        Tuple of (mesh, bed elevation per face)

    Raises:
        MeshError: If the reconstructed faces do not reference four
            distinct vertices (corner keys aliased)
    """
    cells = read_cell_centers(config.cadpts_path)
    elevations = read_connectivity(config.fplain_path, cells)
    cell_size = calc_cell_size(cells, any_neighbor=any_neighbor)
    mesh = build_mesh(cells, cell_size / 2.0, uri=uri)
    mesh.validate()

    logger.info(
        "Reconstructed mesh with %d vertices and %d faces (cell size %g)",
        mesh.n_vertices,
        mesh.n_faces,
        cell_size,
    )
    return mesh, elevations
