"""
FLO-2D project loader.

This module provides the entry points for reading a FLO-2D project into a
:class:`~pyflo2d.core.mesh.Mesh` and for writing result groups back to
HDF5. Errors are returned as values at this boundary:

- :func:`load_mesh` returns a :class:`MeshLoadResult`
- :func:`load_dataset_group_into` and :func:`persist` return the error,
  or None on success

Loading order:

1. Geometry from CADPTS.DAT and FPLAIN.DAT (mandatory)
2. Static "Bed Elevation" group
3. Result groups from TIMDEP.HDF5, or, if that file is missing or unusable,
   from the text output files (TIMDEP.OUT, DEPTH.OUT, VELFP.OUT, VELOC.OUT)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pyflo2d.core.dataset import DatasetGroup
from pyflo2d.core.exceptions import (
    Flo2DError,
    IncompatibleMeshError,
    InvalidDataError,
    NotFoundError,
    UnsupportedLayoutError,
)
from pyflo2d.core.mesh import Mesh
from pyflo2d.io.ascii import BED_ELEVATION, read_text_datasets, static_group
from pyflo2d.io.config import Flo2DFileConfig, LoadOptions
from pyflo2d.io.geometry import read_geometry
from pyflo2d.io.hdf5 import probe_dataset_source, read_timdep_hdf5, write_group_hdf5

logger = logging.getLogger(__name__)

__all__ = [
    "MeshLoadResult",
    "load_dataset_group_into",
    "load_mesh",
    "persist",
    "probe_dataset_source",
    "probe_geometry",
]


@dataclass
class MeshLoadResult:
    """Result of loading a FLO-2D project.

    Attributes:
        mesh: The loaded mesh (None if loading failed)
        error: The error that aborted the load
        warnings: Non-fatal problems, e.g. why TIMDEP.HDF5 was not used
        used_hdf5: Whether result groups came from TIMDEP.HDF5
    """

    mesh: Mesh | None = None
    error: Flo2DError | None = None
    warnings: list[str] = field(default_factory=list)
    used_hdf5: bool = False

    @property
    def success(self) -> bool:
        """Whether the mesh was loaded successfully."""
        return self.mesh is not None and self.error is None


def probe_geometry(uri: Path | str) -> bool:
    """Return True if the mandatory grid files exist next to ``uri``."""
    config = Flo2DFileConfig.from_uri(uri)
    return config.cadpts_path.is_file() and config.fplain_path.is_file()


def load_mesh(uri: Path | str, options: LoadOptions | None = None) -> MeshLoadResult:
    """
    Load a FLO-2D project.

    Args:
        uri: Project directory or any file inside it
        options: Load switches (defaults to :class:`LoadOptions`)

    Returns:
        MeshLoadResult; on failure ``mesh`` is None and ``error`` is set

    Example::

        result = load_mesh("project/CADPTS.DAT")
        if result.success:
            print(result.mesh.dataset_group_names)
    """
    options = options or LoadOptions()
    config = Flo2DFileConfig.from_uri(uri)
    uri = str(uri)
    result = MeshLoadResult()

    try:
        mesh, elevations = read_geometry(
            config, any_neighbor=options.any_neighbor_cell_size, uri=uri
        )

        if options.include_bed_elevation:
            mesh.add_dataset_group(static_group(BED_ELEVATION, elevations, uri))

        hdf5_groups: list[DatasetGroup] | None = None
        if options.use_hdf5:
            hdf5 = read_timdep_hdf5(config.timdep_hdf5_path, mesh.n_faces)
            if hdf5.success:
                hdf5_groups = hdf5.groups
            else:
                logger.info("Not using HDF5 results: %s", hdf5.reason)
                result.warnings.append(f"HDF5 results not used: {hdf5.reason}")

        if hdf5_groups is not None:
            groups = hdf5_groups
            result.used_hdf5 = True
        else:
            groups = read_text_datasets(config, mesh.n_faces, elevations, uri)

        for group in groups:
            mesh.add_dataset_group(group)
    except Flo2DError as e:
        logger.error("Failed to load FLO-2D project %s: %s", uri, e)
        result.error = e
        return result

    logger.info(
        "Loaded %s: %d faces, %d dataset groups",
        uri,
        mesh.n_faces,
        len(mesh.dataset_groups),
    )
    result.mesh = mesh
    return result


def load_dataset_group_into(mesh: Mesh, uri: Path | str) -> Flo2DError | None:
    """
    Add the result groups of an HDF5 file to an existing mesh.

    Either all groups of the file are added or none.

    Args:
        mesh: Mesh the results belong to
        uri: Path to the HDF5 results file

    Returns:
        None on success, otherwise IncompatibleMeshError (not a Mesh),
        NotFoundError (missing file) or InvalidDataError (unusable file)
    """
    if not isinstance(mesh, Mesh):
        return IncompatibleMeshError(f"Expected a Mesh, got {type(mesh).__name__}")

    path = Path(uri)
    if not path.is_file():
        return NotFoundError(f"Results file not found: {path}", filepath=path)

    hdf5 = read_timdep_hdf5(path, mesh.n_faces)
    if not hdf5.success:
        logger.warning("Cannot read results from %s: %s", path, hdf5.reason)
        return InvalidDataError(hdf5.reason)

    for group in hdf5.groups:
        mesh.add_dataset_group(group)
    return None


def persist(group: DatasetGroup) -> Flo2DError | None:
    """
    Write a dataset group to the HDF5 file named by ``group.uri``.

    The file is created with the FLO-2D structure when it does not exist.

    Returns:
        None on success, otherwise the error (UnsupportedLayoutError for
        vertex data, InvalidDataError when the file cannot be used)
    """
    if group.is_on_vertices:
        logger.warning("Group '%s' is on vertices; FLO-2D stores face data only", group.name)
        return UnsupportedLayoutError(
            f"Group '{group.name}' is on vertices; FLO-2D stores face data only"
        )
    if not group.uri:
        return NotFoundError(f"Group '{group.name}' has no target file")

    try:
        name = write_group_hdf5(group.uri, group)
    except Flo2DError as e:
        logger.error("Failed to persist group '%s' to %s: %s", group.name, group.uri, e)
        return e
    except (OSError, ValueError) as e:
        logger.error("Failed to persist group '%s' to %s: %s", group.name, group.uri, e)
        return InvalidDataError(f"Cannot write {group.uri}: {e}")

    logger.info("Persisted group '%s' as '%s' in %s", group.name, name, group.uri)
    return None
