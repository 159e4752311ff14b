"""
ASCII result readers for FLO-2D output files.

This module reads the optional text output of a FLO-2D run:

- ``TIMDEP.OUT``: time-varying depth and velocity per cell
- ``DEPTH.OUT``: maximum flow depth per cell
- ``VELFP.OUT`` / ``VELOC.OUT``: maximum floodplain / channel velocity

Each reader returns the dataset groups it produced; a missing file
produces no groups. All values are decoded with
:func:`pyflo2d.core.nodata.decode`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from pyflo2d.core.dataset import Dataset, DatasetGroup
from pyflo2d.core.exceptions import IncompatibleMeshError, MalformedRecordError
from pyflo2d.core.nodata import decode
from pyflo2d.io.config import Flo2DFileConfig
from pyflo2d.io.flo2d_reader import check_field_count, iter_records, parse_float

logger = logging.getLogger(__name__)

DEPTH = "Depth"
VELOCITY = "Velocity"
WATER_LEVEL = "Water Level"
BED_ELEVATION = "Bed Elevation"
MAXIMUMS_SUFFIX = "/Maximums"


def static_group(
    name: str,
    values: NDArray[np.float64],
    uri: str = "",
) -> DatasetGroup:
    """Wrap one array of face values into a static scalar group at time 0."""
    group = DatasetGroup(name=name, n_faces=len(values), uri=uri, is_scalar=True, static=True)
    group.add_dataset(Dataset(time=0.0, values=np.array(values, dtype=np.float64)))
    return group


@dataclass
class _TimeSlice:
    """Datasets of TIMDEP.OUT being filled for one output time."""

    depth: Dataset
    velocity: Dataset
    water_level: Dataset
    n_records: int = 0


def _skip_missing(filepath: Path) -> bool:
    if filepath.is_file():
        return False
    logger.debug("Optional file %s not found, skipping", filepath)
    return True


def read_timdep(
    filepath: Path | str,
    n_faces: int,
    elevations: NDArray[np.float64],
    uri: str = "",
) -> list[DatasetGroup]:
    """
    Read time-varying results from a TIMDEP.OUT file.

    Expected format::

        TIME                                  (one field, starts a time slice)
        ID  DEPTH  VEL  VEL_X  VEL_Y [WSE]    (one line per cell)

    The velocity magnitude and the optional water surface elevation columns
    are not used; water level is computed from depth and bed elevation.

    Args:
        filepath: Path to TIMDEP.OUT
        n_faces: Number of mesh faces
        elevations: Bed elevation per face
        uri: Source location stored on the groups

    Returns:
        Groups "Depth", "Velocity" and "Water Level" (only those with data)

    Raises:
        MalformedRecordError: On a record before the first time line or
            with an unexpected number of fields
        IncompatibleMeshError: If a time slice has more records than faces
    """
    filepath = Path(filepath)
    if _skip_missing(filepath):
        return []

    depth_group = DatasetGroup(name=DEPTH, n_faces=n_faces, uri=uri)
    velocity_group = DatasetGroup(name=VELOCITY, n_faces=n_faces, uri=uri, is_scalar=False)
    water_level_group = DatasetGroup(name=WATER_LEVEL, n_faces=n_faces, uri=uri)

    def flush(current: _TimeSlice | None) -> None:
        if current is None or current.n_records == 0:
            return
        depth_group.add_dataset(current.depth)
        velocity_group.add_dataset(current.velocity)
        water_level_group.add_dataset(current.water_level)

    current: _TimeSlice | None = None
    for line_num, parts in iter_records(filepath):
        n_fields = len(parts)
        if n_fields == 1:
            flush(current)
            time = parse_float(parts[0], "output time", filepath, line_num)
            current = _TimeSlice(
                depth=depth_group.new_dataset(time),
                velocity=velocity_group.new_dataset(time),
                water_level=water_level_group.new_dataset(time),
            )
        elif n_fields in (5, 6):
            if current is None:
                raise MalformedRecordError(
                    "Cell record before the first output time",
                    filepath=filepath,
                    line_number=line_num,
                )
            face = current.n_records
            if face == n_faces:
                raise IncompatibleMeshError(
                    f"{filepath.name}:{line_num}: more than {n_faces} records "
                    f"for time {current.depth.time}"
                )
            depth = decode(parse_float(parts[1], "depth", filepath, line_num))
            current.velocity.values[2 * face] = decode(
                parse_float(parts[3], "velocity X", filepath, line_num)
            )
            current.velocity.values[2 * face + 1] = decode(
                parse_float(parts[4], "velocity Y", filepath, line_num)
            )
            current.depth.values[face] = depth
            if not math.isnan(depth):
                current.water_level.values[face] = depth + elevations[face]
            current.n_records += 1
        else:
            raise MalformedRecordError(
                f"Expected 1, 5 or 6 fields, got {n_fields}",
                filepath=filepath,
                line_number=line_num,
            )
    flush(current)

    groups = [g for g in (depth_group, velocity_group, water_level_group) if g.n_datasets]
    logger.debug("Read %d output times from %s", depth_group.n_datasets, filepath)
    return groups


def read_maxima(filepath: Path, n_faces: int) -> NDArray[np.float64]:
    """
    Read one ``ID X Y VALUE`` file into a decoded per-face array.

    Faces without a record stay NaN.

    Raises:
        IncompatibleMeshError: If the file has more records than faces
        MalformedRecordError: If a line does not have 4 fields
    """
    values = np.full(n_faces, np.nan)
    face = 0
    for line_num, parts in iter_records(filepath):
        if face == n_faces:
            raise IncompatibleMeshError(
                f"{filepath.name}:{line_num}: more than {n_faces} records"
            )
        check_field_count(parts, 4, filepath, line_num)
        values[face] = decode(parse_float(parts[3], "maximum", filepath, line_num))
        face += 1
    if face < n_faces:
        logger.warning("%s has %d records for %d faces", filepath, face, n_faces)
    return values


def read_depth_maxima(
    filepath: Path | str,
    n_faces: int,
    elevations: NDArray[np.float64],
    uri: str = "",
) -> list[DatasetGroup]:
    """
    Read maximum depths from a DEPTH.OUT file.

    Expected format (one line per cell)::

        ID  X  Y  MAX_DEPTH

    Returns:
        Static groups "Depth/Maximums" and "Water Level/Maximums",
        or an empty list if the file does not exist
    """
    filepath = Path(filepath)
    if _skip_missing(filepath):
        return []

    max_depth = read_maxima(filepath, n_faces)
    # NaN depth stays NaN
    max_water_level = max_depth + elevations

    return [
        static_group(DEPTH + MAXIMUMS_SUFFIX, max_depth, uri),
        static_group(WATER_LEVEL + MAXIMUMS_SUFFIX, max_water_level, uri),
    ]


def read_velocity_maxima(
    velfp_path: Path | str,
    veloc_path: Path | str,
    n_faces: int,
    uri: str = "",
) -> list[DatasetGroup]:
    """
    Read maximum velocities from VELFP.OUT and VELOC.OUT.

    VELFP.OUT (floodplain) provides the base values. Where VELOC.OUT
    (channel) reports a value it replaces the floodplain one. Without
    VELFP.OUT nothing is produced, even when VELOC.OUT exists.

    Returns:
        Static group "Velocity/Maximums", or an empty list
    """
    velfp_path = Path(velfp_path)
    veloc_path = Path(veloc_path)
    if _skip_missing(velfp_path):
        return []

    max_velocity = read_maxima(velfp_path, n_faces)

    if not _skip_missing(veloc_path):
        channel = read_maxima(veloc_path, n_faces)
        has_channel = ~np.isnan(channel)
        max_velocity[has_channel] = channel[has_channel]

    return [static_group(VELOCITY + MAXIMUMS_SUFFIX, max_velocity, uri)]


def read_text_datasets(
    config: Flo2DFileConfig,
    n_faces: int,
    elevations: NDArray[np.float64],
    uri: str = "",
) -> list[DatasetGroup]:
    """Run all text output readers and return their groups in load order."""
    groups: list[DatasetGroup] = []
    groups.extend(read_timdep(config.timdep_path, n_faces, elevations, uri))
    groups.extend(read_depth_maxima(config.depth_path, n_faces, elevations, uri))
    groups.extend(read_velocity_maxima(config.velfp_path, config.veloc_path, n_faces, uri))
    return groups
