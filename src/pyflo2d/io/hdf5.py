"""
HDF5 file I/O handlers for FLO-2D time-varying results.

FLO-2D (and XMDF-compatible tools) store time-varying results as::

    /File Version                      float32 scalar
    /File Type                         string ("Xmdf")
    /TIMDEP NETCDF OUTPUT RESULTS/     attrs: Grouptype="Generic"
        {group name}/                  attrs: Grouptype, Data Type,
                                              DatasetCompression, TimeUnits
            Times                      float64 (n_times,)
            Values                     float32 (n_times, n_faces[, 2])
            Mins, Maxs                 float32 (n_times,)

Values use the FLO-2D no-data sentinel (0.0) and are decoded to NaN on
read and encoded back on write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import h5py
import numpy as np
from numpy.typing import NDArray

from pyflo2d.core.dataset import Dataset, DatasetGroup
from pyflo2d.core.exceptions import (
    IncompatibleMeshError,
    InvalidDataError,
    UnsupportedLayoutError,
)
from pyflo2d.core.nodata import decode_array, encode_array
from pyflo2d.io.config import RESULTS_GROUP, TIME_UNITS

logger = logging.getLogger(__name__)

FILE_VERSION = 1.0
FILE_TYPE = "Xmdf"
GROUP_TYPE_ATTR = "Grouptype"
RESULTS_GROUP_TYPE = "Generic"
SCALAR_GROUP_TYPE = "DATASET SCALAR"
VECTOR_GROUP_TYPE = "DATASET VECTOR"


def _attr_to_str(value: object) -> str:
    """Decode an HDF5 string attribute (fixed or variable length)."""
    if isinstance(value, np.ndarray):
        value = value.flat[0] if value.size else ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def probe_dataset_source(filepath: Path | str) -> bool:
    """Return True if ``filepath`` is an HDF5 file with FLO-2D results."""
    filepath = Path(filepath)
    if not filepath.is_file() or not h5py.is_hdf5(filepath):
        return False
    try:
        with h5py.File(filepath, "r") as f:
            return isinstance(f.get(RESULTS_GROUP), h5py.Group)
    except OSError:
        return False


@dataclass
class HDF5DatasetsResult:
    """Outcome of reading an HDF5 results file.

    Attributes:
        groups: Groups read (empty when reading failed)
        reason: Why the file could not be used, None on success
    """

    groups: list[DatasetGroup] = field(default_factory=list)
    reason: str | None = None

    @property
    def success(self) -> bool:
        return self.reason is None


@dataclass
class _GroupLayout:
    name: str
    is_vector: bool
    n_times: int


def _check_group(name: str, grp: h5py.Group, n_faces: int) -> _GroupLayout | str:
    """Validate one result group; return its layout or the reason it is unusable."""
    if GROUP_TYPE_ATTR not in grp.attrs:
        return f"group '{name}' has no {GROUP_TYPE_ATTR} attribute"
    times = grp.get("Times")
    if not isinstance(times, h5py.Dataset):
        return f"group '{name}' has no Times dataset"
    values = grp.get("Values")
    if not isinstance(values, h5py.Dataset):
        return f"group '{name}' has no Values dataset"

    for label, ds in (("Times", times), ("Values", values)):
        if ds.shape is None or not np.issubdtype(ds.dtype, np.number):
            return f"group '{name}' has non-numeric {label} data"

    is_vector = "vector" in _attr_to_str(grp.attrs[GROUP_TYPE_ATTR]).lower()
    n_times = int(times.size)
    expected = n_faces * n_times * (2 if is_vector else 1)
    if values.size != expected:
        return (
            f"group '{name}' has {values.size} values, expected {expected} "
            f"({n_times} times x {n_faces} faces)"
        )
    return _GroupLayout(name=name, is_vector=is_vector, n_times=n_times)


def _read_group(
    grp: h5py.Group, layout: _GroupLayout, n_faces: int, uri: str
) -> DatasetGroup:
    times = np.asarray(grp["Times"][()], dtype=np.float64).ravel()
    raw = np.asarray(grp["Values"][()], dtype=np.float32).ravel()
    values = decode_array(raw)

    group = DatasetGroup(
        name=layout.name,
        n_faces=n_faces,
        uri=uri,
        is_scalar=not layout.is_vector,
    )
    # Vector values are already interleaved x/y per face within a time row
    rows = values.reshape(layout.n_times, group.values_per_dataset)
    for time, row in zip(times, rows):
        group.add_dataset(Dataset(time=float(time), values=row.copy()))
    return group


def read_timdep_hdf5(
    filepath: Path | str,
    n_faces: int,
    uri: str = "",
) -> HDF5DatasetsResult:
    """
    Read all result groups from a FLO-2D HDF5 file.

    Every group is validated before any data is read, and a single unusable
    group makes the whole file unusable. Problems are reported through
    :attr:`HDF5DatasetsResult.reason` rather than raised.

    Args:
        filepath: Path to the HDF5 file (usually TIMDEP.HDF5)
        n_faces: Number of faces of the mesh the results belong to
        uri: Source location stored on the groups (defaults to ``filepath``)

    Returns:
        HDF5DatasetsResult with the groups in file order
    """
    filepath = Path(filepath)
    uri = uri or str(filepath)

    if not filepath.is_file():
        return HDF5DatasetsResult(reason=f"{filepath} does not exist")
    if not h5py.is_hdf5(filepath):
        return HDF5DatasetsResult(reason=f"{filepath} is not an HDF5 file")

    try:
        f = h5py.File(filepath, "r")
    except OSError as e:
        return HDF5DatasetsResult(reason=f"{filepath} cannot be opened: {e}")

    with f:
        results = f.get(RESULTS_GROUP)
        if not isinstance(results, h5py.Group):
            return HDF5DatasetsResult(reason=f"{filepath} has no '{RESULTS_GROUP}' group")

        layouts: list[_GroupLayout] = []
        for name, item in results.items():
            if not isinstance(item, h5py.Group):
                continue
            checked = _check_group(name, item, n_faces)
            if isinstance(checked, str):
                return HDF5DatasetsResult(reason=f"{filepath}: {checked}")
            layouts.append(checked)

        try:
            groups = [_read_group(results[lay.name], lay, n_faces, uri) for lay in layouts]
        except (OSError, ValueError, TypeError) as e:
            return HDF5DatasetsResult(reason=f"{filepath}: cannot read values: {e}")

    logger.debug("Read %d result groups from %s", len(groups), filepath)
    return HDF5DatasetsResult(groups=groups)


def safe_group_name(name: str) -> str:
    """Return ``name`` usable as a single HDF5 path component."""
    return name.replace("/", "_")


def unique_group_name(parent: h5py.Group, name: str) -> str:
    """Return ``name``, or ``name_0``, ``name_1``, ... if it is taken in ``parent``."""
    candidate = name
    suffix = 0
    while candidate in parent:
        candidate = f"{name}_{suffix}"
        suffix += 1
    return candidate


@dataclass
class _GroupArrays:
    times: NDArray[np.float64]
    values: NDArray[np.float32]
    mins: NDArray[np.float32]
    maxs: NDArray[np.float32]


def _group_arrays(group: DatasetGroup) -> _GroupArrays:
    """Collect a group into the arrays stored in the file."""
    per_dataset = group.values_per_dataset
    n_times = group.n_datasets

    times = np.empty(n_times, dtype=np.float64)
    values = np.empty((n_times, per_dataset), dtype=np.float32)
    mins = np.empty(n_times, dtype=np.float32)
    maxs = np.empty(n_times, dtype=np.float32)

    for i, ds in enumerate(group.datasets):
        if len(ds.values) != per_dataset:
            raise IncompatibleMeshError(
                f"Dataset {i} of group '{group.name}' has {len(ds.values)} values, "
                f"expected {per_dataset}"
            )
        stats = ds.statistics if ds.statistics.is_defined else ds.compute_statistics()
        times[i] = ds.time
        values[i] = encode_array(ds.values)
        mins[i] = stats.minimum
        maxs[i] = stats.maximum

    if group.is_scalar:
        shape: tuple[int, ...] = (n_times, group.n_faces)
    else:
        shape = (n_times, group.n_faces, 2)
    return _GroupArrays(times=times, values=values.reshape(shape), mins=mins, maxs=maxs)


class TimdepHDF5Writer:
    """
    Writer for FLO-2D results in HDF5 format.

    Opening a path that does not exist creates a new file with the FLO-2D
    bootstrap structure; an existing file must already contain the
    results group.

    Example::

        with TimdepHDF5Writer("TIMDEP.HDF5") as writer:
            name = writer.write_group(group)
    """

    def __init__(self, filepath: Path | str) -> None:
        """
        Initialize the writer.

        Args:
            filepath: Path to the HDF5 file
        """
        self.filepath = Path(filepath)
        self._file: h5py.File | None = None
        self.created = False

    def __enter__(self) -> TimdepHDF5Writer:
        if self.filepath.exists():
            if not h5py.is_hdf5(self.filepath):
                raise InvalidDataError(f"{self.filepath} is not an HDF5 file")
            self._file = h5py.File(self.filepath, "r+")
            if not isinstance(self._file.get(RESULTS_GROUP), h5py.Group):
                self._file.close()
                self._file = None
                raise InvalidDataError(f"{self.filepath} has no '{RESULTS_GROUP}' group")
        else:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            self._file = h5py.File(self.filepath, "w")
            self.created = True
            try:
                self._write_bootstrap()
            except Exception:
                self._file.close()
                self._file = None
                raise
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        if self._file:
            self._file.close()
            self._file = None

    def _write_bootstrap(self) -> None:
        """Write the file header and the empty results group."""
        assert self._file is not None
        self._file.create_dataset("File Version", data=np.float32(FILE_VERSION))
        self._file.create_dataset("File Type", data=np.bytes_(FILE_TYPE))
        results = self._file.create_group(RESULTS_GROUP)
        results.attrs[GROUP_TYPE_ATTR] = np.bytes_(RESULTS_GROUP_TYPE)
        logger.debug("Created FLO-2D HDF5 file %s", self.filepath)

    def write_group(self, group: DatasetGroup) -> str:
        """
        Append a dataset group to the results group.

        Args:
            group: Face-associated group to store

        Returns:
            Name of the HDF5 group that was written

        Raises:
            UnsupportedLayoutError: If the group is defined on vertices
            IncompatibleMeshError: If a dataset has the wrong size
        """
        if self._file is None:
            raise RuntimeError("File not open")
        if group.is_on_vertices:
            raise UnsupportedLayoutError(
                f"Group '{group.name}' is on vertices; FLO-2D stores face data only"
            )

        arrays = _group_arrays(group)
        results = self._file[RESULTS_GROUP]
        name = unique_group_name(results, safe_group_name(group.name))

        grp = results.create_group(name)
        grp.attrs["Data Type"] = np.int32(0)
        grp.attrs["DatasetCompression"] = np.int32(-1)
        grp.attrs[GROUP_TYPE_ATTR] = np.bytes_(
            SCALAR_GROUP_TYPE if group.is_scalar else VECTOR_GROUP_TYPE
        )
        grp.attrs["TimeUnits"] = np.bytes_(TIME_UNITS)

        grp.create_dataset("Maxs", data=arrays.maxs)
        grp.create_dataset("Mins", data=arrays.mins)
        grp.create_dataset("Times", data=arrays.times)
        grp.create_dataset("Values", data=arrays.values)

        logger.debug(
            "Wrote group '%s' (%d times) to %s", name, group.n_datasets, self.filepath
        )
        return name


def write_group_hdf5(filepath: Path | str, group: DatasetGroup) -> str:
    """
    Write one dataset group to a FLO-2D HDF5 file.

    Args:
        filepath: Path to the output file (created if missing)
        group: Group to write

    Returns:
        Name of the HDF5 group that was written

    Raises:
        UnsupportedLayoutError: If the group is defined on vertices
    """
    with TimdepHDF5Writer(filepath) as writer:
        return writer.write_group(group)
