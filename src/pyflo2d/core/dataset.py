"""
Dataset classes for FLO-2D results.

This module provides the result containers attached to a mesh:

- :class:`Statistics`: Minimum/maximum summary (NaN-aware)
- :class:`Dataset`: Values for one time slice
- :class:`DatasetGroup`: Named, typed collection of datasets

Example
-------
Create a static scalar group on a 3-face mesh:

>>> import numpy as np
>>> from pyflo2d.core.dataset import Dataset, DatasetGroup
>>> group = DatasetGroup(name="Bed Elevation", n_faces=3, static=True)
>>> group.add_dataset(Dataset(time=0.0, values=np.array([1.0, 2.0, np.nan])))
>>> group.statistics.minimum, group.statistics.maximum
(1.0, 2.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
import numpy as np
from numpy.typing import NDArray

from pyflo2d.core.exceptions import IncompatibleMeshError


class DataLocation(Enum):
    """Mesh entity that dataset values are attached to."""

    ON_FACES = "faces"
    ON_VERTICES = "vertices"


@dataclass(frozen=True)
class Statistics:
    """Minimum and maximum of a set of values. NaN when no value is defined."""

    minimum: float = math.nan
    maximum: float = math.nan

    @property
    def is_defined(self) -> bool:
        return not (math.isnan(self.minimum) or math.isnan(self.maximum))

    @classmethod
    def from_values(cls, values: NDArray[np.float64]) -> Statistics:
        """Compute statistics, ignoring NaN entries."""
        finite = values[~np.isnan(values)]
        if finite.size == 0:
            return cls()
        return cls(minimum=float(finite.min()), maximum=float(finite.max()))

    def merge(self, other: Statistics) -> Statistics:
        """Return statistics covering both ``self`` and ``other``."""
        if not other.is_defined:
            return self
        if not self.is_defined:
            return other
        return Statistics(
            minimum=min(self.minimum, other.minimum),
            maximum=max(self.maximum, other.maximum),
        )


@dataclass
class Dataset:
    """
    Values of a dataset group at a single time.

    Attributes:
        time: Time of the slice (hours for FLO-2D output)
        values: Dense buffer of ``n_faces`` values (scalar) or
            ``2 * n_faces`` values interleaved x/y (vector)
        is_scalar: False for vector datasets
        statistics: Min/max of the values; vector datasets use the magnitude
    """

    time: float
    values: NDArray[np.float64]
    is_scalar: bool = True
    statistics: Statistics = field(default_factory=Statistics)

    def __post_init__(self) -> None:
        self.values = np.asarray(self.values, dtype=np.float64)

    @property
    def n_values(self) -> int:
        """Number of faces covered by this dataset."""
        if self.is_scalar:
            return len(self.values)
        return len(self.values) // 2

    def vector_components(self) -> NDArray[np.float64]:
        """Return vector values reshaped to ``(n_values, 2)``."""
        return self.values.reshape(-1, 2)

    def magnitude(self) -> NDArray[np.float64]:
        """Return scalar values, or the vector magnitude for vector datasets."""
        if self.is_scalar:
            return self.values
        xy = self.vector_components()
        return np.hypot(xy[:, 0], xy[:, 1])

    def compute_statistics(self) -> Statistics:
        """Recompute and store the statistics of this dataset."""
        self.statistics = Statistics.from_values(self.magnitude())
        return self.statistics


@dataclass
class DatasetGroup:
    """
    A named collection of datasets that share type and location.

    Parameters
    ----------
    name : str
        Group name, e.g. ``"Depth"`` or ``"Velocity/Maximums"``.
    n_faces : int
        Number of faces of the mesh the group belongs to.
    uri : str, optional
        Source (or persistence target) of the group.
    is_scalar : bool, optional
        False for vector groups (x/y interleaved values).
    location : DataLocation, optional
        Mesh entity the values refer to. FLO-2D only produces face data.
    static : bool, optional
        True for groups with a single time-independent dataset.
    """

    name: str
    n_faces: int
    uri: str = ""
    is_scalar: bool = True
    location: DataLocation = DataLocation.ON_FACES
    static: bool = False
    datasets: list[Dataset] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)

    @property
    def is_on_vertices(self) -> bool:
        return self.location is DataLocation.ON_VERTICES

    @property
    def is_time_varying(self) -> bool:
        return not self.static

    @property
    def n_datasets(self) -> int:
        return len(self.datasets)

    @property
    def values_per_dataset(self) -> int:
        """Expected buffer length of each member dataset."""
        return self.n_faces if self.is_scalar else 2 * self.n_faces

    @property
    def times(self) -> NDArray[np.float64]:
        return np.array([ds.time for ds in self.datasets], dtype=np.float64)

    def new_dataset(self, time: float) -> Dataset:
        """Create a NaN-filled dataset sized for this group (not yet added)."""
        return Dataset(
            time=time,
            values=np.full(self.values_per_dataset, np.nan),
            is_scalar=self.is_scalar,
        )

    def add_dataset(self, dataset: Dataset) -> None:
        """
        Append a dataset, computing its statistics.

        Raises:
            IncompatibleMeshError: If the dataset size does not fit the group
        """
        if len(dataset.values) != self.values_per_dataset:
            raise IncompatibleMeshError(
                f"Dataset for group '{self.name}' has {len(dataset.values)} values, "
                f"expected {self.values_per_dataset}"
            )
        dataset.is_scalar = self.is_scalar
        dataset.compute_statistics()
        self.datasets.append(dataset)
        self.statistics = self.statistics.merge(dataset.statistics)

    def __repr__(self) -> str:
        kind = "scalar" if self.is_scalar else "vector"
        return f"DatasetGroup(name='{self.name}', {kind}, n_datasets={self.n_datasets})"
