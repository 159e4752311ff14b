"""Unit tests for dataset classes."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pyflo2d.core.dataset import DataLocation, Dataset, DatasetGroup, Statistics
from pyflo2d.core.exceptions import IncompatibleMeshError


class TestStatistics:
    """Tests for Statistics."""

    def test_default_undefined(self) -> None:
        stats = Statistics()
        assert not stats.is_defined
        assert math.isnan(stats.minimum)

    def test_from_values_ignores_nan(self) -> None:
        stats = Statistics.from_values(np.array([np.nan, 3.0, -1.0, np.nan]))
        assert stats == Statistics(minimum=-1.0, maximum=3.0)

    def test_from_all_nan(self) -> None:
        assert not Statistics.from_values(np.array([np.nan, np.nan])).is_defined

    def test_merge(self) -> None:
        merged = Statistics(0.0, 2.0).merge(Statistics(-1.0, 1.0))
        assert merged == Statistics(-1.0, 2.0)

    def test_merge_undefined(self) -> None:
        defined = Statistics(1.0, 2.0)
        assert Statistics().merge(defined) == defined
        assert defined.merge(Statistics()) == defined


class TestDataset:
    """Tests for Dataset."""

    def test_scalar(self) -> None:
        ds = Dataset(time=1.0, values=[1.0, 2.0, 3.0])
        assert ds.values.dtype == np.float64
        assert ds.n_values == 3
        np.testing.assert_array_equal(ds.magnitude(), [1.0, 2.0, 3.0])

    def test_vector(self) -> None:
        ds = Dataset(time=0.0, values=[3.0, 4.0, 0.0, 1.0], is_scalar=False)
        assert ds.n_values == 2
        np.testing.assert_array_equal(ds.vector_components(), [[3.0, 4.0], [0.0, 1.0]])
        np.testing.assert_allclose(ds.magnitude(), [5.0, 1.0])

    def test_vector_statistics_use_magnitude(self) -> None:
        ds = Dataset(time=0.0, values=[3.0, 4.0, 0.0, -2.0], is_scalar=False)
        stats = ds.compute_statistics()
        assert stats.minimum == pytest.approx(2.0)
        assert stats.maximum == pytest.approx(5.0)
        assert ds.statistics is stats


class TestDatasetGroup:
    """Tests for DatasetGroup."""

    def test_defaults(self) -> None:
        group = DatasetGroup(name="Depth", n_faces=4)
        assert group.is_scalar
        assert group.location is DataLocation.ON_FACES
        assert not group.is_on_vertices
        assert group.is_time_varying
        assert group.n_datasets == 0
        assert group.values_per_dataset == 4

    def test_vector_values_per_dataset(self) -> None:
        group = DatasetGroup(name="Velocity", n_faces=4, is_scalar=False)
        assert group.values_per_dataset == 8

    def test_new_dataset_is_unset(self) -> None:
        group = DatasetGroup(name="Velocity", n_faces=3, is_scalar=False)
        ds = group.new_dataset(2.5)
        assert ds.time == 2.5
        assert not ds.is_scalar
        assert len(ds.values) == 6
        assert np.isnan(ds.values).all()
        assert group.n_datasets == 0

    def test_add_dataset_updates_statistics(self) -> None:
        group = DatasetGroup(name="Depth", n_faces=2)
        group.add_dataset(Dataset(time=1.0, values=[1.0, np.nan]))
        group.add_dataset(Dataset(time=2.0, values=[0.5, 4.0]))
        assert group.n_datasets == 2
        np.testing.assert_array_equal(group.times, [1.0, 2.0])
        assert group.statistics == Statistics(0.5, 4.0)
        assert group.datasets[0].statistics == Statistics(1.0, 1.0)

    def test_add_dataset_wrong_size(self) -> None:
        group = DatasetGroup(name="Depth", n_faces=2)
        with pytest.raises(IncompatibleMeshError, match="expected 2"):
            group.add_dataset(Dataset(time=1.0, values=[1.0, 2.0, 3.0]))

    def test_add_dataset_takes_group_type(self) -> None:
        group = DatasetGroup(name="Velocity", n_faces=1, is_scalar=False)
        ds = Dataset(time=0.0, values=[3.0, 4.0])
        group.add_dataset(ds)
        assert not ds.is_scalar
        assert group.statistics.maximum == pytest.approx(5.0)

    def test_vertex_location(self) -> None:
        group = DatasetGroup(name="Depth", n_faces=1, location=DataLocation.ON_VERTICES)
        assert group.is_on_vertices

    def test_repr(self) -> None:
        group = DatasetGroup(name="Velocity", n_faces=1, is_scalar=False)
        assert repr(group) == "DatasetGroup(name='Velocity', vector, n_datasets=0)"
