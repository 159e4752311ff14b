"""Unit tests for the pyflo2d exception hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

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


class TestHierarchy:
    """All pyflo2d errors derive from Flo2DError."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            MeshError,
            IncompatibleMeshError,
            Flo2DIOError,
            NotFoundError,
            MalformedRecordError,
            InvalidDataError,
            UnsupportedLayoutError,
        ],
    )
    def test_is_flo2d_error(self, exc_class: type) -> None:
        assert issubclass(exc_class, Flo2DError)

    def test_incompatible_mesh_is_mesh_error(self) -> None:
        assert issubclass(IncompatibleMeshError, MeshError)

    def test_io_errors(self) -> None:
        for exc_class in (NotFoundError, MalformedRecordError, InvalidDataError):
            assert issubclass(exc_class, Flo2DIOError)


class TestNotFoundError:
    def test_filepath(self) -> None:
        err = NotFoundError("missing", filepath="a/CADPTS.DAT")
        assert err.filepath == Path("a/CADPTS.DAT")
        assert str(err) == "missing"

    def test_no_filepath(self) -> None:
        assert NotFoundError("missing").filepath is None


class TestMalformedRecordError:
    def test_str_with_location(self) -> None:
        err = MalformedRecordError("Expected 3 fields, got 2", "dir/CADPTS.DAT", 7)
        assert str(err) == "CADPTS.DAT:7: Expected 3 fields, got 2"
        assert err.line_number == 7

    def test_str_without_location(self) -> None:
        err = MalformedRecordError("bad record")
        assert str(err) == "bad record"
        assert err.filepath is None
        assert err.line_number is None
