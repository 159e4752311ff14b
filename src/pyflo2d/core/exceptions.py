"""Custom exceptions for pyflo2d package."""

from __future__ import annotations

from pathlib import Path


class Flo2DError(Exception):
    """Base exception for all pyflo2d errors."""

    pass


class MeshError(Flo2DError):
    """Error related to mesh operations."""

    pass


class IncompatibleMeshError(MeshError):
    """Record count does not match the mesh, or the target mesh is of the wrong kind."""

    pass


class Flo2DIOError(Flo2DError):
    """Error related to file I/O operations."""

    pass


class NotFoundError(Flo2DIOError):
    """A mandatory file or location is absent."""

    def __init__(self, message: str, filepath: Path | str | None = None) -> None:
        super().__init__(message)
        self.filepath = Path(filepath) if filepath is not None else None


class MalformedRecordError(Flo2DIOError):
    """Error raised when a record has the wrong field count or cannot be parsed."""

    def __init__(
        self,
        message: str,
        filepath: Path | str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.filepath = Path(filepath) if filepath is not None else None
        self.line_number = line_number

    def __str__(self) -> str:
        msg = super().__str__()
        if self.filepath is not None and self.line_number is not None:
            return f"{self.filepath.name}:{self.line_number}: {msg}"
        return msg


class InvalidDataError(Flo2DIOError):
    """HDF5 store is present but cannot be used."""

    pass


class UnsupportedLayoutError(Flo2DIOError):
    """Data layout cannot be stored in the FLO-2D format."""

    pass
