"""
File configuration classes for FLO-2D model I/O.

These dataclasses define the file naming conventions of a FLO-2D project
and the switches that control how a project is loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Top-level group of FLO-2D HDF5 result files
RESULTS_GROUP = "TIMDEP NETCDF OUTPUT RESULTS"

# Time unit written to persisted groups
TIME_UNITS = "Hours"


def resolve_file(directory: Path, name: str) -> Path:
    """
    Locate ``name`` inside ``directory``.

    FLO-2D writes upper-case file names, but projects copied between
    systems often change the case. An exact match wins; otherwise the
    first case-insensitive match is returned. When nothing matches the
    exact path is returned so callers can report it.
    """
    exact = directory / name
    if exact.exists() or not directory.is_dir():
        return exact
    lowered = name.lower()
    for candidate in sorted(directory.iterdir()):
        if candidate.name.lower() == lowered:
            return candidate
    return exact


@dataclass
class Flo2DFileConfig:
    """
    Configuration for the files of a FLO-2D project.

    All files live in ``project_dir``.
    """

    project_dir: Path
    cadpts_file: str = "CADPTS.DAT"
    fplain_file: str = "FPLAIN.DAT"
    timdep_file: str = "TIMDEP.OUT"
    depth_file: str = "DEPTH.OUT"
    velfp_file: str = "VELFP.OUT"
    veloc_file: str = "VELOC.OUT"
    timdep_hdf5_file: str = "TIMDEP.HDF5"

    def __post_init__(self) -> None:
        self.project_dir = Path(self.project_dir)

    @classmethod
    def from_uri(cls, uri: Path | str) -> Flo2DFileConfig:
        """
        Build the configuration for the project containing ``uri``.

        ``uri`` is either the project directory or any file inside it.
        """
        path = Path(uri)
        project_dir = path if path.is_dir() else path.parent
        return cls(project_dir=project_dir)

    def _path(self, name: str) -> Path:
        return resolve_file(self.project_dir, name)

    @property
    def cadpts_path(self) -> Path:
        return self._path(self.cadpts_file)

    @property
    def fplain_path(self) -> Path:
        return self._path(self.fplain_file)

    @property
    def timdep_path(self) -> Path:
        return self._path(self.timdep_file)

    @property
    def depth_path(self) -> Path:
        return self._path(self.depth_file)

    @property
    def velfp_path(self) -> Path:
        return self._path(self.velfp_file)

    @property
    def veloc_path(self) -> Path:
        return self._path(self.veloc_file)

    @property
    def timdep_hdf5_path(self) -> Path:
        return self._path(self.timdep_hdf5_file)


@dataclass
class LoadOptions:
    """
    Switches for :func:`pyflo2d.io.loader.load_mesh`.

    Attributes:
        use_hdf5: Try TIMDEP.HDF5 before the text output files
        any_neighbor_cell_size: Derive the cell size from the first
            non-boundary neighbour slot instead of the north slot only
        include_bed_elevation: Attach the static "Bed Elevation" group
    """

    use_hdf5: bool = True
    any_neighbor_cell_size: bool = False
    include_bed_elevation: bool = True
