"""Pytest configuration and fixtures for pyflo2d tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

# 2x2 grid of 10 ft cells:
#
#     3 | 4
#     --+--
#     1 | 2
#
# Cell centers at (5, 5), (15, 5), (5, 15), (15, 15).

CADPTS = """\
1 5.0 5.0
2 15.0 5.0
3 5.0 15.0
4 15.0 15.0
"""

FPLAIN = """\
1 3 2 0 0 0.030 100.0
2 4 0 0 1 0.030 101.0
3 0 4 1 0 0.030 102.0
4 0 0 2 3 0.030 103.0
"""

TIMDEP = """\
1.00
1 0.500 1.118 1.000 0.500
2 0.000 0.000 0.000 0.000
3 1.500 2.000 0.000 2.000
4 0.200 0.300 0.300 0.000
2.00
1 0.800 1.000 0.600 0.800 100.800
2 0.100 0.500 0.300 0.400 101.100
3 2.000 2.500 1.500 2.000 104.000
4 0.000 0.000 0.000 0.000 0.000
"""

DEPTH = """\
1 5.0 5.0 1.5
2 15.0 5.0 0.0
3 5.0 15.0 2.5
4 15.0 15.0 0.7
"""

VELFP = """\
1 5.0 5.0 2.0
2 15.0 5.0 0.0
3 5.0 15.0 1.0
4 15.0 15.0 0.5
"""

VELOC = """\
1 5.0 5.0 0.0
2 15.0 5.0 3.0
3 5.0 15.0 0.0
4 15.0 15.0 0.0
"""


def write_project(
    directory: Path,
    timdep: bool = True,
    depth: bool = True,
    velfp: bool = True,
    veloc: bool = True,
) -> Path:
    """Write the 2x2 FLO-2D project into ``directory`` and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "CADPTS.DAT").write_text(CADPTS)
    (directory / "FPLAIN.DAT").write_text(FPLAIN)
    if timdep:
        (directory / "TIMDEP.OUT").write_text(TIMDEP)
    if depth:
        (directory / "DEPTH.OUT").write_text(DEPTH)
    if velfp:
        (directory / "VELFP.OUT").write_text(VELFP)
    if veloc:
        (directory / "VELOC.OUT").write_text(VELOC)
    return directory


@pytest.fixture
def grid_dir(tmp_path: Path) -> Path:
    """Project directory with only the grid files."""
    return write_project(
        tmp_path / "grid", timdep=False, depth=False, velfp=False, veloc=False
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory with grid files and all text outputs."""
    return write_project(tmp_path / "project")


@pytest.fixture
def bed_elevations() -> np.ndarray:
    """Bed elevation per cell of the 2x2 grid."""
    return np.array([100.0, 101.0, 102.0, 103.0])


@pytest.fixture
def expected_faces() -> np.ndarray:
    """Vertex indices of the 2x2 grid faces."""
    return np.array(
        [
            [0, 1, 2, 3],
            [4, 5, 1, 0],
            [1, 6, 7, 2],
            [5, 8, 6, 1],
        ]
    )


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory writing the 2x2 project with a chosen set of output files."""

    def _make(name: str = "custom", **files: bool) -> Path:
        return write_project(tmp_path / name, **files)

    return _make
