"""Unit tests for FLO-2D file configuration."""

from __future__ import annotations

from pathlib import Path

from pyflo2d.io.config import Flo2DFileConfig, LoadOptions, resolve_file


class TestResolveFile:
    """Tests for resolve_file()."""

    def test_exact_match(self, tmp_path: Path) -> None:
        (tmp_path / "CADPTS.DAT").write_text("")
        assert resolve_file(tmp_path, "CADPTS.DAT") == tmp_path / "CADPTS.DAT"

    def test_case_insensitive_match(self, tmp_path: Path) -> None:
        (tmp_path / "cadpts.dat").write_text("")
        assert resolve_file(tmp_path, "CADPTS.DAT").name == "cadpts.dat"

    def test_missing_returns_exact_path(self, tmp_path: Path) -> None:
        assert resolve_file(tmp_path, "FPLAIN.DAT") == tmp_path / "FPLAIN.DAT"

    def test_missing_directory(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope"
        assert resolve_file(missing, "FPLAIN.DAT") == missing / "FPLAIN.DAT"


class TestFlo2DFileConfig:
    """Tests for Flo2DFileConfig."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = Flo2DFileConfig(project_dir=tmp_path)
        assert config.cadpts_path == tmp_path / "CADPTS.DAT"
        assert config.fplain_path == tmp_path / "FPLAIN.DAT"
        assert config.timdep_path == tmp_path / "TIMDEP.OUT"
        assert config.depth_path == tmp_path / "DEPTH.OUT"
        assert config.velfp_path == tmp_path / "VELFP.OUT"
        assert config.veloc_path == tmp_path / "VELOC.OUT"
        assert config.timdep_hdf5_path == tmp_path / "TIMDEP.HDF5"

    def test_from_file_uri(self, tmp_path: Path) -> None:
        cadpts = tmp_path / "CADPTS.DAT"
        cadpts.write_text("")
        assert Flo2DFileConfig.from_uri(cadpts).project_dir == tmp_path

    def test_from_directory_uri(self, tmp_path: Path) -> None:
        assert Flo2DFileConfig.from_uri(str(tmp_path)).project_dir == tmp_path

    def test_custom_file_name(self, tmp_path: Path) -> None:
        config = Flo2DFileConfig(project_dir=tmp_path, timdep_file="RUN1.OUT")
        assert config.timdep_path == tmp_path / "RUN1.OUT"


class TestLoadOptions:
    def test_defaults(self) -> None:
        options = LoadOptions()
        assert options.use_hdf5
        assert not options.any_neighbor_cell_size
        assert options.include_bed_elevation
