"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

import archipelago.config as config_module
from archipelago.config import (
    DecorationConfig,
    GenerationConfig,
    SamplerTuning,
    WorldConfig,
    find_config,
    list_configs,
    load_config,
)


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self) -> None:
        """Defaults match the reference world setup."""
        config = GenerationConfig()
        assert config.chunk.width == 40
        assert config.chunk.height == 40
        assert config.chunk.iso_level == 5.0
        assert config.scheduler.max_workers == 4
        assert config.scheduler.reprioritize_interval_s == 10.0

    def test_sampler_tuning_defaults(self) -> None:
        """Shaping constants default to the reference values."""
        tuning = SamplerTuning()
        assert tuning.cave_threshold == 0.6
        assert tuning.caldera_gain == 1.2
        assert tuning.swamp_gain == 1.2
        assert tuning.max_height_fraction == 0.95

    def test_sampler_tuning_is_hashable(self) -> None:
        """Tuning is frozen so chunk requests can be hashed."""
        assert hash(SamplerTuning()) == hash(SamplerTuning())

    def test_cell_size_grows_to_fit_islands(self) -> None:
        """A cell smaller than the widest island is enlarged."""
        world = WorldConfig(cell_size=100.0, island_size_max=240.0)
        assert world.cell_size == 360.0

    def test_cell_size_kept_when_large_enough(self) -> None:
        """A roomy cell is left alone."""
        assert WorldConfig(cell_size=1000.0).cell_size == 1000.0


class TestLoadConfig:
    """Tests for TOML loading."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        """Sections override defaults, missing sections keep them."""
        path = tmp_path / "custom.toml"
        path.write_text(
            "[world]\nseed = 7\n\n[chunk]\nwidth = 16\nheight = 24\n\n[sampler]\ncave_threshold = 0.5\n"
        )
        config = load_config(path)
        assert config.world.seed == 7
        assert config.chunk.width == 16
        assert config.chunk.height == 24
        assert config.sampler.cave_threshold == 0.5
        assert config.scheduler.max_workers == 4

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")


class TestFindConfig:
    """Tests for config discovery."""

    def test_bundled_configs_listed(self) -> None:
        """Bundled configs are discoverable by name."""
        names = list_configs()
        assert "default" in names
        assert "small" in names

    def test_find_by_name(self) -> None:
        """A bare name resolves into the configs directory."""
        path = find_config("default")
        assert path.name == "default.toml"
        config = load_config(path)
        assert config.world.seed == 12345

    def test_find_by_path(self, tmp_path: Path) -> None:
        """A path is used as-is."""
        path = tmp_path / "mine.toml"
        path.write_text("")
        assert find_config(str(path)) == path

    def test_unknown_name_raises(self) -> None:
        """Unknown names raise with the available configs listed."""
        with pytest.raises(FileNotFoundError, match="Available configs"):
            find_config("does-not-exist")

    def test_falls_back_to_working_directory(self, tmp_path: Path, monkeypatch) -> None:
        """Without a source tree the configs come from the working directory."""
        installed = tmp_path / "site" / "lib" / "archipelago"
        installed.mkdir(parents=True)
        monkeypatch.setattr(config_module, "__file__", str(installed / "config.py"))

        project = tmp_path / "project"
        (project / "configs").mkdir(parents=True)
        (project / "configs" / "local.toml").write_text("[world]\nseed = 3\n")
        monkeypatch.chdir(project)

        assert list_configs() == ["local"]
        path = find_config("local")
        assert path == project / "configs" / "local.toml"
        assert load_config(path).world.seed == 3


class TestDecorationConfig:
    """Tests for decoration settings."""

    def test_separation_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            DecorationConfig(min_separation=0.0)
