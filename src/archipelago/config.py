"""Generation configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WorldConfig(BaseModel):
    """World grid and island placement parameters."""

    seed: int = Field(default=12345, description="World seed mixed into every draw")
    cell_size: float = Field(default=600.0, description="World grid cell edge length")
    island_size_min: float = Field(default=120.0, description="Minimum island width")
    island_size_max: float = Field(default=240.0, description="Maximum island width")
    island_threshold: float = Field(
        default=0.25, description="Presence noise above which a cell holds an island"
    )

    @model_validator(mode="after")
    def _fit_islands(self) -> "WorldConfig":
        # A cell must be able to hold the widest island with room to offset it
        if self.cell_size < self.island_size_max:
            self.cell_size = self.island_size_max * 1.5
        return self


class ChunkConfig(BaseModel):
    """Chunk volume parameters."""

    width: int = Field(default=40, gt=0, description="Chunk edge length along x and z")
    height: int = Field(default=40, gt=0, description="Chunk edge length along y")
    iso_level: float = Field(default=5.0, description="Density of the extracted surface")


class SchedulerConfig(BaseModel):
    """Job scheduler parameters."""

    max_workers: int = Field(default=4, ge=1, description="Worker thread ceiling")
    reprioritize_interval_s: float = Field(
        default=10.0, description="Seconds between pending queue re-sorts"
    )
    max_priority: float = Field(
        default=100000.0, description="Cap applied to viewer distance priorities"
    )


class SamplerTuning(BaseModel):
    """Shaping constants of the density sampler."""

    model_config = ConfigDict(frozen=True)

    hill_threshold: float = Field(
        default=0.1, description="Accumulated density before hills are added"
    )
    hill_gain: float = Field(default=10.0, description="Hill noise amplitude")
    cave_threshold: float = Field(
        default=0.6, description="Cave noise above which carving is amplified"
    )
    cave_strong_gain: float = Field(default=50.0, description="Amplified cave gain")
    cave_weak_gain: float = Field(default=10.0, description="Regular cave gain")
    cave_secondary_gain: float = Field(
        default=10.0, description="Gain of the low frequency cave octave"
    )
    caldera_gain: float = Field(default=1.2, description="Caldera depth multiplier")
    swamp_gain: float = Field(default=1.2, description="Swamp flattening multiplier")
    max_height_fraction: float = Field(
        default=0.95, description="Density ceiling as a fraction of island half height"
    )


class DecorationConfig(BaseModel):
    """Decoration site selection parameters."""

    facing_up_threshold: float = Field(
        default=0.8, description="Minimum normal y component of a site"
    )
    min_separation: float = Field(
        default=5.0, gt=0.0, description="Minimum distance between sites"
    )
    variants: int = Field(default=1, ge=1, description="Number of decoration variants")


class GenerationConfig(BaseModel):
    """Complete configuration for terrain generation."""

    world: WorldConfig = Field(default_factory=WorldConfig)
    chunk: ChunkConfig = Field(default_factory=ChunkConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    sampler: SamplerTuning = Field(default_factory=SamplerTuning)
    decoration: DecorationConfig = Field(default_factory=DecorationConfig)


def load_config(config_path: Path) -> GenerationConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GenerationConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GenerationConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def _configs_dir() -> Path:
    """Directory holding the bundled TOML configs.

    The configs ship beside ``src/`` rather than inside the package, so they
    are found next to the source tree in a checkout or editable install.
    An installed wheel has no such directory; ``configs/`` under the
    working directory is used instead.
    """
    source_tree = Path(__file__).parent.parent.parent / "configs"
    if source_tree.is_dir():
        return source_tree
    return Path.cwd() / "configs"
