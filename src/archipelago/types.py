"""Core types shared by the terrain pipeline and the world grid."""

from dataclasses import dataclass, field
from enum import IntEnum

from pydantic import BaseModel

from .config import SamplerTuning

# World space vector as (x, y, z); y is up
Vec3 = tuple[float, float, float]

# Four per-island noise offsets: mountains, mountains/caves, hills, caves/swamp
NoiseOffsets = tuple[Vec3, Vec3, Vec3, Vec3]


class Region(IntEnum):
    """Climate zone of a world layer, indexed by vertical grid layer."""

    ICY = 1
    GREEN = 0
    TROPICAL = -1
    SAND = -2
    LAVA = -3


class TerrainPreset(BaseModel, frozen=True):
    """Immutable named parameter bundle for one terrain archetype."""

    label: str
    decoration_budget: int
    height_scale: float
    ground_height: float
    has_caves: bool

    @property
    def is_volcano(self) -> bool:
        return self.label == "VOLCANO"

    @property
    def is_swamp(self) -> bool:
        return self.label == "SWAMP"


@dataclass(frozen=True)
class IslandParams:
    """Everything the sampler needs to know about one island."""

    preset: TerrainPreset
    center: Vec3
    size: Vec3
    noise_offsets: NoiseOffsets

    @property
    def half_height(self) -> float:
        return self.size[1] / 2.0

    @property
    def name(self) -> str:
        x, y, z = self.center
        return f"{self.preset.label}:{int(x)}/{int(y)}/{int(z)}"


@dataclass(frozen=True)
class ChunkRequest:
    """Input descriptor of one chunk job.

    The chunk spans ``width x height x width`` cells starting at ``origin``
    and is sampled at ``width + 1`` points per horizontal axis and
    ``height + 1`` points vertically so its surface closes at the borders.
    """

    chunk_id: str
    origin: Vec3
    width: int
    height: int
    upper: bool
    island: IslandParams
    iso_level: float = 5.0
    tuning: SamplerTuning = field(default_factory=SamplerTuning)

    def is_valid(self) -> bool:
        """Check that the descriptor describes a non-degenerate volume."""
        return (
            isinstance(self.island, IslandParams)
            and self.width > 0
            and self.height > 0
            and len(self.origin) == 3
        )
