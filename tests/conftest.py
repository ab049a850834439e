"""Shared test fixtures for terrain generation tests."""

from collections.abc import Callable

import pytest

from archipelago.config import ChunkConfig, GenerationConfig, SchedulerConfig, WorldConfig
from archipelago.types import ChunkRequest, IslandParams, TerrainPreset

OFFSETS = (
    (1234.5, 678.25, 4321.75),
    (2468.125, 1357.5, 9753.25),
    (5555.5, 4444.25, 3333.75),
    (8642.5, 7531.125, 1597.5),
)

# A thick slab: solid from about -15 to +15 around the centre column
PLATEAU = TerrainPreset(
    label="PLATEAU", decoration_budget=3, height_scale=1.0, ground_height=0.5, has_caves=False
)


@pytest.fixture
def plateau_island() -> IslandParams:
    """Island centred on the origin, 120 wide and 80 tall."""
    return IslandParams(
        preset=PLATEAU, center=(0.0, 0.0, 0.0), size=(120.0, 80.0, 120.0), noise_offsets=OFFSETS
    )


@pytest.fixture
def make_request(plateau_island: IslandParams) -> Callable[..., ChunkRequest]:
    """Factory for chunk requests against the plateau island."""

    def make(
        origin: tuple[float, float, float] = (-8.0, 0.0, -8.0),
        width: int = 16,
        height: int = 40,
        upper: bool = True,
        island: IslandParams | None = None,
        chunk_id: str = "test#0",
        **kwargs,
    ) -> ChunkRequest:
        return ChunkRequest(
            chunk_id=chunk_id,
            origin=origin,
            width=width,
            height=height,
            upper=upper,
            island=island or plateau_island,
            **kwargs,
        )

    return make


@pytest.fixture
def surface_request(make_request) -> ChunkRequest:
    """Upper chunk over the island centre; it contains the top surface."""
    return make_request()


@pytest.fixture
def empty_request(make_request) -> ChunkRequest:
    """Chunk far outside the island."""
    return make_request(origin=(1000.0, 0.0, 1000.0), chunk_id="empty#0")


@pytest.fixture
def small_config() -> GenerationConfig:
    """Tiny islands in tiny chunks so whole islands generate quickly."""
    return GenerationConfig(
        world=WorldConfig(seed=99, island_size_min=24.0, island_size_max=24.0),
        chunk=ChunkConfig(width=8, height=16),
        scheduler=SchedulerConfig(max_workers=3, reprioritize_interval_s=0.5),
    )
