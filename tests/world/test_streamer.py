"""Tests for the terrain streaming context."""

from unittest.mock import MagicMock

import pytest

from archipelago.config import GenerationConfig, SchedulerConfig, WorldConfig
from archipelago.jobs.scheduler import JobScheduler
from archipelago.terrain.presets import DESERT
from archipelago.types import Region
from archipelago.world.chunk import Viewer
from archipelago.world.streamer import TerrainStreamer


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_config(threshold: float) -> GenerationConfig:
    return GenerationConfig(
        world=WorldConfig(seed=11, island_threshold=threshold),
        scheduler=SchedulerConfig(reprioritize_interval_s=10.0),
    )


@pytest.fixture
def scheduler() -> MagicMock:
    return MagicMock(spec=JobScheduler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestTerrainStreamer:
    """Tests for TerrainStreamer."""

    def test_tick_every_update(self, scheduler, clock) -> None:
        streamer = TerrainStreamer(make_config(10.0), scheduler=scheduler, clock=clock)
        streamer.update()
        streamer.update()
        assert scheduler.tick.call_count == 2

    def test_reprioritize_on_interval(self, scheduler, clock) -> None:
        """The pending queue is re-sorted once per interval, not every frame."""
        streamer = TerrainStreamer(make_config(10.0), scheduler=scheduler, clock=clock)
        clock.now = 5.0
        streamer.update()
        scheduler.reprioritize.assert_not_called()
        clock.now = 10.0
        streamer.update()
        assert scheduler.reprioritize.call_count == 1
        clock.now = 15.0
        streamer.update()
        assert scheduler.reprioritize.call_count == 1
        clock.now = 20.5
        streamer.update()
        assert scheduler.reprioritize.call_count == 2

    def test_loads_cells_around_viewer(self, scheduler, clock) -> None:
        streamer = TerrainStreamer(make_config(10.0), scheduler=scheduler, clock=clock)
        streamer.update()
        assert len(streamer.grid) == 27
        assert streamer.islands == []
        assert streamer.is_idle

    def test_moving_within_cell_loads_nothing(self, scheduler, clock) -> None:
        viewer = Viewer()
        streamer = TerrainStreamer(make_config(10.0), viewer=viewer, scheduler=scheduler, clock=clock)
        streamer.update()
        viewer.position = (250.0, 100.0, -250.0)
        streamer.update()
        assert len(streamer.grid) == 27

    def test_crossing_into_next_cell(self, scheduler, clock) -> None:
        viewer = Viewer()
        streamer = TerrainStreamer(make_config(10.0), viewer=viewer, scheduler=scheduler, clock=clock)
        streamer.update()
        viewer.position = (650.0, 0.0, 0.0)
        streamer.update()
        assert len(streamer.grid) == 36

    def test_spawns_islands_in_new_cells(self, scheduler, clock) -> None:
        """Every populated cell gets an island whose chunks are submitted."""
        streamer = TerrainStreamer(make_config(-10.0), scheduler=scheduler, clock=clock)
        streamer.update()
        assert len(streamer.islands) == 27
        total_chunks = sum(len(island.chunks) for island in streamer.islands)
        assert scheduler.submit.call_count == total_chunks
        assert not streamer.is_idle

    def test_add_island(self, scheduler, clock) -> None:
        streamer = TerrainStreamer(make_config(10.0), scheduler=scheduler, clock=clock)
        island = streamer.add_island((0.0, 0.0, 0.0), Region.SAND)
        assert island.preset == DESERT
        assert streamer.islands == [island]
        assert scheduler.submit.call_count == len(island.chunks)

    def test_shutdown(self, scheduler, clock) -> None:
        """Unfinished islands withdraw their jobs before the scheduler stops."""
        streamer = TerrainStreamer(make_config(10.0), scheduler=scheduler, clock=clock)
        island = streamer.add_island((0.0, 0.0, 0.0), Region.GREEN)
        streamer.shutdown(timeout=1.0)
        assert scheduler.discard.call_count == len(island.chunks)
        scheduler.shutdown.assert_called_once_with(1.0)

    def test_default_scheduler_from_config(self) -> None:
        config = GenerationConfig(scheduler=SchedulerConfig(max_workers=3))
        streamer = TerrainStreamer(config)
        try:
            assert streamer.scheduler.max_workers == 3
        finally:
            streamer.shutdown()

    def test_island_after_shutdown_finishes(self, clock) -> None:
        """Islands spawned once the scheduler is closed do not hang."""
        streamer = TerrainStreamer(make_config(10.0), clock=clock)
        streamer.scheduler.shutdown()
        island = streamer.add_island((0.0, 0.0, 0.0), Region.GREEN)
        streamer.update()
        assert island.is_done
        assert island.chunks == []
        assert streamer.is_idle
