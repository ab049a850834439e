"""CLI entry point: generate one island through the job scheduler."""

import argparse
import random
import time
from pathlib import Path

import structlog

from .config import GenerationConfig, find_config, load_config
from .terrain.mesh import MeshBuffer
from .terrain.presets import get_preset
from .types import Region
from .world.chunk import Chunk
from .world.streamer import TerrainStreamer


class MeshTally:
    """Mesh sink that only counts what it receives."""

    def __init__(self) -> None:
        self.chunks = 0
        self.triangles = 0
        self.vertices = 0

    def apply_mesh(self, chunk: Chunk, mesh: MeshBuffer) -> None:
        self.chunks += 1
        self.triangles += mesh.triangle_count
        self.vertices += mesh.vertex_count


def parse_seed(value: str) -> int:
    if value.lower() == "random":
        return random.randint(0, 2**31 - 1)
    return int(value)


def main() -> None:
    """Generate a single island and print a summary."""
    parser = argparse.ArgumentParser(description="Generate a procedural island mesh")
    parser.add_argument("--config", type=str, help="Path or name of a TOML config file")
    parser.add_argument(
        "--seed", type=parse_seed, default=None, help="World seed, or 'random' (overrides config)"
    )
    parser.add_argument(
        "--preset", type=str, default=None, help="Terrain preset label, e.g. FOREST or VOLCANO"
    )
    parser.add_argument(
        "--region",
        type=str,
        default="GREEN",
        choices=[region.name for region in Region],
        help="Climate zone used to draw a preset when none is given",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker thread ceiling")
    parser.add_argument(
        "--timeout", type=float, default=300.0, help="Seconds to wait for the island"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
    )
    logger = structlog.get_logger()

    if args.config:
        try:
            config_path = find_config(args.config)
        except FileNotFoundError:
            config_path = Path(args.config)
            if not config_path.exists():
                logger.error("config_not_found", path=args.config)
                raise SystemExit(1)
        config = load_config(config_path)
        logger.info("config_loaded", path=str(config_path))
    else:
        config = GenerationConfig()
        logger.info("using_default_config")

    if args.seed is not None:
        config.world.seed = args.seed
    if args.workers is not None:
        config.scheduler.max_workers = args.workers

    try:
        preset = get_preset(args.preset) if args.preset else None
    except KeyError as e:
        logger.error("unknown_preset", preset=args.preset, error=str(e))
        raise SystemExit(1)

    tally = MeshTally()
    streamer = TerrainStreamer(config, mesh_sink=tally)
    start = time.perf_counter()
    island = streamer.add_island((0.0, 0.0, 0.0), Region[args.region], preset)

    logger.info(
        "generation_started",
        island=island.name,
        seed=config.world.seed,
        chunks=len(island.chunks),
        workers=config.scheduler.max_workers,
    )

    deadline = start + args.timeout
    try:
        while not island.is_done:
            streamer.scheduler.tick()
            island.update()
            if time.perf_counter() > deadline:
                logger.error("generation_timeout", timeout_s=args.timeout)
                break
            time.sleep(0.01)
    finally:
        streamer.shutdown()

    elapsed = time.perf_counter() - start
    print(f"Island: {island.name} (size {island.params.size[0]:.0f})")
    print(f"Chunks with geometry: {tally.chunks}")
    print(f"Triangles: {tally.triangles}")
    print(f"Vertices: {tally.vertices}")
    print(f"Elapsed: {elapsed:.2f}s")
    if not island.is_done:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
