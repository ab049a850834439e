"""Density field sampling for island terrain.

Maps world positions to a scalar density: positive is solid, zero is air.
Every term is a pure function of position and island parameters, so a
position samples to the same density whichever chunk asks for it. That is
what lets a chunk re-sample its neighbours' border instead of reading their
data.

All functions take arrays of coordinates and evaluate them in one pass;
``sample_density`` wraps the vectorized path for single points.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..config import SamplerTuning
from ..types import IslandParams, NoiseOffsets, TerrainPreset, Vec3
from .noise import GradientNoise3D

_NOISE = GradientNoise3D(seed=0)

DEFAULT_TUNING = SamplerTuning()

# Noise frequencies of the individual terrain features
MOUNTAIN_FREQUENCY = 0.007
MOUNTAIN_DETAIL_FREQUENCY = 0.0065
HILL_FREQUENCY = 0.025
CAVE_FREQUENCY = 0.02
CAVE_DETAIL_FREQUENCY = 0.012
VOLCANO_FREQUENCY = 0.035
CALDERA_FREQUENCY = 0.07
SWAMP_FREQUENCY = 0.05
SWAMP_VERTICAL_FREQUENCY = 0.09

Array = NDArray[np.float64]


def _offset_noise(
    x: Array,
    y: Array,
    z: Array,
    offset: Vec3,
    frequency: float,
    vertical_frequency: float | None = None,
) -> Array:
    fy = frequency if vertical_frequency is None else vertical_frequency
    return _NOISE.sample(
        np.abs((x + offset[0]) * frequency),
        np.abs((y + offset[1]) * fy),
        np.abs((z + offset[2]) * frequency),
    )


def island_envelope(x: Array, y: Array, z: Array, center: Vec3, size: Vec3) -> Array:
    """Radial falloff of the island silhouette, 0.5 at the centre, 0 beyond size/2."""
    max_length = size[0]
    distance = np.sqrt((x - center[0]) ** 2 + (y - center[1]) ** 2 + (z - center[2]) ** 2)
    length = np.minimum(distance, max_length)
    return np.clip((max_length / 2.0 - length) / max_length, 0.0, 1.0)


def mountains(x: Array, y: Array, z: Array, offsets: NoiseOffsets, height_scale: float) -> Array:
    """Two noise octaves shaped into the island's main relief, in ``[0, 1]``."""
    base = (_offset_noise(x, y, z, offsets[0], MOUNTAIN_FREQUENCY, MOUNTAIN_FREQUENCY / height_scale) + 1.0) / 2.0
    detail = _offset_noise(x, y, z, offsets[1], MOUNTAIN_DETAIL_FREQUENCY, MOUNTAIN_DETAIL_FREQUENCY / height_scale)
    return np.clip(base * (base + detail) * 0.5 * height_scale, 0.0, 1.0)


def hills(x: Array, y: Array, z: Array, offsets: NoiseOffsets, tuning: SamplerTuning) -> Array:
    return np.maximum(_offset_noise(x, y, z, offsets[2], HILL_FREQUENCY), 0.0) * tuning.hill_gain


def caves(x: Array, y: Array, z: Array, offsets: NoiseOffsets, tuning: SamplerTuning) -> Array:
    """Cave carving density, amplified where the primary octave is strong."""
    primary = np.clip(_offset_noise(x, y, z, offsets[3], CAVE_FREQUENCY), 0.0, 1.0)
    secondary = np.clip(_offset_noise(x, y, z, offsets[1], CAVE_DETAIL_FREQUENCY), 0.0, 1.0)
    value = np.where(
        primary > tuning.cave_threshold,
        primary * tuning.cave_strong_gain,
        primary * tuning.cave_weak_gain,
    )
    return np.maximum(value + secondary * tuning.cave_secondary_gain, 0.0)


def volcano(x: Array, y: Array, z: Array, center: Vec3, size: Vec3) -> Array:
    """Cone raised over the island centre, in ``[0, 1]``."""
    max_length = size[1] / 2.0
    lx = (x - center[0]) * 1.5
    ly = (y - center[1]) * 1.5 * 0.5
    lz = (z - center[2]) * 1.5
    length = lx * lx + ly * ly + lz * lz
    noise = np.clip(
        _NOISE.sample(np.abs(x * VOLCANO_FREQUENCY), np.abs(y * VOLCANO_FREQUENCY), np.abs(z * VOLCANO_FREQUENCY)),
        0.0,
        1.0,
    )
    max_length *= max_length
    value = np.maximum((max_length - length) / max_length, 0.0)
    return np.clip(value + value * noise * 0.5, 0.0, 1.0)


def caldera(x: Array, y: Array, z: Array, center: Vec3, size: Vec3, tuning: SamplerTuning) -> Array:
    """Crater carved around the top of the island."""
    max_length = size[1] / 2.0
    lx = x - center[0]
    ly = (y - (center[1] + max_length)) * 0.26
    lz = z - center[2]
    length = np.sqrt(lx * lx + ly * ly + lz * lz)
    noise = np.clip(
        _NOISE.sample(np.abs(x * CALDERA_FREQUENCY), np.abs(y * CALDERA_FREQUENCY), np.abs(z * CALDERA_FREQUENCY)),
        0.0,
        1.0,
    )
    value = np.maximum(10.0 * (max_length / 3.0 - length) / max_length, 0.0)
    return tuning.caldera_gain * value + np.where(value > 0.0, noise, 0.0)


def swamp(
    x: Array, y: Array, z: Array, offsets: NoiseOffsets, center: Vec3, size: Vec3, tuning: SamplerTuning
) -> Array:
    """Flattening term that grows with height above the island centre."""
    noise = np.clip(
        _offset_noise(x, y, z, offsets[3], SWAMP_FREQUENCY, SWAMP_VERTICAL_FREQUENCY), 0.0, 1.0
    )
    rise = np.maximum(y - center[1], 1.0) * 5.0
    value = np.clip(rise / size[1], 0.0, 1.0)
    return value * noise * tuning.swamp_gain


def _island_density(
    x: Array,
    y: Array,
    z: Array,
    envelope: Array,
    upper: NDArray[np.bool_],
    island: IslandParams,
    tuning: SamplerTuning,
) -> Array:
    preset = island.preset
    offsets = island.noise_offsets
    half_height = island.half_height
    scale = preset.height_scale

    value = np.zeros_like(x)
    if preset.is_volcano:
        value += volcano(x, y, z, island.center, island.size)

    value = np.clip(mountains(x, y, z, offsets, scale) + value + preset.ground_height, 0.0, 1.0)
    peak = half_height * scale * 2.0
    value = np.clip(value * peak, 0.0, peak)

    # Hills only grow on terrain that is already there
    hilly = value > tuning.hill_threshold
    if hilly.any():
        value[hilly] += value[hilly] * hills(x[hilly], y[hilly], z[hilly], offsets, tuning) / (half_height * 0.2)

    if preset.is_volcano:
        value -= caldera(x, y, z, island.center, island.size, tuning) * half_height * scale

    value *= envelope

    if preset.has_caves:
        value -= caves(x, y, z, offsets, tuning)

    if preset.is_swamp:
        value -= swamp(x, y, z, offsets, island.center, island.size, tuning) * half_height

    value = np.clip(value, 0.0, half_height * tuning.max_height_fraction)

    local_y = y - island.center[1]
    solid = np.where(upper, value > local_y, -value < local_y)
    return np.where(solid, value, 0.0)


def sample_density_field(
    x: ArrayLike,
    y: ArrayLike,
    z: ArrayLike,
    island: IslandParams,
    upper: ArrayLike,
    tuning: SamplerTuning = DEFAULT_TUNING,
) -> Array:
    """Sample densities at broadcast-compatible coordinate arrays.

    Args:
        x: World x coordinates.
        y: World y coordinates.
        z: World z coordinates.
        island: Island the positions are sampled against.
        upper: Upper half flag, scalar or one per position.
        tuning: Shaping constants.

    Returns:
        Density per position; exactly 0.0 wherever the position is air.
    """
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    upper = np.broadcast_to(np.asarray(upper, dtype=bool), x.shape)
    density = np.zeros(x.shape, dtype=np.float64)

    envelope = island_envelope(x, y, z, island.center, island.size)
    inside = envelope > 0.0
    if not inside.any():
        return density

    density[inside] = _island_density(
        x[inside], y[inside], z[inside], envelope[inside], upper[inside], island, tuning
    )
    return density


def sample_density(
    position: Vec3,
    preset: TerrainPreset,
    noise_offsets: NoiseOffsets,
    island_center: Vec3,
    island_size: Vec3,
    is_upper_half: bool,
    tuning: SamplerTuning = DEFAULT_TUNING,
) -> float:
    """Sample the density at a single world position."""
    island = IslandParams(
        preset=preset, center=island_center, size=island_size, noise_offsets=noise_offsets
    )
    x, y, z = position
    return float(sample_density_field([x], [y], [z], island, is_upper_half, tuning)[0])
