"""Terrain preset catalog and per-region preset choice."""

from ..types import Region, TerrainPreset

ICY_MOUNTAIN = TerrainPreset(
    label="ICY_MOUNTAIN", decoration_budget=0, height_scale=1.8, ground_height=0.0, has_caves=True
)
SNOW_PLANES = TerrainPreset(
    label="SNOW_PLANES", decoration_budget=0, height_scale=0.8, ground_height=0.1, has_caves=False
)
FOREST = TerrainPreset(
    label="FOREST", decoration_budget=8, height_scale=1.0, ground_height=0.0, has_caves=True
)
GREENLAND = TerrainPreset(
    label="GREENLAND", decoration_budget=2, height_scale=0.8, ground_height=0.1, has_caves=False
)
SWAMP = TerrainPreset(
    label="SWAMP", decoration_budget=5, height_scale=0.5, ground_height=0.3, has_caves=False
)
DSCHUNGLE = TerrainPreset(
    label="DSCHUNGLE", decoration_budget=6, height_scale=1.0, ground_height=0.0, has_caves=False
)
DESERT = TerrainPreset(
    label="DESERT", decoration_budget=0, height_scale=0.5, ground_height=0.3, has_caves=False
)
VOLCANO = TerrainPreset(
    label="VOLCANO", decoration_budget=0, height_scale=1.8, ground_height=0.0, has_caves=False
)

PRESETS: dict[str, TerrainPreset] = {
    preset.label: preset
    for preset in (
        ICY_MOUNTAIN,
        SNOW_PLANES,
        FOREST,
        GREENLAND,
        SWAMP,
        DSCHUNGLE,
        DESERT,
        VOLCANO,
    )
}


def get_preset(label: str) -> TerrainPreset:
    """Look up a preset by label, case-insensitively.

    Raises:
        KeyError: If no preset has that label.
    """
    try:
        return PRESETS[label.upper()]
    except KeyError:
        raise KeyError(f"Unknown terrain preset '{label}'. Available: {sorted(PRESETS)}") from None


def choose_terrain(region: Region, n: int) -> TerrainPreset:
    """Pick the preset of an island from its region and a random draw.

    Args:
        region: Climate zone the island sits in.
        n: Non-negative random draw.

    Returns:
        The chosen preset.
    """
    match region:
        case Region.ICY:
            return SNOW_PLANES if n % 2 == 0 else ICY_MOUNTAIN
        case Region.GREEN:
            return (SWAMP, GREENLAND, FOREST)[n % 3]
        case Region.TROPICAL:
            return SWAMP if n % 4 == 0 else DSCHUNGLE
        case Region.SAND:
            return DESERT
        case Region.LAVA:
            return VOLCANO
    return GREENLAND
