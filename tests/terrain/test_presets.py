"""Tests for the terrain preset catalog."""

import pytest

from archipelago.terrain.presets import (
    DESERT,
    DSCHUNGLE,
    FOREST,
    GREENLAND,
    ICY_MOUNTAIN,
    PRESETS,
    SNOW_PLANES,
    SWAMP,
    VOLCANO,
    choose_terrain,
    get_preset,
)
from archipelago.types import Region


class TestCatalog:
    """Tests for preset values."""

    def test_catalog_has_eight_presets(self) -> None:
        """All archetypes are registered by label."""
        assert len(PRESETS) == 8
        assert PRESETS["FOREST"] is FOREST

    def test_cave_presets(self) -> None:
        """Only icy mountains and forests have caves."""
        assert {p.label for p in PRESETS.values() if p.has_caves} == {"ICY_MOUNTAIN", "FOREST"}

    def test_feature_flags(self) -> None:
        """Volcano and swamp flags follow the label."""
        assert VOLCANO.is_volcano
        assert not VOLCANO.is_swamp
        assert SWAMP.is_swamp
        assert not FOREST.is_volcano

    def test_presets_are_immutable(self) -> None:
        """Presets cannot be modified."""
        with pytest.raises(Exception):
            FOREST.height_scale = 2.0

    def test_get_preset_case_insensitive(self) -> None:
        """Lookup ignores case."""
        assert get_preset("volcano") is VOLCANO

    def test_get_unknown_preset(self) -> None:
        """Unknown labels raise KeyError."""
        with pytest.raises(KeyError):
            get_preset("MOON")


class TestChooseTerrain:
    """Tests for region based preset choice."""

    @pytest.mark.parametrize(
        "region,n,expected",
        [
            (Region.ICY, 0, SNOW_PLANES),
            (Region.ICY, 1, ICY_MOUNTAIN),
            (Region.GREEN, 0, SWAMP),
            (Region.GREEN, 1, GREENLAND),
            (Region.GREEN, 5, FOREST),
            (Region.TROPICAL, 8, SWAMP),
            (Region.TROPICAL, 3, DSCHUNGLE),
            (Region.SAND, 17, DESERT),
            (Region.LAVA, 4, VOLCANO),
        ],
    )
    def test_choice(self, region: Region, n: int, expected) -> None:
        """Each region maps its draw to the expected archetype."""
        assert choose_terrain(region, n) is expected
