"""
Unit tests for core/stats.py - Player attributes and the two-handing rule.
"""
import pytest

from core import (
    Stat,
    PlayerStats,
    MAX_EFFECTIVE_STAT,
    compute_effective_strength,
    compute_effective_stats,
    meets_requirements,
    is_always_two_handed,
)
from core.constants import FIST_WEP_TYPE, WEAPON_CLASS_MAP, WEAPON_CLASS_NAME_TO_ID


class TestPlayerStats:
    """Tests for PlayerStats container."""

    def test_defaults(self):
        stats = PlayerStats()
        assert stats.to_dict() == {
            "strength": 10, "dexterity": 10, "intelligence": 10, "faith": 10, "arcane": 10,
        }

    def test_get_and_with_stat(self):
        stats = PlayerStats(strength=30)
        assert stats.get(Stat.STRENGTH) == 30
        changed = stats.with_stat(Stat.ARCANE, 45)
        assert changed.arcane == 45
        assert stats.arcane == 10

    def test_from_dict_missing_is_zero(self):
        """Requirements omit unused stats; they read as 0."""
        req = PlayerStats.from_dict({"strength": 12})
        assert req.strength == 12
        assert req.faith == 0


class TestTwoHanding:
    """Tests for effective strength."""

    @pytest.mark.parametrize("strength,expected", [
        (10, 15), (11, 16), (40, 60), (66, 99), (98, 147), (99, 148),
    ])
    def test_two_handed_strength(self, strength, expected):
        """floor(str × 1.5), capped at 148."""
        assert compute_effective_strength(strength, True) == expected

    def test_cap(self):
        assert compute_effective_strength(99, True) == MAX_EFFECTIVE_STAT

    def test_one_handed_unchanged(self):
        assert compute_effective_strength(40, False) == 40

    def test_fists_never_get_bonus(self):
        assert compute_effective_strength(40, True, FIST_WEP_TYPE) == 40

    def test_dual_blades_never_get_bonus(self):
        assert compute_effective_strength(40, True, 14, is_dual_blade=True) == 40

    @pytest.mark.parametrize("wep_type", [50, 51, 53, 56])
    def test_bows_always_get_bonus(self, wep_type):
        """Bows, greatbows and ballistae are two-handed whatever the grip flag says."""
        assert is_always_two_handed(wep_type)
        assert compute_effective_strength(40, False, wep_type) == 60

    def test_only_strength_changes(self):
        stats = PlayerStats(strength=20, dexterity=30, intelligence=40, faith=50, arcane=60)
        effective = compute_effective_stats(stats, True)
        assert effective.strength == 30
        assert effective.dexterity == 30
        assert effective.arcane == 60


class TestRequirements:
    """Tests for meets_requirements."""

    def test_all_met(self):
        assert meets_requirements(PlayerStats(strength=12), PlayerStats.from_dict({"strength": 12}))

    def test_one_short(self):
        req = PlayerStats.from_dict({"strength": 12, "arcane": 20})
        assert not meets_requirements(PlayerStats(strength=40, arcane=19), req)


class TestWeaponClassMap:
    """Tests for weapon class lookups."""

    def test_reverse_map_is_consistent(self):
        for wep_type, name in WEAPON_CLASS_MAP.items():
            assert WEAPON_CLASS_MAP[WEAPON_CLASS_NAME_TO_ID[name]] == name
