"""
Elden Ring AR Calculator - Player Attributes
============================================
Attribute containers and the two-handing strength rule.
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, Mapping

from .constants import (
    Stat,
    STATS,
    MAX_EFFECTIVE_STAT,
    TWO_HAND_STRENGTH_MULT,
    FIST_WEP_TYPE,
    ALWAYS_TWO_HANDED_WEP_TYPES,
)


@dataclass(frozen=True)
class PlayerStats:
    """The five scaling attributes (1-99 as levelled, up to 148 effective)."""
    strength: int = 10
    dexterity: int = 10
    intelligence: int = 10
    faith: int = 10
    arcane: int = 10

    def get(self, stat: Stat) -> int:
        return getattr(self, stat.value)

    def with_stat(self, stat: Stat, value: int) -> "PlayerStats":
        """Copy with one attribute changed."""
        return replace(self, **{stat.value: value})

    def to_dict(self) -> Dict[str, int]:
        return {stat.value: self.get(stat) for stat in STATS}

    @classmethod
    def from_dict(cls, data: Mapping) -> "PlayerStats":
        return cls(**{stat.value: int(data.get(stat.value, 0)) for stat in STATS})


# Requirements share the attribute layout; 0 means no requirement.
WeaponRequirements = PlayerStats


def is_always_two_handed(wep_type: int) -> bool:
    """Bows, greatbows and ballistae are always held in two hands."""
    return wep_type in ALWAYS_TWO_HANDED_WEP_TYPES


def applies_two_handing_bonus(two_handing: bool, wep_type: int, is_dual_blade: bool) -> bool:
    """
    Whether the 1.5× strength bonus applies.

    Paired weapons and fists never get it; always-two-handed ranged weapons
    always do, whatever grip was requested.
    """
    if is_always_two_handed(wep_type):
        return True
    if is_dual_blade or wep_type == FIST_WEP_TYPE:
        return False
    return two_handing


def compute_effective_strength(strength: int, two_handing: bool,
                               wep_type: int = 0, is_dual_blade: bool = False) -> int:
    """
    Strength after the two-handing bonus.

    Formula:
        effective = min(floor(strength × 1.5), 148)   when the bonus applies
        effective = strength                          otherwise
    """
    if not applies_two_handing_bonus(two_handing, wep_type, is_dual_blade):
        return strength
    return min(math.floor(strength * TWO_HAND_STRENGTH_MULT), MAX_EFFECTIVE_STAT)


def compute_effective_stats(stats: PlayerStats, two_handing: bool,
                            wep_type: int = 0, is_dual_blade: bool = False) -> PlayerStats:
    """Stats with the two-handing bonus applied; only strength changes."""
    return stats.with_stat(
        Stat.STRENGTH,
        compute_effective_strength(stats.strength, two_handing, wep_type, is_dual_blade),
    )


def meets_requirements(stats: PlayerStats, requirements: WeaponRequirements) -> bool:
    """True when every attribute reaches its requirement."""
    return all(stats.get(stat) >= requirements.get(stat) for stat in STATS)
