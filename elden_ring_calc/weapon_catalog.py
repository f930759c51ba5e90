"""
Elden Ring AR Calculator - Weapon Catalog
==========================================
Lookups over the weapon bundle plus guard (blocking) stats.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Union

from core import (
    Stat,
    DamageType,
    STATS,
    DAMAGE_TYPES,
    LookupMiss,
    ReinforceRates,
    WeaponData,
    BaseGuardStats,
    get_reinforce_rates,
    get_scaling_grade,
    resolve_weapon_at_level,
)
from core.constants import GUARD_NEGATION_CAP


def get_weapon_names(data: WeaponData) -> List[str]:
    return sorted(data.weapons)


def get_weapon_affinities(data: WeaponData, weapon_name: str) -> List[str]:
    weapon = data.weapons.get(weapon_name)
    if weapon is None:
        return []
    return list(weapon.affinities)


def get_max_upgrade_level(data: WeaponData, weapon_name: str) -> int:
    """Same for every affinity of a weapon; 0 when unknown."""
    weapon = data.weapons.get(weapon_name)
    return weapon.max_upgrade_level if weapon is not None else 0


def has_weapon_affinity(data: WeaponData, weapon_name: str, affinity: str) -> bool:
    weapon = data.weapons.get(weapon_name)
    return weapon is not None and affinity in weapon.affinities


def get_scaling_grades(data: WeaponData, weapon_name: str, affinity: str,
                       upgrade_level: int) -> Union[Dict[Stat, str], LookupMiss]:
    """Letter grade per stat from the display scaling at a level."""
    weapon = resolve_weapon_at_level(data, weapon_name, affinity, upgrade_level)
    if isinstance(weapon, LookupMiss):
        return weapon
    return {stat: get_scaling_grade(weapon.weapon_scaling[stat]) for stat in STATS}


# =============================================================================
# GUARD STATS
# =============================================================================

@dataclass(frozen=True)
class GuardResult:
    """Blocking stats at an upgrade level."""
    negation: Dict[DamageType, float]
    guard_boost: int
    resistance: Dict[str, float]


def calculate_guard_stats(guard_stats: BaseGuardStats, guard_resistance: Dict[str, float],
                          rates: ReinforceRates) -> GuardResult:
    """
    Formula:
        negation    = min(base × guardCutRate, 100)
        guard boost = trunc(base × staminaGuardDefRate)

    Status resistances do not change with upgrade level.
    """
    return GuardResult(
        negation={
            t: min(guard_stats.negation[t] * rates.guard_cut_rate.get(t, 1.0), GUARD_NEGATION_CAP)
            for t in DAMAGE_TYPES
        },
        guard_boost=math.trunc(guard_stats.guard_boost * rates.stamina_guard_def_rate),
        resistance=dict(guard_resistance),
    )


def calculate_guard_stats_at_level(data: WeaponData, weapon_name: str, affinity: str,
                                   upgrade_level: int) -> Union[GuardResult, LookupMiss]:
    weapon = data.weapons.get(weapon_name)
    if weapon is None:
        return LookupMiss("weapon", f"Weapon not found: {weapon_name}")
    affinity_data = weapon.affinities.get(affinity)
    if affinity_data is None:
        return LookupMiss("affinity", f"Affinity not found: {affinity} for {weapon_name}")
    rates = get_reinforce_rates(data, affinity_data, upgrade_level)
    if isinstance(rates, LookupMiss):
        return rates
    return calculate_guard_stats(weapon.guard_stats, weapon.guard_resistance, rates)
