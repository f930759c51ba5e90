"""
Elden Ring AR Calculator - Reinforcement Resolution
====================================================
Applies a ReinforceParamWeapon row to a +0 weapon record, producing the
resolved weapon the AR math runs on.

Two scaling views come out of this module and are never mixed:
    - math scaling: per damage type, per stat (drives the AR numbers)
    - display scaling: one rate-adjusted value per stat (drives letter grades)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple, Union

from .constants import (
    Stat,
    DamageType,
    StatusEffectType,
    STATS,
    DAMAGE_TYPES,
    STATUS_EFFECTS,
    AFFINITY_SP_EFFECT_ID_THRESHOLD,
)
from .stats import WeaponRequirements
from .weapon_data import (
    AffinityData,
    BaseDamageType,
    BaseStatScaling,
    BaseStatusEffect,
    ReinforceRates,
    SpEffectEntry,
    WeaponData,
    WeaponEntry,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class LookupMiss:
    """
    Discriminated "not found" value returned instead of raising.

    kind is one of: weapon, affinity, rates, aow, skill.
    """
    kind: str
    message: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class ResolvedStatScaling:
    """Rate-applied scaling percentage and the curve it reads."""
    value: float
    curve_id: int


@dataclass(frozen=True)
class ResolvedDamageType:
    base: float
    scaling: Dict[Stat, Optional[ResolvedStatScaling]]


@dataclass(frozen=True)
class ResolvedStatusEffect:
    base: float
    arcane_scaling: Optional[ResolvedStatScaling] = None


@dataclass(frozen=True)
class ResolvedWeapon:
    """A weapon + affinity + upgrade level with every rate applied."""
    id: int
    name: str
    affinity: str
    upgrade_level: int
    damage: Dict[DamageType, Optional[ResolvedDamageType]]
    status_effects: Dict[StatusEffectType, Optional[ResolvedStatusEffect]]
    requirements: WeaponRequirements
    weapon_scaling: Dict[Stat, float]
    sorcery_scaling: Optional[Dict[Stat, Optional[ResolvedStatScaling]]] = None
    incantation_scaling: Optional[Dict[Stat, Optional[ResolvedStatScaling]]] = None
    is_dual_blade: bool = False
    wep_type: int = 0
    wepmotion_category: int = 0
    rates: Optional[ReinforceRates] = field(default=None, compare=False, repr=False)

    def damage_type(self, damage_type: DamageType) -> Optional[ResolvedDamageType]:
        return self.damage.get(damage_type)


# =============================================================================
# RATE LOOKUP
# =============================================================================

def get_reinforce_rates(data: WeaponData, affinity: AffinityData,
                        upgrade_level: int) -> Union[ReinforceRates, LookupMiss]:
    """
    Exact-key rate lookup.

    The key is reinforceTypeId + upgradeLevel. There is no fallback to a
    neighbouring level or to a rate of 1.0.
    """
    key = affinity.reinforce_type_id + upgrade_level
    rates = data.reinforce_rates.get(key)
    if rates is None:
        logger.debug("No reinforce rates for key %s (type %s, level %s)",
                     key, affinity.reinforce_type_id, upgrade_level)
        return LookupMiss("rates", f"No reinforcement rates for key {key}")
    return rates


# =============================================================================
# SCALING
# =============================================================================

def apply_scaling_rate(base_scaling: Optional[BaseStatScaling],
                       rate: float) -> Optional[ResolvedStatScaling]:
    """Override values are final; everything else is base × rate."""
    if base_scaling is None:
        return None
    value = base_scaling.base if base_scaling.is_override else base_scaling.base * rate
    return ResolvedStatScaling(value=value, curve_id=base_scaling.curve_id)


def apply_damage_rates(base_damage: Optional[BaseDamageType], rates: ReinforceRates,
                       damage_type: DamageType) -> Optional[ResolvedDamageType]:
    if base_damage is None:
        return None
    return ResolvedDamageType(
        base=base_damage.attack_base * rates.attack_rate[damage_type],
        scaling={
            stat: apply_scaling_rate(base_damage.scaling.get(stat), rates.scaling_rate[stat])
            for stat in STATS
        },
    )


def apply_spell_scaling_rates(
    base_scaling: Optional[Dict[Stat, Optional[BaseStatScaling]]],
    rates: ReinforceRates,
) -> Optional[Dict[Stat, Optional[ResolvedStatScaling]]]:
    """Catalyst scaling: same rate rules; the fixed base of 100 is applied later."""
    if base_scaling is None:
        return None
    return {stat: apply_scaling_rate(base_scaling.get(stat), rates.scaling_rate[stat])
            for stat in STATS}


def display_scaling(affinity: AffinityData, rates: ReinforceRates) -> Dict[Stat, float]:
    """Weapon correct values × rate, one per stat (letter grades only)."""
    return {stat: affinity.weapon_scaling[stat] * rates.scaling_rate[stat] for stat in STATS}


# =============================================================================
# STATUS EFFECTS
# =============================================================================

def arcane_scaling_slots(slot0_id: int, slot1_id: int) -> FrozenSet[int]:
    """
    Status slots that receive arcane scaling.

    Heuristic from the reference data: when both slots carry an effect, only
    the affinity-added one (SpEffect id >= 100000) scales, e.g. Blood
    Venomous Fang scales bleed (105000) but not its innate poison (6511).
    A lone effect always scales.
    """
    has_slot0 = slot0_id > 0
    has_slot1 = slot1_id > 0
    if has_slot0 and has_slot1:
        slots = set()
        if slot0_id >= AFFINITY_SP_EFFECT_ID_THRESHOLD:
            slots.add(0)
        if slot1_id >= AFFINITY_SP_EFFECT_ID_THRESHOLD:
            slots.add(1)
        return frozenset(slots)
    if has_slot0:
        return frozenset({0})
    if has_slot1:
        return frozenset({1})
    return frozenset()


def _behavior_ids(affinity: AffinityData) -> Tuple[int, int]:
    if affinity.sp_effect_behavior_ids is not None:
        return affinity.sp_effect_behavior_ids
    ids = [0, 0]
    for status in affinity.status_effects.values():
        if status is not None and status.sp_effect_slot in (0, 1):
            ids[status.sp_effect_slot] = status.sp_effect_behavior_id
    return ids[0], ids[1]


def resolve_status_effect(base_status: Optional[BaseStatusEffect], rates: ReinforceRates,
                          sp_effects: Dict[int, SpEffectEntry],
                          scaling_slots: FrozenSet[int]) -> Optional[ResolvedStatusEffect]:
    """
    Look up the status base value at this upgrade level.

    The SpEffect id is behaviorId + spEffectId{1,2} of the rate row. A missing
    entry or a non-positive value means the weapon has no such status here.
    """
    if base_status is None:
        return None

    sp_effect_id = base_status.sp_effect_behavior_id + rates.sp_effect_offset(base_status.sp_effect_slot)
    sp_effect = sp_effects.get(sp_effect_id)
    if sp_effect is None:
        return None

    base_value = sp_effect.get(base_status.status_type)
    if base_value <= 0:
        return None

    arcane = 0.0
    if base_status.sp_effect_slot in scaling_slots:
        arcane = base_status.arcane_scaling * rates.scaling_rate[Stat.ARCANE]

    return ResolvedStatusEffect(
        base=base_value,
        arcane_scaling=ResolvedStatScaling(arcane, base_status.curve_id) if arcane > 0 else None,
    )


# =============================================================================
# WEAPON RESOLUTION
# =============================================================================

def resolve_affinity(data: WeaponData, weapon: WeaponEntry, affinity_name: str,
                     affinity: AffinityData, upgrade_level: int) -> Union[ResolvedWeapon, LookupMiss]:
    rates = get_reinforce_rates(data, affinity, upgrade_level)
    if isinstance(rates, LookupMiss):
        return rates

    scaling_slots = arcane_scaling_slots(*_behavior_ids(affinity))

    return ResolvedWeapon(
        id=affinity.id,
        name=weapon.name,
        affinity=affinity_name,
        upgrade_level=upgrade_level,
        damage={t: apply_damage_rates(affinity.damage.get(t), rates, t) for t in DAMAGE_TYPES},
        status_effects={
            s: resolve_status_effect(affinity.status_effects.get(s), rates, data.sp_effects, scaling_slots)
            for s in STATUS_EFFECTS
        },
        requirements=weapon.requirements,
        weapon_scaling=display_scaling(affinity, rates),
        sorcery_scaling=apply_spell_scaling_rates(affinity.sorcery_scaling, rates),
        incantation_scaling=apply_spell_scaling_rates(affinity.incantation_scaling, rates),
        is_dual_blade=weapon.is_dual_blade,
        wep_type=weapon.wep_type,
        wepmotion_category=weapon.wepmotion_category,
        rates=rates,
    )


def resolve_weapon_at_level(data: WeaponData, weapon_name: str, affinity: str,
                            upgrade_level: int) -> Union[ResolvedWeapon, LookupMiss]:
    """
    Resolve a weapon + affinity at an upgrade level.

    Args:
        data: Precomputed weapon bundle
        weapon_name: Display name of the weapon
        affinity: Affinity name ("Standard", "Heavy", ...)
        upgrade_level: Target reinforcement level

    Returns:
        ResolvedWeapon, or LookupMiss if the weapon, the affinity or the
        rate row does not exist
    """
    weapon = data.weapons.get(weapon_name)
    if weapon is None:
        logger.debug("Weapon not found: %s", weapon_name)
        return LookupMiss("weapon", f"Weapon not found: {weapon_name}")

    affinity_data = weapon.affinities.get(affinity)
    if affinity_data is None:
        logger.debug("Affinity %s not found for %s", affinity, weapon_name)
        return LookupMiss("affinity", f"Affinity not found: {affinity} for {weapon_name}")

    return resolve_affinity(data, weapon, affinity, affinity_data, upgrade_level)
