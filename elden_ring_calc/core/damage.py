"""
Elden Ring AR Calculator - Attack Rating
=========================================
Turns a resolved weapon and player stats into attack rating, status
buildup and catalyst spell scaling.

Three requirement penalties exist and are deliberately different:
    - damage type:  scaling replaced by base × -0.4
    - status:       whole total × 0.6 (arcane only)
    - spell buff:   total collapses to 100 × 0.6, scaling 0
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .constants import (
    Stat,
    DamageType,
    StatusEffectType,
    STATS,
    DAMAGE_TYPES,
    STATUS_EFFECTS,
    REQUIREMENT_PENALTY_SCALING,
    STATUS_REQUIREMENT_PENALTY,
    SPELL_SCALING_BASE,
    SPELL_REQUIREMENT_PENALTY,
    SCALING_GRADE_THRESHOLDS,
    DAMAGE_TYPE_LABELS,
    STAT_ABBREVIATIONS,
)
from .curves import CurveTable
from .reinforce import (
    LookupMiss,
    ResolvedDamageType,
    ResolvedStatScaling,
    ResolvedStatusEffect,
    ResolvedWeapon,
    resolve_weapon_at_level,
)
from .stats import PlayerStats, WeaponRequirements, compute_effective_stats, meets_requirements
from .weapon_data import WeaponData


# =============================================================================
# RESULT DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class CalculatorOptions:
    two_handing: bool = False
    ignore_requirements: bool = False


@dataclass(frozen=True)
class StatScalingResult:
    """One stat's contribution to one damage type."""
    saturation: float = 0.0
    scaling: float = 0.0
    raw_scaling: float = 0.0


def _empty_per_stat() -> Dict[Stat, StatScalingResult]:
    return {stat: StatScalingResult() for stat in STATS}


def _empty_display() -> Dict[Stat, float]:
    return {stat: 0.0 for stat in STATS}


@dataclass(frozen=True)
class DamageTypeResult:
    base: float = 0.0
    scaling: float = 0.0
    total: float = 0.0
    rounded: int = 0
    per_stat: Dict[Stat, StatScalingResult] = field(default_factory=_empty_per_stat)
    display_scaling: Dict[Stat, float] = field(default_factory=_empty_display)


@dataclass(frozen=True)
class StatusEffectResult:
    base: float = 0.0
    scaling: float = 0.0
    total: float = 0.0
    rounded: int = 0


@dataclass(frozen=True)
class SpellScalingResult:
    base: float
    scaling: float
    total: float
    rounded: int
    per_stat: Dict[Stat, StatScalingResult]


@dataclass
class ARResult:
    """Complete attack rating result with breakdown."""
    damage: Dict[DamageType, DamageTypeResult]
    total: float
    rounded: int
    status_effects: Dict[StatusEffectType, StatusEffectResult]
    sorcery_scaling: Optional[SpellScalingResult]
    incantation_scaling: Optional[SpellScalingResult]
    effective_stats: PlayerStats
    requirements_met: bool

    def __getitem__(self, damage_type: DamageType) -> DamageTypeResult:
        return self.damage[damage_type]

    @property
    def physical(self) -> DamageTypeResult:
        return self.damage[DamageType.PHYSICAL]

    def breakdown(self) -> str:
        """Return formatted breakdown of the attack rating."""
        lines = [
            "",
            "Attack Rating Breakdown",
            "=======================",
        ]
        for damage_type in DAMAGE_TYPES:
            result = self.damage[damage_type]
            if result.total == 0:
                continue
            lines.append(
                f"{DAMAGE_TYPE_LABELS[damage_type] + ':':<12}{result.base:8.2f} "
                f"+ {result.scaling:8.2f} = {result.rounded}"
            )
        lines.append("-----------------------")
        lines.append(f"= Total AR:  {self.rounded}")
        for status in STATUS_EFFECTS:
            result = self.status_effects[status]
            if result.total > 0:
                lines.append(f"  {status.value}: {result.rounded}")
        for label, spell in (("Sorcery", self.sorcery_scaling), ("Incantation", self.incantation_scaling)):
            if spell is not None:
                lines.append(f"  {label} scaling: {spell.rounded}")
        stats = ", ".join(f"{STAT_ABBREVIATIONS[s]} {self.effective_stats.get(s)}" for s in STATS)
        lines.append(f"Effective stats: {stats}")
        if not self.requirements_met:
            lines.append("Requirements NOT met")
        return "\n".join(lines) + "\n"


# =============================================================================
# DAMAGE TYPES
# =============================================================================

def calculate_stat_scaling(curves: CurveTable, base: float,
                           scaling: Optional[ResolvedStatScaling],
                           stat_level: int) -> StatScalingResult:
    """
    One stat's contribution to a damage type.

    Formula:
        contribution = base × saturation(curve, stat) × (value / 100)
    """
    if scaling is None:
        return StatScalingResult()
    saturation = curves.saturation(scaling.curve_id, stat_level)
    return StatScalingResult(
        saturation=saturation,
        scaling=base * saturation * (scaling.value / 100),
        raw_scaling=scaling.value,
    )


def damage_type_requirements_met(effective_stats: PlayerStats, requirements: WeaponRequirements,
                                 damage_type: ResolvedDamageType,
                                 ignore_requirements: bool = False) -> bool:
    """Only stats that actually scale this damage type are checked."""
    if ignore_requirements:
        return True
    for stat in STATS:
        if damage_type.scaling.get(stat) is not None and effective_stats.get(stat) < requirements.get(stat):
            return False
    return True


def calculate_damage_type(curves: CurveTable, damage_type: Optional[ResolvedDamageType],
                          effective_stats: PlayerStats, requirements: WeaponRequirements,
                          ignore_requirements: bool = False,
                          display_scaling: Optional[Dict[Stat, float]] = None) -> DamageTypeResult:
    """
    Attack rating of one damage type.

    Formula:
        scaling = Σ base × saturation × value/100      (requirements met)
        scaling = base × -0.4                          (requirements unmet)
        total   = base + scaling
        rounded = trunc(total)

    The per-stat breakdown keeps the potential contributions even when the
    penalty replaces the scaling.

    Returns:
        DamageTypeResult; all zeros when the weapon has no such damage
    """
    if damage_type is None:
        return DamageTypeResult(display_scaling=dict(display_scaling) if display_scaling else _empty_display())

    base = damage_type.base
    per_stat = {
        stat: calculate_stat_scaling(curves, base, damage_type.scaling.get(stat), effective_stats.get(stat))
        for stat in STATS
    }
    scaling = sum(per_stat[stat].scaling for stat in STATS)

    if not damage_type_requirements_met(effective_stats, requirements, damage_type, ignore_requirements):
        scaling = base * REQUIREMENT_PENALTY_SCALING

    total = base + scaling
    if display_scaling is None:
        display_scaling = {stat: per_stat[stat].raw_scaling for stat in STATS}

    return DamageTypeResult(
        base=base,
        scaling=scaling,
        total=total,
        rounded=math.trunc(total),
        per_stat=per_stat,
        display_scaling=dict(display_scaling),
    )


# =============================================================================
# STATUS EFFECTS
# =============================================================================

def calculate_status_effect(curves: CurveTable, status: Optional[ResolvedStatusEffect],
                            effective_stats: PlayerStats, required_arcane: int,
                            ignore_requirements: bool = False) -> StatusEffectResult:
    """
    Status buildup (poison, bleed, frost...).

    Formula:
        scaling = base × (arcaneScaling / 100) × saturation(arcane)
        total   = base + scaling, × 0.6 when the arcane requirement is unmet

    The returned base is always the unpenalized value.
    """
    if status is None:
        return StatusEffectResult()

    base = status.base
    has_arcane_scaling = status.arcane_scaling is not None
    meets = ignore_requirements or not has_arcane_scaling or effective_stats.arcane >= required_arcane

    scaling = 0.0
    if has_arcane_scaling:
        saturation = curves.saturation(status.arcane_scaling.curve_id, effective_stats.arcane)
        scaling = base * (status.arcane_scaling.value / 100) * saturation

    total = base + scaling
    if not meets:
        total *= STATUS_REQUIREMENT_PENALTY

    return StatusEffectResult(base=base, scaling=scaling, total=total, rounded=math.trunc(total))


# =============================================================================
# SPELL SCALING (CATALYSTS)
# =============================================================================

def calculate_spell_scaling(curves: CurveTable,
                            spell_scaling: Optional[Dict[Stat, Optional[ResolvedStatScaling]]],
                            effective_stats: PlayerStats, requirements: WeaponRequirements,
                            ignore_requirements: bool = False) -> Optional[SpellScalingResult]:
    """
    Sorcery/incantation scaling of a staff or seal.

    Formula:
        total = 100 + Σ 100 × (value / 100) × saturation

    Unmet requirements on any scaling stat collapse the total to 60.
    """
    if spell_scaling is None:
        return None

    per_stat = {}
    for stat in STATS:
        scaling = spell_scaling.get(stat)
        if scaling is None:
            per_stat[stat] = StatScalingResult()
            continue
        saturation = curves.saturation(scaling.curve_id, effective_stats.get(stat))
        per_stat[stat] = StatScalingResult(
            saturation=saturation,
            scaling=SPELL_SCALING_BASE * (scaling.value / 100) * saturation,
            raw_scaling=scaling.value,
        )

    met = ignore_requirements or all(
        spell_scaling.get(stat) is None or effective_stats.get(stat) >= requirements.get(stat)
        for stat in STATS
    )

    if not met:
        total = SPELL_SCALING_BASE * SPELL_REQUIREMENT_PENALTY
        return SpellScalingResult(
            base=total,
            scaling=0.0,
            total=total,
            rounded=math.trunc(total),
            per_stat={stat: StatScalingResult(raw_scaling=per_stat[stat].raw_scaling) for stat in STATS},
        )

    scaling_total = sum(per_stat[stat].scaling for stat in STATS)
    total = SPELL_SCALING_BASE + scaling_total
    return SpellScalingResult(
        base=SPELL_SCALING_BASE,
        scaling=scaling_total,
        total=total,
        rounded=math.trunc(total),
        per_stat=per_stat,
    )


# =============================================================================
# MAIN AR CALCULATION
# =============================================================================

def calculate_ar(curves: CurveTable, weapon: ResolvedWeapon, stats: PlayerStats,
                 options: Optional[CalculatorOptions] = None) -> ARResult:
    """
    Attack rating of a resolved weapon.

    Args:
        curves: Curve table (shared memo)
        weapon: Weapon resolved at its upgrade level
        stats: Player stats as levelled
        options: Grip and requirement handling

    Returns:
        ARResult with per-type, status and spell results
    """
    if options is None:
        options = CalculatorOptions()

    effective = compute_effective_stats(stats, options.two_handing, weapon.wep_type, weapon.is_dual_blade)
    requirements_met = options.ignore_requirements or meets_requirements(effective, weapon.requirements)

    damage = {
        t: calculate_damage_type(curves, weapon.damage.get(t), effective, weapon.requirements,
                                 options.ignore_requirements, weapon.weapon_scaling)
        for t in DAMAGE_TYPES
    }
    # Sum before truncating
    total = sum(damage[t].total for t in DAMAGE_TYPES)

    status_effects = {
        s: calculate_status_effect(curves, weapon.status_effects.get(s), effective,
                                   weapon.requirements.arcane, options.ignore_requirements)
        for s in STATUS_EFFECTS
    }

    return ARResult(
        damage=damage,
        total=total,
        rounded=math.trunc(total),
        status_effects=status_effects,
        sorcery_scaling=calculate_spell_scaling(curves, weapon.sorcery_scaling, effective,
                                                weapon.requirements, options.ignore_requirements),
        incantation_scaling=calculate_spell_scaling(curves, weapon.incantation_scaling, effective,
                                                    weapon.requirements, options.ignore_requirements),
        effective_stats=effective,
        requirements_met=requirements_met,
    )


def calculate_ar_at_level(data: WeaponData, weapon_name: str, affinity: str, upgrade_level: int,
                          stats: PlayerStats,
                          options: Optional[CalculatorOptions] = None) -> Union[ARResult, LookupMiss]:
    """Resolve then calculate; LookupMiss when the weapon cannot be resolved."""
    weapon = resolve_weapon_at_level(data, weapon_name, affinity, upgrade_level)
    if isinstance(weapon, LookupMiss):
        return weapon
    return calculate_ar(data.curves, weapon, stats, options)


# =============================================================================
# SCALING GRADE
# =============================================================================

def get_scaling_grade(raw_scaling: float) -> str:
    """
    Letter grade of a rate-adjusted scaling value.

    0 -> "-", then S/A/B/C/D by threshold, E for anything smaller.
    """
    if raw_scaling == 0:
        return "-"
    for threshold, grade in SCALING_GRADE_THRESHOLDS:
        if raw_scaling >= threshold:
            return grade
    return "E"
