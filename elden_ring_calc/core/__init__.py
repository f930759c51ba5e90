"""
Elden Ring AR Calculator - Core Math Module
============================================
Curves, reinforcement resolution and attack rating.

The Ash of War layer and the reports import from here rather than
re-implementing any of the formulas.
"""

from .constants import (
    # Enums
    Stat,
    DamageType,
    StatusEffectType,
    STATS,
    DAMAGE_TYPES,
    STATUS_EFFECTS,
    # Engine constants
    MAX_EFFECTIVE_STAT,
    TWO_HAND_STRENGTH_MULT,
    REQUIREMENT_PENALTY_SCALING,
    STATUS_REQUIREMENT_PENALTY,
    SPELL_SCALING_BASE,
    AFFINITY_SP_EFFECT_ID_THRESHOLD,
    WEAPON_CLASS_MAP,
)

from .curves import (
    CurveDefinition,
    CurveTable,
    calculate_curve_value,
    build_curve_table,
)

from .stats import (
    PlayerStats,
    WeaponRequirements,
    compute_effective_strength,
    compute_effective_stats,
    meets_requirements,
    is_always_two_handed,
)

from .weapon_data import (
    BaseStatScaling,
    BaseDamageType,
    BaseStatusEffect,
    BaseGuardStats,
    SpEffectEntry,
    ReinforceRates,
    AffinityData,
    WeaponEntry,
    WeaponData,
)

from .reinforce import (
    LookupMiss,
    ResolvedStatScaling,
    ResolvedDamageType,
    ResolvedStatusEffect,
    ResolvedWeapon,
    arcane_scaling_slots,
    get_reinforce_rates,
    resolve_weapon_at_level,
)

from .damage import (
    CalculatorOptions,
    StatScalingResult,
    DamageTypeResult,
    StatusEffectResult,
    SpellScalingResult,
    ARResult,
    calculate_ar,
    calculate_ar_at_level,
    get_scaling_grade,
)

__all__ = [
    # Constants
    'Stat',
    'DamageType',
    'StatusEffectType',
    'STATS',
    'DAMAGE_TYPES',
    'STATUS_EFFECTS',
    'MAX_EFFECTIVE_STAT',
    'TWO_HAND_STRENGTH_MULT',
    'REQUIREMENT_PENALTY_SCALING',
    'STATUS_REQUIREMENT_PENALTY',
    'SPELL_SCALING_BASE',
    'AFFINITY_SP_EFFECT_ID_THRESHOLD',
    'WEAPON_CLASS_MAP',
    # Curves
    'CurveDefinition',
    'CurveTable',
    'calculate_curve_value',
    'build_curve_table',
    # Stats
    'PlayerStats',
    'WeaponRequirements',
    'compute_effective_strength',
    'compute_effective_stats',
    'meets_requirements',
    'is_always_two_handed',
    # Weapon data
    'BaseStatScaling',
    'BaseDamageType',
    'BaseStatusEffect',
    'BaseGuardStats',
    'SpEffectEntry',
    'ReinforceRates',
    'AffinityData',
    'WeaponEntry',
    'WeaponData',
    # Reinforcement
    'LookupMiss',
    'ResolvedStatScaling',
    'ResolvedDamageType',
    'ResolvedStatusEffect',
    'ResolvedWeapon',
    'arcane_scaling_slots',
    'get_reinforce_rates',
    'resolve_weapon_at_level',
    # Attack rating
    'CalculatorOptions',
    'StatScalingResult',
    'DamageTypeResult',
    'StatusEffectResult',
    'SpellScalingResult',
    'ARResult',
    'calculate_ar',
    'calculate_ar_at_level',
    'get_scaling_grade',
]
