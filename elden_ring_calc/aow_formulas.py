"""
Elden Ring AR Calculator - Ash of War Formulas
===============================================
Small pure formulas used by the Ash of War calculator.

Kept separate from aow_calculator so each piece can be tested against the
reference spreadsheet on its own.
"""

import math
from typing import Mapping, Optional

from core import Stat, STATS, CurveTable, DamageTypeResult
from core.constants import PWU_RAMP


# =============================================================================
# PWU (percent weapon upgrade)
# =============================================================================

def compute_pwu(upgrade_level: int, max_upgrade_level: int) -> float:
    """upgrade / max, 0 for weapons that cannot be upgraded."""
    return upgrade_level / max_upgrade_level if max_upgrade_level > 0 else 0.0


def compute_pwu_multiplier(upgrade_level: int, max_upgrade_level: int) -> float:
    """
    Bullet ramp.

    Formula:
        multiplier = 1 + 3 × PWU     (1.0 at +0, 4.0 at max)
    """
    return 1 + PWU_RAMP * compute_pwu(upgrade_level, max_upgrade_level)


# =============================================================================
# SCALING
# =============================================================================

def compute_stat_saturation(curves: CurveTable, curve_id: int, stat_level: int) -> float:
    return curves.saturation(curve_id, stat_level)


def compute_scaling_contribution(scaling_percent: float, saturation: float) -> float:
    """(scaling% / 100) × saturation"""
    return (scaling_percent / 100) * saturation


def compute_scaling_with_reinforce(overwrite_value: float, reinforce_rate: float) -> float:
    """AttackElementCorrect override values are multiplied by the weapon's stat rate."""
    return overwrite_value * reinforce_rate


# =============================================================================
# DAMAGE CHANNELS
# =============================================================================

def compute_bullet_damage(flat_damage: float, pwu_multiplier: float, total_scaling: float) -> float:
    """
    Flat (bullet) damage with stat scaling.

    Formula:
        damage = flat × PWU multiplier × (1 + Σ scaling)
    """
    if flat_damage == 0:
        return 0.0
    return flat_damage * pwu_multiplier * (1 + total_scaling)


def compute_bullet_damage_no_scaling(flat_damage: float, pwu_multiplier: float) -> float:
    if flat_damage == 0:
        return 0.0
    return flat_damage * pwu_multiplier


def compute_motion_damage(weapon_total: float, motion_value: float) -> float:
    """Weapon AR of one type × motion value (already a fraction)."""
    if motion_value == 0:
        return 0.0
    return weapon_total * motion_value


def compute_stat_point_bonus(base: float, saturation: float, bonus_points: float) -> float:
    """
    Extra AR from a skill's temporary stat points (War Cry, Barbaric Roar...).

    Formula:
        bonus = base × saturation × points / 100
    """
    if base == 0 or saturation == 0 or bonus_points == 0:
        return 0.0
    return base * saturation * (bonus_points / 100)


def compute_total_stat_point_bonus(damage_type: DamageTypeResult,
                                   stat_bonus: Optional[Mapping[Stat, float]]) -> float:
    """Stat point bonus summed over stats that already scale this damage type."""
    if not stat_bonus or damage_type.base == 0:
        return 0.0
    bonus = 0.0
    for stat in STATS:
        points = stat_bonus.get(stat, 0)
        saturation = damage_type.per_stat[stat].saturation
        if points > 0 and saturation > 0:
            bonus += compute_stat_point_bonus(damage_type.base, saturation, points)
    return bonus


# =============================================================================
# STAMINA / POISE / SHIELD CHIP
# =============================================================================

def compute_stamina_damage(weapon_base_stam: float, weapon_stam_rate: float,
                           motion_stam: float, flat_stam: float) -> float:
    return weapon_base_stam * weapon_stam_rate * motion_stam + flat_stam


def compute_poise_damage(weapon_base_poise: float, weapon_poise_rate: float,
                         motion_poise: float, flat_poise: float) -> float:
    return weapon_base_poise * weapon_poise_rate * motion_poise + flat_poise


def compute_shield_chip(guard_cut_cancel_rate: float) -> float:
    """
    Formula:
        chip = 1 - (1 + rate / 100)

    e.g. a rate of -30 gives 0.3.
    """
    if guard_cut_cancel_rate == 0:
        return 0.0
    return 1 - (1 + guard_cut_cancel_rate / 100)


# =============================================================================
# ROUNDING
# =============================================================================

def round_to(value: float, decimals: int) -> float:
    """Half-up rounding (ties go toward +infinity), matching the spreadsheet."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def round_to_3_decimals(value: float) -> float:
    return round_to(value, 3)


def round_to_2_decimals(value: float) -> float:
    return round_to(value, 2)


def round_to_4_decimals(value: float) -> float:
    return round_to(value, 4)
