"""
Elden Ring AR Calculator - Tabular Reports
===========================================
pandas DataFrames built from calculator results, ready for display or
export (st.dataframe, to_csv...).
"""

from typing import Iterable, Optional

import pandas as pd

from core import (
    Stat,
    STATS,
    DAMAGE_TYPES,
    CurveTable,
    CalculatorOptions,
    LookupMiss,
    PlayerStats,
    ARResult,
    WeaponData,
    calculate_ar,
    get_scaling_grade,
    resolve_weapon_at_level,
)
from core.constants import DAMAGE_TYPE_LABELS, STAT_ABBREVIATIONS
from aow_data import AowCalculatorResult


def ar_breakdown_frame(result: ARResult) -> pd.DataFrame:
    """
    One row per damage type: base, scaling, total, rounded, then per-stat
    scaling contribution and display grade.
    """
    rows = []
    for damage_type in DAMAGE_TYPES:
        dt = result[damage_type]
        row = {
            "Type": DAMAGE_TYPE_LABELS[damage_type],
            "Base": dt.base,
            "Scaling": dt.scaling,
            "Total": dt.total,
            "Rounded": dt.rounded,
        }
        for stat in STATS:
            abbr = STAT_ABBREVIATIONS[stat]
            row[abbr] = dt.per_stat[stat].scaling
            row[f"{abbr} Grade"] = get_scaling_grade(dt.display_scaling[stat])
        rows.append(row)
    return pd.DataFrame(rows)


def aow_attacks_frame(result: AowCalculatorResult) -> pd.DataFrame:
    """Attack table as the spreadsheet shows it; missing values stay None."""
    rows = []
    for attack in result.attacks:
        row = {"Attack": attack.name}
        for damage_type in DAMAGE_TYPES:
            row[DAMAGE_TYPE_LABELS[damage_type]] = attack.damage[damage_type]
        row.update({
            "Stamina": attack.stamina,
            "Poise": attack.poise,
            "Attribute": attack.attack_attribute,
            "PvP": attack.pvp_multiplier,
            "Shield Chip": attack.shield_chip,
            "Bullet": attack.is_bullet,
            "Motion Damage": attack.motion_damage,
            "Bullet Damage": attack.bullet_damage,
        })
        rows.append(row)
    columns = ["Attack"] + [DAMAGE_TYPE_LABELS[t] for t in DAMAGE_TYPES] + [
        "Stamina", "Poise", "Attribute", "PvP", "Shield Chip", "Bullet", "Motion Damage", "Bullet Damage",
    ]
    return pd.DataFrame(rows, columns=columns)


def curve_series_frame(curves: CurveTable, curve_id: int,
                       levels: Optional[Iterable[int]] = None) -> pd.DataFrame:
    """Curve value and saturation per stat level (1-99 by default)."""
    if levels is None:
        levels = range(1, 100)
    series = curves.curve_series(curve_id, levels)
    return pd.DataFrame(
        [{"Level": level, "Value": value, "Saturation": value / 100} for level, value in series]
    )


def ar_by_stat_frame(data: WeaponData, weapon_name: str, affinity: str, upgrade_level: int,
                     stats: PlayerStats, stat: Stat, levels: Optional[Iterable[int]] = None,
                     options: Optional[CalculatorOptions] = None) -> pd.DataFrame:
    """
    AR as one stat varies, the others held at `stats`.

    Returns an empty frame when the weapon cannot be resolved.
    """
    if levels is None:
        levels = range(1, 100)
    columns = ["Level"] + [DAMAGE_TYPE_LABELS[t] for t in DAMAGE_TYPES] + ["Total"]

    weapon = resolve_weapon_at_level(data, weapon_name, affinity, upgrade_level)
    if isinstance(weapon, LookupMiss):
        return pd.DataFrame(columns=columns)

    rows = []
    for level in levels:
        result = calculate_ar(data.curves, weapon, stats.with_stat(stat, level), options)
        row = {"Level": level}
        for damage_type in DAMAGE_TYPES:
            row[DAMAGE_TYPE_LABELS[damage_type]] = result[damage_type].total
        row["Total"] = result.total
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)
