"""
Elden Ring AR Calculator - Ash of War Damage
=============================================
Per-attack damage of a weapon skill.

Motion attacks:
    damage = (weapon AR + stat point bonus) × motion value

Bullet attacks (isAddBaseAtk):
    damage = flat × (1 + 3 × PWU) × (1 + Σ scaling% / 100 × saturation)

Both channels are summed per damage type; a hit can have either or both.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from core import (
    Stat,
    DamageType,
    STATS,
    DAMAGE_TYPES,
    PlayerStats,
    CurveTable,
    CalculatorOptions,
    LookupMiss,
    ResolvedWeapon,
    ResolvedDamageType,
    ReinforceRates,
    WeaponData,
    WeaponEntry,
    calculate_ar,
    compute_effective_stats,
    resolve_weapon_at_level,
)
from core.constants import (
    ATK_ATTRIBUTE_USE_WEAPON,
    ATK_ATTRIBUTE_USE_FLAGS,
    ATTACK_ATTRIBUTE_MAP,
    GEM_MOUNT_TYPE_AOW,
    NO_SKILL_ID,
    WEAPON_CLASS_MAP,
)
from aow_data import (
    USE_WEAPON_SCALING,
    AowAttack,
    AowAttackResult,
    AowCalculatorInput,
    AowCalculatorResult,
    AowData,
    AttackElementCorrectEntry,
    GemEntry,
    is_variant_class,
)
from aow_formulas import (
    compute_pwu_multiplier,
    compute_stat_saturation,
    compute_scaling_contribution,
    compute_scaling_with_reinforce,
    compute_bullet_damage,
    compute_bullet_damage_no_scaling,
    compute_motion_damage,
    compute_total_stat_point_bonus,
    compute_shield_chip,
    compute_stamina_damage,
    compute_poise_damage,
    round_to_2_decimals,
    round_to_3_decimals,
    round_to_4_decimals,
)

logger = logging.getLogger(__name__)

NO_ATTACK_DATA_NAME = "No AoW Attack Data"

# saWeaponAtkRate is 1 on every ReinforceParamWeapon row
POISE_RATE = 1.0

_CLASS_PREFIX = re.compile(r"^\[[^\]]+\]\s*")
_TRAILING_NUMBER = re.compile(r"\s*#\d+$")


# =============================================================================
# ATTACK ATTRIBUTE
# =============================================================================

def resolve_attack_attribute_name(atk_attribute: int, weapon: WeaponEntry) -> str:
    """
    Display name of an attack's physical attribute.

    252 defers to the weapon's atkAttribute; 253 takes the first set flag in
    the order normal > slash > blow > thrust.
    """
    if atk_attribute == ATK_ATTRIBUTE_USE_WEAPON:
        name = ATTACK_ATTRIBUTE_MAP.get(weapon.atk_attribute)
        return name if name is not None else "Standard"

    if atk_attribute == ATK_ATTRIBUTE_USE_FLAGS:
        if weapon.is_normal_attack_type:
            return "Standard"
        if weapon.is_slash_attack_type:
            return "Slash"
        if weapon.is_blow_attack_type:
            return "Strike"
        if weapon.is_thrust_attack_type:
            return "Pierce"
        return "Standard"

    return ATTACK_ATTRIBUTE_MAP.get(atk_attribute, "-")


# =============================================================================
# ELIGIBILITY
# =============================================================================

def attack_base_name(name: str) -> str:
    """'[Greatsword] War Cry 1h R2 #1' -> 'war cry 1h r2'"""
    return _TRAILING_NUMBER.sub("", _CLASS_PREFIX.sub("", name)).strip().lower()


def filter_eligible_attacks(attacks: Iterable[AowAttack], weapon_class: str,
                            explicit_classes: Iterable[str],
                            show_lacking_fp: bool = False) -> List[AowAttack]:
    """
    Attacks shown for a weapon class.

    Two passes: the base names of this class's explicit attacks are
    collected first, because a generic attack is only dropped when an
    explicit attack with the same base name exists.

    Args:
        attacks: All attacks of the skill, in param order
        weapon_class: Class name of the weapon ("Greatsword")
        explicit_classes: Classes with explicit attacks for this skill
        show_lacking_fp: Keep the "lacking FP" variants

    Returns:
        Eligible attacks, order preserved
    """
    attacks = list(attacks)
    wanted = weapon_class.lower()

    explicit_base_names = set()
    for attack in attacks:
        if attack.weapon_class and attack.weapon_class.lower() == wanted:
            explicit_base_names.add(attack_base_name(attack.name))

    class_has_explicit = any(c.lower() == wanted for c in explicit_classes)

    eligible = []
    for attack in attacks:
        if not show_lacking_fp and "lacking fp" in attack.name.lower():
            continue

        if attack.weapon_class is None:
            generic_base = _TRAILING_NUMBER.sub("", attack.name).strip().lower()
            if generic_base in explicit_base_names:
                continue
        elif is_variant_class(attack.weapon_class):
            if class_has_explicit:
                continue
        elif attack.weapon_class.lower() != wanted:
            continue

        eligible.append(attack)
    return eligible


# =============================================================================
# COMPATIBILITY
# =============================================================================

def validate_aow_affinity(gem: GemEntry, affinity: str, affinity_config_field_map: Dict[str, str]) -> bool:
    field_name = affinity_config_field_map.get(affinity)
    if not field_name:
        logger.warning("No EquipParamGem field mapped for affinity '%s'", affinity)
        return False
    return gem.allows(field_name)


def validate_aow_weapon_type(gem: GemEntry, wep_type: int, weapon_class_mount_field_map: Dict[str, str]) -> bool:
    class_name = WEAPON_CLASS_MAP.get(wep_type)
    if class_name is None:
        return False
    field_name = weapon_class_mount_field_map.get(class_name)
    if not field_name:
        logger.warning("No EquipParamGem field mapped for weapon class '%s'", class_name)
        return False
    return gem.allows(field_name)


# =============================================================================
# BULLET DAMAGE
# =============================================================================

def damage_type_has_scaling(damage_type: Optional[ResolvedDamageType]) -> bool:
    if damage_type is None:
        return False
    return any(s is not None and s.value > 0 for s in damage_type.scaling.values())


def bullet_has_weapon_scaling(attack: AowAttack, weapon: ResolvedWeapon) -> bool:
    """A weapon-scaled bullet only scales if the weapon scales what it deals."""
    return any(
        attack.flat[t] > 0 and damage_type_has_scaling(weapon.damage.get(t))
        for t in DAMAGE_TYPES
    )


def calculate_bullet_damage(flat_damage: float, weapon: ResolvedWeapon,
                            attack_element_correct: Optional[AttackElementCorrectEntry],
                            curves: CurveTable, effective_stats: PlayerStats,
                            upgrade_level: int, max_upgrade_level: int,
                            damage_type: DamageType, rates: Optional[ReinforceRates],
                            use_weapon_scaling: bool = False) -> float:
    """
    Flat damage of one type with PWU and stat scaling.

    Scaling precedence per stat:
        1. AttackElementCorrect entry: the stat counts if flagged; an override
           >= 0 times the weapon's stat rate, otherwise the weapon's value
        2. weapon scaling (-1): the stat counts if the weapon scales it
        3. neither: PWU only

    The curve always comes from the weapon's own scaling for that stat,
    curve 0 when the weapon has none.
    """
    if flat_damage == 0:
        return 0.0

    pwu_multiplier = compute_pwu_multiplier(upgrade_level, max_upgrade_level)
    weapon_damage = weapon.damage.get(damage_type)

    if attack_element_correct is None and not use_weapon_scaling:
        return compute_bullet_damage_no_scaling(flat_damage, pwu_multiplier)

    total_scaling = 0.0
    for stat in STATS:
        weapon_scaling = weapon_damage.scaling.get(stat) if weapon_damage is not None else None

        if attack_element_correct is not None:
            if not attack_element_correct.stat_affects(stat, damage_type):
                continue
            override = attack_element_correct.override(stat, damage_type)
            if override >= 0:
                rate = rates.scaling_rate[stat] if rates is not None else 1.0
                scaling_value = compute_scaling_with_reinforce(override, rate)
            else:
                scaling_value = weapon_scaling.value if weapon_scaling is not None else 0.0
        else:
            if weapon_scaling is None or weapon_scaling.value <= 0:
                continue
            scaling_value = weapon_scaling.value

        if scaling_value == 0:
            continue

        curve_id = weapon_scaling.curve_id if weapon_scaling is not None else 0
        saturation = compute_stat_saturation(curves, curve_id, effective_stats.get(stat))
        total_scaling += compute_scaling_contribution(scaling_value, saturation)

    return compute_bullet_damage(flat_damage, pwu_multiplier, total_scaling)


# =============================================================================
# RESULT HELPERS
# =============================================================================

def _empty_requirements() -> Dict[Stat, Optional[int]]:
    return {stat: None for stat in STATS}


def _error_result(inp: AowCalculatorInput, sword_arts_id: int, message: str) -> AowCalculatorResult:
    logger.debug("AoW calculation failed: %s", message)
    return AowCalculatorResult(
        aow_name=inp.aow_name,
        sword_arts_id=sword_arts_id,
        requirements=_empty_requirements(),
        attacks=[],
        error=message,
    )


def _placeholder_result(inp: AowCalculatorInput, sword_arts_id: int) -> AowCalculatorResult:
    return AowCalculatorResult(
        aow_name=inp.aow_name,
        sword_arts_id=sword_arts_id,
        requirements=_empty_requirements(),
        attacks=[AowAttackResult(
            name=NO_ATTACK_DATA_NAME,
            atk_id=-1,
            damage={t: None for t in DAMAGE_TYPES},
        )],
    )


# =============================================================================
# MAIN CALCULATOR
# =============================================================================

def calculate_aow_damage(aow_data: AowData, weapon_data: WeaponData,
                         inp: AowCalculatorInput) -> AowCalculatorResult:
    """
    Damage of every eligible attack of a skill on a weapon.

    Args:
        aow_data: Precomputed skill bundle
        weapon_data: Precomputed weapon bundle
        inp: Weapon, stats, skill and display options

    Returns:
        AowCalculatorResult; lookup failures and incompatibilities are
        reported in `error` with empty attacks, never raised
    """
    sword_arts_id = aow_data.find_sword_arts_id(inp.aow_name)
    if sword_arts_id is None:
        return _error_result(inp, -1, f"AoW not found: {inp.aow_name}")

    sword_art = aow_data.sword_arts.get(sword_arts_id)
    if sword_art is None or not sword_art.attacks:
        return _placeholder_result(inp, sword_arts_id)

    weapon = weapon_data.weapons.get(inp.weapon_name)
    if weapon is None:
        return _error_result(inp, sword_arts_id, f"Weapon not found: {inp.weapon_name}")

    if inp.affinity not in weapon.affinities:
        return _error_result(inp, sword_arts_id, f"Affinity not found: {inp.affinity}")

    resolved = resolve_weapon_at_level(weapon_data, inp.weapon_name, inp.affinity, inp.upgrade_level)
    if isinstance(resolved, LookupMiss):
        return _error_result(inp, sword_arts_id, f"Failed to resolve weapon at level {inp.upgrade_level}")

    # Compatibility only applies to mountable Ashes of War
    gem = aow_data.gem_for(sword_arts_id)
    if gem is not None:
        if not validate_aow_affinity(gem, inp.affinity, aow_data.affinity_config_field_map):
            return _error_result(
                inp, sword_arts_id,
                f'AoW "{inp.aow_name}" is not compatible with affinity "{inp.affinity}"')
        if not validate_aow_weapon_type(gem, weapon.wep_type, aow_data.weapon_class_mount_field_map):
            return _error_result(
                inp, sword_arts_id,
                f'AoW "{inp.aow_name}" is not compatible with weapon type "{weapon.wep_type}"')

    curves = weapon_data.curves
    rates = resolved.rates
    effective = compute_effective_stats(inp.stats, inp.two_handing, weapon.wep_type, weapon.is_dual_blade)
    weapon_ar = calculate_ar(curves, resolved, inp.stats,
                             CalculatorOptions(inp.two_handing, inp.ignore_requirements))

    # One-handed AR for hits that ignore the two-handing bonus
    weapon_ar_1h = None
    effective_1h = effective
    if inp.two_handing and any(a.is_disable_both_hands_atk_bonus for a in sword_art.attacks):
        weapon_ar_1h = calculate_ar(curves, resolved, inp.stats,
                                    CalculatorOptions(False, inp.ignore_requirements))
        effective_1h = weapon_ar_1h.effective_stats

    stat_bonus = aow_data.aow_stat_point_bonuses.get(inp.aow_name)
    bonus_ar = {t: compute_total_stat_point_bonus(weapon_ar[t], stat_bonus) for t in DAMAGE_TYPES}
    bonus_ar_1h = {t: 0.0 for t in DAMAGE_TYPES}
    if weapon_ar_1h is not None:
        bonus_ar_1h = {t: compute_total_stat_point_bonus(weapon_ar_1h[t], stat_bonus) for t in DAMAGE_TYPES}

    eligible = filter_eligible_attacks(
        sword_art.attacks,
        inp.weapon_class,
        aow_data.aow_explicit_weapon_classes.get(inp.aow_name, []),
        inp.show_lacking_fp,
    )

    results = []
    for attack in eligible:
        aec_id = attack.overwrite_attack_element_correct_id
        aec = aow_data.attack_element_correct.get(aec_id) if aec_id is not None and aec_id >= 0 else None
        use_weapon_scaling = aec_id == USE_WEAPON_SCALING

        has_bullet_scaling = attack.is_add_base_atk and (
            aec is not None or (use_weapon_scaling and bullet_has_weapon_scaling(attack, resolved))
        )

        one_handed = attack.is_disable_both_hands_atk_bonus and weapon_ar_1h is not None
        ar = weapon_ar_1h if one_handed else weapon_ar
        bonus = bonus_ar_1h if one_handed else bonus_ar
        stats_for_bullet = effective_1h if one_handed else effective

        damage = {}
        motion_by_type = {}
        bullet_by_type = {}
        motion_total = 0.0
        bullet_total = 0.0
        for t in DAMAGE_TYPES:
            motion_dmg = 0.0
            bullet_dmg = 0.0
            if attack.motion[t] > 0:
                motion_dmg = compute_motion_damage(ar[t].total + bonus[t], attack.motion[t])
            if attack.flat[t] > 0 and attack.is_add_base_atk:
                bullet_dmg = calculate_bullet_damage(
                    attack.flat[t], resolved, aec, curves, stats_for_bullet,
                    inp.upgrade_level, weapon.max_upgrade_level, t, rates, use_weapon_scaling,
                )
            motion_total += motion_dmg
            bullet_total += bullet_dmg
            combined = motion_dmg + bullet_dmg
            damage[t] = round_to_3_decimals(combined) if combined > 0 else None
            motion_by_type[t] = round_to_3_decimals(motion_dmg)
            bullet_by_type[t] = round_to_3_decimals(bullet_dmg)

        stamina = None
        if attack.motion_stam > 0 or attack.flat_stam > 0:
            stam_rate = rates.stamina_atk_rate if rates is not None else 1.0
            value = compute_stamina_damage(weapon.attack_base_stamina, stam_rate,
                                           attack.motion_stam, attack.flat_stam)
            stamina = round_to_3_decimals(value) if value > 0 else None

        poise = None
        if attack.motion_poise > 0 or attack.flat_poise > 0:
            value = compute_poise_damage(weapon.sa_weapon_damage, POISE_RATE,
                                         attack.motion_poise, attack.flat_poise)
            poise = round_to_2_decimals(value) if value > 0 else None

        shield_chip = None
        if attack.guard_cut_cancel_rate != 0:
            shield_chip = round_to_4_decimals(compute_shield_chip(attack.guard_cut_cancel_rate))

        results.append(AowAttackResult(
            name=attack.name,
            atk_id=attack.atk_id,
            damage=damage,
            stamina=stamina,
            poise=poise,
            attack_attribute=resolve_attack_attribute_name(attack.atk_attribute, weapon),
            pvp_multiplier=attack.pvp_multiplier if inp.pvp_mode else None,
            shield_chip=shield_chip,
            has_stat_scaling=attack.has_motion_damage or has_bullet_scaling,
            is_bullet=attack.is_add_base_atk,
            motion_damage=round_to_3_decimals(motion_total),
            bullet_damage=round_to_3_decimals(bullet_total),
            motion_by_type=motion_by_type,
            bullet_by_type=bullet_by_type,
        ))

    return AowCalculatorResult(
        aow_name=inp.aow_name,
        sword_arts_id=sword_arts_id,
        requirements={
            stat: weapon.requirements.get(stat) if weapon.requirements.get(stat) > 0 else None
            for stat in STATS
        },
        attacks=results,
    )


# =============================================================================
# CATALOG HELPERS
# =============================================================================

def get_available_aow_names(aow_data: AowData, weapon_class: Optional[str] = None,
                            affinity: Optional[str] = None) -> List[str]:
    """
    Mountable Ashes of War for a weapon class and affinity, sorted.

    Skills without a gem entry (unique weapon skills) are never listed.
    An unmapped class or affinity (bows, staves...) gives an empty list.
    """
    class_field = aow_data.weapon_class_mount_field_map.get(weapon_class) if weapon_class else None
    affinity_field = aow_data.affinity_config_field_map.get(affinity) if affinity else None

    if weapon_class and not class_field:
        return []
    if affinity and not affinity_field:
        return []

    names = []
    for name, sword_arts_id in aow_data.sword_arts_by_name.items():
        gem = aow_data.gem_for(sword_arts_id)
        if gem is None:
            continue
        if class_field and not gem.allows(class_field):
            continue
        if affinity_field and not gem.allows(affinity_field):
            continue
        names.append(name)
    return sorted(names)


def get_aow_attacks(aow_data: AowData, aow_name: str) -> List[AowAttack]:
    sword_arts_id = aow_data.sword_arts_by_name.get(aow_name)
    if sword_arts_id is None:
        return []
    sword_art = aow_data.sword_arts.get(sword_arts_id)
    return list(sword_art.attacks) if sword_art is not None else []


def can_weapon_mount_aow(weapon_data: WeaponData, weapon_name: str) -> bool:
    """Only gemMountType 2 accepts Ashes of War; 0/1 are fixed-skill weapons."""
    weapon = weapon_data.weapons.get(weapon_name)
    return weapon is not None and weapon.gem_mount_type == GEM_MOUNT_TYPE_AOW


def get_weapon_skill_name(aow_data: AowData, weapon_data: WeaponData, weapon_name: str) -> Optional[str]:
    """Built-in skill of a weapon, None for "no skill" (id 10) or unknown."""
    weapon = weapon_data.weapons.get(weapon_name)
    if weapon is None:
        return None
    sword_arts_id = weapon.sword_arts_param_id
    if not sword_arts_id or sword_arts_id == NO_SKILL_ID:
        return None
    return aow_data.skill_names.get(sword_arts_id)


def get_unique_skill_names(aow_data: AowData) -> List[str]:
    """Skills with no EquipParamGem entry (Corpse Piler, Waterfowl Dance...)."""
    if not aow_data.skill_names:
        return []

    unique = []
    seen = set()
    for name, sword_arts_id in aow_data.sword_arts_by_name.items():
        if sword_arts_id not in aow_data.sword_arts_id_to_gem_id:
            unique.append(name)
            seen.add(name)

    for skill_id, name in aow_data.skill_names.items():
        if name in seen:
            continue
        if skill_id not in aow_data.sword_arts_id_to_gem_id:
            unique.append(name)
            seen.add(name)

    return sorted(unique)
