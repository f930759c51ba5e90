"""
Elden Ring AR Calculator - Ash of War Data
===========================================
Precomputed skill records (attacks per sword art, AttackElementCorrect
overrides, EquipParamGem compatibility) plus the calculator's input and
output types.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from core import Stat, DamageType, STATS, DAMAGE_TYPES, PlayerStats
from core.constants import AEC_STAT_NAMES, AEC_DAMAGE_TYPE_NAMES, ATTACK_FIELD_SUFFIXES

# Default PvP rate for skills (FinalDamageRateParam 10000)
DEFAULT_PVP_MULTIPLIER = 0.8

# overwriteAttackElementCorrectId: bullet uses the weapon's own scaling
USE_WEAPON_SCALING = -1

_WEAPON_CLASS_PREFIX = re.compile(r"^\[([^\]]+)\]")
_VARIANT_CLASS = re.compile(r"^Var\d+$", re.IGNORECASE)

StatDamageKey = Tuple[Stat, DamageType]


def extract_weapon_class(attack_name: str) -> Optional[str]:
    """'[Dagger] Spinning Slash #1' -> 'Dagger'; no prefix -> None."""
    match = _WEAPON_CLASS_PREFIX.match(attack_name)
    return match.group(1) if match else None


def is_variant_class(weapon_class: str) -> bool:
    """[Var1], [Var2]... mark fallback attacks for classes without explicit ones."""
    return bool(_VARIANT_CLASS.match(weapon_class))


# =============================================================================
# ATTACKS
# =============================================================================

@dataclass(frozen=True)
class AowAttack:
    """
    One hit of a skill (AtkParam_Pc row).

    Motion values are fractions (already divided by 100). Flat values are
    the bullet's raw damage.
    """
    atk_id: int
    name: str
    motion: Dict[DamageType, float]
    flat: Dict[DamageType, float]
    weapon_class: Optional[str] = None
    motion_stam: float = 0.0
    motion_poise: float = 0.0
    flat_stam: float = 0.0
    flat_poise: float = 0.0
    atk_attribute: int = 0
    guard_cut_cancel_rate: float = 0.0
    is_add_base_atk: bool = False
    # -1 = weapon scaling, >= 0 = AttackElementCorrect id, None = no scaling
    overwrite_attack_element_correct_id: Optional[int] = None
    is_disable_both_hands_atk_bonus: bool = False
    pvp_multiplier: float = DEFAULT_PVP_MULTIPLIER

    @property
    def has_motion_damage(self) -> bool:
        return any(self.motion[t] > 0 for t in DAMAGE_TYPES)

    @classmethod
    def from_dict(cls, data: Mapping,
                  final_damage_rates: Optional[Mapping[int, "FinalDamageRate"]] = None) -> "AowAttack":
        name = data["name"]
        weapon_class = data["weaponClass"] if "weaponClass" in data else extract_weapon_class(name)

        pvp = data.get("pvpMultiplier")
        if pvp is None:
            rate = (final_damage_rates or {}).get(int(data.get("finalDamageRateId", -1)))
            pvp = rate.phys_rate if rate is not None else DEFAULT_PVP_MULTIPLIER

        aec_id = data.get("overwriteAttackElementCorrectId")
        return cls(
            atk_id=int(data["atkId"]),
            name=name,
            motion={t: float(data.get("motion" + ATTACK_FIELD_SUFFIXES[t], 0)) for t in DAMAGE_TYPES},
            flat={t: float(data.get("flat" + ATTACK_FIELD_SUFFIXES[t], 0)) for t in DAMAGE_TYPES},
            weapon_class=weapon_class,
            motion_stam=float(data.get("motionStam", 0)),
            motion_poise=float(data.get("motionPoise", 0)),
            flat_stam=float(data.get("flatStam", 0)),
            flat_poise=float(data.get("flatPoise", 0)),
            atk_attribute=int(data.get("atkAttribute", 0)),
            guard_cut_cancel_rate=float(data.get("guardCutCancelRate", 0)),
            is_add_base_atk=bool(data.get("isAddBaseAtk", False)),
            overwrite_attack_element_correct_id=int(aec_id) if aec_id is not None else None,
            is_disable_both_hands_atk_bonus=bool(data.get("isDisableBothHandsAtkBonus", False)),
            pvp_multiplier=float(pvp),
        )


@dataclass(frozen=True)
class AttackElementCorrectEntry:
    """
    Which stats scale which damage types for a bullet, with optional
    override percentages (negative = use the weapon's own value).
    """
    id: int
    affects: Dict[StatDamageKey, bool]
    overrides: Dict[StatDamageKey, float]

    def __post_init__(self):
        expected = {(s, t) for s in STATS for t in DAMAGE_TYPES}
        for label, matrix in (("affects", self.affects), ("overrides", self.overrides)):
            if set(matrix) != expected:
                raise ValueError(
                    f"AttackElementCorrect {self.id}: {label} must cover all "
                    f"{len(expected)} stat/damage type pairs"
                )

    def stat_affects(self, stat: Stat, damage_type: DamageType) -> bool:
        return self.affects[(stat, damage_type)]

    def override(self, stat: Stat, damage_type: DamageType) -> float:
        return self.overrides[(stat, damage_type)]

    @classmethod
    def from_dict(cls, data: Mapping) -> "AttackElementCorrectEntry":
        affects = {}
        overrides = {}
        for stat in STATS:
            for damage_type in DAMAGE_TYPES:
                suffix = f"{AEC_STAT_NAMES[stat]}Correct"
                by = f"_by{AEC_DAMAGE_TYPE_NAMES[damage_type]}"
                affects[(stat, damage_type)] = bool(data.get(f"is{suffix}{by}", False))
                overrides[(stat, damage_type)] = float(data.get(f"overwrite{AEC_STAT_NAMES[stat]}CorrectRate{by}", -1))
        return cls(id=int(data["id"]), affects=affects, overrides=overrides)


@dataclass(frozen=True)
class FinalDamageRate:
    """FinalDamageRateParam row (PvP multipliers)."""
    id: int
    phys_rate: float = 1.0
    mag_rate: float = 1.0
    fire_rate: float = 1.0
    thun_rate: float = 1.0
    dark_rate: float = 1.0
    stamina_rate: float = 1.0
    sa_rate: float = 1.0

    @classmethod
    def from_dict(cls, data: Mapping) -> "FinalDamageRate":
        return cls(
            id=int(data["id"]),
            phys_rate=float(data.get("physRate", 1)),
            mag_rate=float(data.get("magRate", 1)),
            fire_rate=float(data.get("fireRate", 1)),
            thun_rate=float(data.get("thunRate", 1)),
            dark_rate=float(data.get("darkRate", 1)),
            stamina_rate=float(data.get("staminaRate", 1)),
            sa_rate=float(data.get("saRate", 1)),
        )


@dataclass(frozen=True)
class GemEntry:
    """
    EquipParamGem row: which affinities (configurableWepAttrXX) and weapon
    classes (canMountWep_*) an Ash of War accepts.
    """
    id: int
    name: str
    sword_arts_param_id: int
    flags: Dict[str, bool]
    mount_wep_text_id: int = 0

    def allows(self, field_name: str) -> bool:
        return self.flags.get(field_name, False) is True

    @classmethod
    def from_dict(cls, data: Mapping) -> "GemEntry":
        flags = {
            key: bool(value) for key, value in data.items()
            if key.startswith("configurableWepAttr") or key.startswith("canMountWep_")
        }
        return cls(
            id=int(data["id"]),
            name=str(data.get("name", "")),
            sword_arts_param_id=int(data.get("swordArtsParamId", 0)),
            flags=flags,
            mount_wep_text_id=int(data.get("mountWepTextId", 0)),
        )


@dataclass(frozen=True)
class SwordArt:
    sword_arts_id: int
    name: str
    attacks: Tuple[AowAttack, ...]

    @classmethod
    def from_dict(cls, data: Mapping,
                  final_damage_rates: Optional[Mapping[int, FinalDamageRate]] = None) -> "SwordArt":
        return cls(
            sword_arts_id=int(data["swordArtsId"]),
            name=data["name"],
            attacks=tuple(AowAttack.from_dict(a, final_damage_rates) for a in data.get("attacks") or []),
        )


def _stat_bonus_from_dict(data: Mapping) -> Dict[Stat, float]:
    return {stat: float(data.get(stat.value, 0)) for stat in STATS}


def derive_explicit_weapon_classes(sword_arts: Mapping[int, SwordArt]) -> Dict[str, List[str]]:
    """AoW name -> weapon classes with explicit (non [VarN]) attacks."""
    result = {}
    for sword_art in sword_arts.values():
        classes = []
        for attack in sword_art.attacks:
            wc = attack.weapon_class
            if wc and not is_variant_class(wc) and wc not in classes:
                classes.append(wc)
        if classes:
            result[sword_art.name] = classes
    return result


# =============================================================================
# BUNDLE
# =============================================================================

@dataclass
class AowData:
    """
    Complete precomputed Ash of War bundle.

    Attributes:
        sword_arts: Skills by swordArtsParamId (attacks in param order)
        sword_arts_by_name: Mountable/known skill name -> id
        attack_element_correct: Bullet scaling tables by id
        equip_param_gem: Compatibility rows by gem id
        weapon_class_mount_field_map: "Dagger" -> "canMountWep_Dagger"
        affinity_config_field_map: "Standard" -> "configurableWepAttr00"
        aow_explicit_weapon_classes: AoW name -> classes with explicit attacks
        sword_arts_id_to_gem_id: swordArtsParamId -> gem id
        aow_stat_point_bonuses: AoW name -> temporary stat points
        skill_names: swordArtsParamId -> name, unique skills included
    """
    sword_arts: Dict[int, SwordArt]
    sword_arts_by_name: Dict[str, int]
    attack_element_correct: Dict[int, AttackElementCorrectEntry] = field(default_factory=dict)
    final_damage_rates: Dict[int, FinalDamageRate] = field(default_factory=dict)
    equip_param_gem: Dict[int, GemEntry] = field(default_factory=dict)
    weapon_class_mount_field_map: Dict[str, str] = field(default_factory=dict)
    affinity_config_field_map: Dict[str, str] = field(default_factory=dict)
    aow_explicit_weapon_classes: Dict[str, List[str]] = field(default_factory=dict)
    sword_arts_id_to_gem_id: Dict[int, int] = field(default_factory=dict)
    aow_stat_point_bonuses: Dict[str, Dict[Stat, float]] = field(default_factory=dict)
    skill_names: Dict[int, str] = field(default_factory=dict)
    version: str = ""

    def find_sword_arts_id(self, name: str) -> Optional[int]:
        """By AoW name first, then by unique skill name."""
        sword_arts_id = self.sword_arts_by_name.get(name)
        if sword_arts_id is not None:
            return sword_arts_id
        for skill_id, skill_name in self.skill_names.items():
            if skill_name == name:
                return skill_id
        return None

    def gem_for(self, sword_arts_id: int) -> Optional[GemEntry]:
        gem_id = self.sword_arts_id_to_gem_id.get(sword_arts_id)
        if gem_id is None:
            return None
        return self.equip_param_gem.get(gem_id)

    @classmethod
    def from_dict(cls, data: Mapping) -> "AowData":
        final_damage_rates = {
            int(k): FinalDamageRate.from_dict({"id": k, **v})
            for k, v in (data.get("finalDamageRates") or {}).items()
        }
        sword_arts = {
            int(k): SwordArt.from_dict({"swordArtsId": k, **v}, final_damage_rates)
            for k, v in (data.get("swordArts") or {}).items()
        }
        explicit = data.get("aowExplicitWeaponClasses")
        if explicit is None:
            explicit = derive_explicit_weapon_classes(sword_arts)
        return cls(
            sword_arts=sword_arts,
            sword_arts_by_name={k: int(v) for k, v in (data.get("swordArtsByName") or {}).items()},
            attack_element_correct={
                int(k): AttackElementCorrectEntry.from_dict({"id": k, **v})
                for k, v in (data.get("attackElementCorrect") or {}).items()
            },
            final_damage_rates=final_damage_rates,
            equip_param_gem={
                int(k): GemEntry.from_dict({"id": k, **v})
                for k, v in (data.get("equipParamGem") or {}).items()
            },
            weapon_class_mount_field_map=dict(data.get("weaponClassMountFieldMap") or {}),
            affinity_config_field_map=dict(data.get("affinityConfigFieldMap") or {}),
            aow_explicit_weapon_classes={k: list(v) for k, v in explicit.items()},
            sword_arts_id_to_gem_id={int(k): int(v) for k, v in (data.get("swordArtsIdToGemId") or {}).items()},
            aow_stat_point_bonuses={
                k: _stat_bonus_from_dict(v) for k, v in (data.get("aowStatPointBonuses") or {}).items()
            },
            skill_names={int(k): v for k, v in (data.get("skillNames") or {}).items()},
            version=str(data.get("version", "")),
        )


# =============================================================================
# CALCULATOR INPUT / OUTPUT
# =============================================================================

@dataclass(frozen=True)
class AowCalculatorInput:
    weapon_name: str
    affinity: str
    upgrade_level: int
    weapon_class: str
    aow_name: str
    stats: PlayerStats = field(default_factory=PlayerStats)
    two_handing: bool = False
    ignore_requirements: bool = False
    pvp_mode: bool = False
    show_lacking_fp: bool = False


@dataclass
class AowAttackResult:
    """
    One output row. Damage/stamina/poise are None where the attack deals
    none (the spreadsheet shows '-').
    """
    name: str
    atk_id: int
    damage: Dict[DamageType, Optional[float]]
    stamina: Optional[float] = None
    poise: Optional[float] = None
    attack_attribute: str = "-"
    pvp_multiplier: Optional[float] = None
    shield_chip: Optional[float] = None
    has_stat_scaling: bool = False
    is_bullet: bool = False
    motion_damage: float = 0.0
    bullet_damage: float = 0.0
    motion_by_type: Dict[DamageType, float] = field(default_factory=lambda: {t: 0.0 for t in DAMAGE_TYPES})
    bullet_by_type: Dict[DamageType, float] = field(default_factory=lambda: {t: 0.0 for t in DAMAGE_TYPES})

    @property
    def total_damage(self) -> float:
        return sum(v for v in self.damage.values() if v is not None)


@dataclass
class AowCalculatorResult:
    aow_name: str
    sword_arts_id: int
    requirements: Dict[Stat, Optional[int]]
    attacks: List[AowAttackResult]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
