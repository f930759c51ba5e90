"""
Elden Ring AR Calculator - Precomputed Weapon Data
===================================================
Build-time records shipped to the calculator: base weapons at +0 with their
affinities, reinforcement rates, SpEffect status values and curves.

Everything here is read-only after construction. The from_dict constructors
accept the JSON bundle produced by the data builder (camelCase param names).

Rate table contract:
    Rates are keyed by reinforceTypeId + upgradeLevel (plain integer
    addition). The builder pre-scales reinforceTypeId (e.g. 0, 100, 2200) so
    that consecutive levels never collide with the next reinforce type. A
    missing key is a lookup miss, never an implicit rate of 1.0.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from .constants import (
    Stat,
    DamageType,
    StatusEffectType,
    STATS,
    DAMAGE_TYPES,
    STATUS_EFFECTS,
    ATTACK_RATE_FIELDS,
    SCALING_RATE_FIELDS,
    GUARD_RATE_FIELDS,
    SP_EFFECT_FIELDS,
)
from .curves import CurveTable
from .stats import WeaponRequirements


# =============================================================================
# SCALING RECORDS
# =============================================================================

@dataclass(frozen=True)
class BaseStatScaling:
    """
    Scaling of one stat before reinforcement.

    is_override means `base` already is the final scaling percentage and
    must not be multiplied by the reinforcement rate.
    """
    base: float
    curve_id: int
    is_override: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> Optional["BaseStatScaling"]:
        if not data:
            return None
        return cls(
            base=float(data["base"]),
            curve_id=int(data["curveId"]),
            is_override=bool(data.get("isOverride", False)),
        )


def _scaling_by_stat(data: Optional[Mapping]) -> Dict[Stat, Optional[BaseStatScaling]]:
    data = data or {}
    return {stat: BaseStatScaling.from_dict(data.get(stat.value)) for stat in STATS}


@dataclass(frozen=True)
class BaseDamageType:
    """Attack base and per-stat scaling of one damage type at +0."""
    attack_base: float
    scaling: Dict[Stat, Optional[BaseStatScaling]]

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> Optional["BaseDamageType"]:
        if not data:
            return None
        return cls(
            attack_base=float(data["attackBase"]),
            scaling=_scaling_by_stat(data.get("scaling")),
        )


@dataclass(frozen=True)
class BaseStatusEffect:
    """
    Status buildup reference.

    The value itself lives in SpEffectParam at
    sp_effect_behavior_id + rates.spEffectId{1,2}[slot].
    """
    sp_effect_behavior_id: int
    sp_effect_slot: int
    status_type: StatusEffectType
    arcane_scaling: float
    curve_id: int

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> Optional["BaseStatusEffect"]:
        if not data:
            return None
        return cls(
            sp_effect_behavior_id=int(data["spEffectBehaviorId"]),
            sp_effect_slot=int(data["spEffectSlot"]),
            status_type=StatusEffectType(data["statusType"]),
            arcane_scaling=float(data.get("arcaneScaling", 0)),
            curve_id=int(data.get("curveId", 0)),
        )


@dataclass(frozen=True)
class SpEffectEntry:
    """Status attack power per effect type for one SpEffect id."""
    attack_power: Dict[StatusEffectType, float]

    def get(self, status: StatusEffectType) -> float:
        return self.attack_power.get(status, 0.0)

    @classmethod
    def from_dict(cls, data: Mapping) -> "SpEffectEntry":
        return cls({s: float(data.get(SP_EFFECT_FIELDS[s], 0)) for s in STATUS_EFFECTS})


# =============================================================================
# REINFORCEMENT RATES
# =============================================================================

@dataclass(frozen=True)
class ReinforceRates:
    """Multipliers for one reinforceTypeId + upgrade level."""
    attack_rate: Dict[DamageType, float]
    scaling_rate: Dict[Stat, float]
    stamina_atk_rate: float = 1.0
    sp_effect_id_offsets: Tuple[int, int] = (0, 0)
    guard_cut_rate: Dict[DamageType, float] = field(default_factory=dict)
    stamina_guard_def_rate: float = 1.0

    def sp_effect_offset(self, slot: int) -> int:
        return self.sp_effect_id_offsets[0] if slot == 0 else self.sp_effect_id_offsets[1]

    @classmethod
    def from_dict(cls, data: Mapping) -> "ReinforceRates":
        return cls(
            attack_rate={t: float(data.get(ATTACK_RATE_FIELDS[t], 1)) for t in DAMAGE_TYPES},
            scaling_rate={s: float(data.get(SCALING_RATE_FIELDS[s], 1)) for s in STATS},
            stamina_atk_rate=float(data.get("staminaAtkRate", 1)),
            sp_effect_id_offsets=(int(data.get("spEffectId1", 0)), int(data.get("spEffectId2", 0))),
            guard_cut_rate={t: float(data.get(GUARD_RATE_FIELDS[t], 1)) for t in DAMAGE_TYPES},
            stamina_guard_def_rate=float(data.get("staminaGuardDefRate", 1)),
        )


# =============================================================================
# GUARD DATA
# =============================================================================

GUARD_RESISTANCE_FIELDS: Dict[str, str] = {
    "poison": "poison",
    "scarletRot": "scarletRot",
    "bleed": "bleed",
    "frost": "frost",
    "sleep": "sleep",
    "madness": "madness",
    "death": "death",
}


@dataclass(frozen=True)
class BaseGuardStats:
    """Guard negation (percent) per damage type plus guard boost at +0."""
    negation: Dict[DamageType, float]
    guard_boost: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "BaseGuardStats":
        data = data or {}
        return cls(
            negation={t: float(data.get(t.value, 0)) for t in DAMAGE_TYPES},
            guard_boost=float(data.get("guardBoost", 0)),
        )


# =============================================================================
# WEAPONS
# =============================================================================

@dataclass(frozen=True)
class AffinityData:
    """Everything that varies per affinity of a weapon."""
    id: int
    reinforce_type_id: int
    damage: Dict[DamageType, Optional[BaseDamageType]]
    status_effects: Dict[StatusEffectType, Optional[BaseStatusEffect]]
    weapon_scaling: Dict[Stat, float]
    sorcery_scaling: Optional[Dict[Stat, Optional[BaseStatScaling]]] = None
    incantation_scaling: Optional[Dict[Stat, Optional[BaseStatScaling]]] = None
    # spEffectBehaviorId0/1 of the weapon; derived from the status slots when absent
    sp_effect_behavior_ids: Optional[Tuple[int, int]] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "AffinityData":
        behavior_ids = None
        if "spEffectBehaviorId0" in data or "spEffectBehaviorId1" in data:
            behavior_ids = (int(data.get("spEffectBehaviorId0", 0)),
                            int(data.get("spEffectBehaviorId1", 0)))
        weapon_scaling = data.get("weaponScaling") or {}
        sorcery = data.get("sorceryScaling")
        incantation = data.get("incantationScaling")
        return cls(
            id=int(data["id"]),
            reinforce_type_id=int(data["reinforceTypeId"]),
            damage={t: BaseDamageType.from_dict(data.get(t.value)) for t in DAMAGE_TYPES},
            status_effects={s: BaseStatusEffect.from_dict(data.get(s.value)) for s in STATUS_EFFECTS},
            weapon_scaling={s: float(weapon_scaling.get(s.value, 0)) for s in STATS},
            sorcery_scaling=_scaling_by_stat(sorcery) if sorcery else None,
            incantation_scaling=_scaling_by_stat(incantation) if incantation else None,
            sp_effect_behavior_ids=behavior_ids,
        )


@dataclass(frozen=True)
class WeaponEntry:
    """Weapon-level data shared by all affinities."""
    name: str
    requirements: WeaponRequirements
    wep_type: int
    max_upgrade_level: int
    affinities: Dict[str, AffinityData]
    wepmotion_category: int = 0
    critical_value: int = 100
    is_dual_blade: bool = False
    is_enhance: bool = False
    weight: float = 0.0
    # Ash of War inputs
    attack_base_stamina: float = 0.0
    sa_weapon_damage: float = 0.0
    atk_attribute: int = 0
    atk_attribute2: int = 0
    is_normal_attack_type: bool = False
    is_slash_attack_type: bool = False
    is_blow_attack_type: bool = False
    is_thrust_attack_type: bool = False
    gem_mount_type: int = 0
    sword_arts_param_id: int = 0
    # Blocking
    guard_stats: BaseGuardStats = field(default_factory=lambda: BaseGuardStats.from_dict(None))
    guard_resistance: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: Mapping) -> "WeaponEntry":
        resistance = data.get("guardResistance") or {}
        return cls(
            name=name,
            requirements=WeaponRequirements.from_dict(data.get("requirements") or {}),
            wep_type=int(data.get("wepType", 0)),
            max_upgrade_level=int(data.get("maxUpgradeLevel", 0)),
            affinities={k: AffinityData.from_dict(v) for k, v in (data.get("affinities") or {}).items()},
            wepmotion_category=int(data.get("wepmotionCategory", 0)),
            critical_value=int(data.get("criticalValue", 100)),
            is_dual_blade=bool(data.get("isDualBlade", False)),
            is_enhance=bool(data.get("isEnhance", False)),
            weight=float(data.get("weight", 0)),
            attack_base_stamina=float(data.get("attackBaseStamina", 0)),
            sa_weapon_damage=float(data.get("saWeaponDamage", 0)),
            atk_attribute=int(data.get("atkAttribute", 0)),
            atk_attribute2=int(data.get("atkAttribute2", 0)),
            is_normal_attack_type=bool(data.get("isNormalAttackType", False)),
            is_slash_attack_type=bool(data.get("isSlashAttackType", False)),
            is_blow_attack_type=bool(data.get("isBlowAttackType", False)),
            is_thrust_attack_type=bool(data.get("isThrustAttackType", False)),
            gem_mount_type=int(data.get("gemMountType", 0)),
            sword_arts_param_id=int(data.get("swordArtsParamId", 0)),
            guard_stats=BaseGuardStats.from_dict(data.get("guardStats")),
            guard_resistance={k: float(resistance.get(f, 0)) for k, f in GUARD_RESISTANCE_FIELDS.items()},
        )


# =============================================================================
# BUNDLE
# =============================================================================

@dataclass
class WeaponData:
    """
    The complete precomputed weapon bundle.

    Attributes:
        weapons: Weapon entries keyed by display name
        reinforce_rates: Rates keyed by reinforceTypeId + upgradeLevel
        curves: Curve definitions with their saturation memo
        sp_effects: Status attack power keyed by SpEffect id
    """
    weapons: Dict[str, WeaponEntry]
    reinforce_rates: Dict[int, ReinforceRates]
    curves: CurveTable
    sp_effects: Dict[int, SpEffectEntry] = field(default_factory=dict)
    version: str = ""

    def get_rates(self, reinforce_type_id: int, upgrade_level: int) -> Optional[ReinforceRates]:
        """Exact-key rate lookup; None on a miss."""
        return self.reinforce_rates.get(reinforce_type_id + upgrade_level)

    @classmethod
    def from_dict(cls, data: Mapping, max_cached_level: Optional[int] = None) -> "WeaponData":
        return cls(
            weapons={name: WeaponEntry.from_dict(name, w) for name, w in (data.get("weapons") or {}).items()},
            reinforce_rates={int(k): ReinforceRates.from_dict(v) for k, v in (data.get("reinforceRates") or {}).items()},
            curves=CurveTable.from_dict(data.get("curves") or {}, max_cached_level=max_cached_level),
            sp_effects={int(k): SpEffectEntry.from_dict(v) for k, v in (data.get("spEffects") or {}).items()},
            version=str(data.get("version", "")),
        )
