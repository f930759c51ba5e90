"""
Elden Ring AR Calculator - Core Constants
==========================================
Single source of truth for game constants, enums, and reference data.

All values match the reverse-engineered reference dataset unless noted otherwise.
"""

from enum import Enum
from typing import Dict, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class Stat(Enum):
    """The five attributes that drive weapon scaling."""
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    FAITH = "faith"
    ARCANE = "arcane"


class DamageType(Enum):
    """The five attack rating damage types."""
    PHYSICAL = "physical"
    MAGIC = "magic"
    FIRE = "fire"
    LIGHTNING = "lightning"
    HOLY = "holy"


class StatusEffectType(Enum):
    """Status buildup carried by a weapon."""
    POISON = "poison"
    SCARLET_ROT = "scarletRot"
    BLEED = "bleed"
    FROST = "frost"
    SLEEP = "sleep"
    MADNESS = "madness"


# Fixed iteration orders (match the param file column order)
STATS: Tuple[Stat, ...] = tuple(Stat)
DAMAGE_TYPES: Tuple[DamageType, ...] = tuple(DamageType)
STATUS_EFFECTS: Tuple[StatusEffectType, ...] = tuple(StatusEffectType)


# =============================================================================
# CORE DAMAGE CONSTANTS (VERIFIED)
# =============================================================================

# Effective attribute cap after bonuses (distinct from the 99 level cap)
MAX_EFFECTIVE_STAT = 148

# Two-handing multiplies strength by 1.5, floored
TWO_HAND_STRENGTH_MULT = 1.5

# Unmet damage requirement: scaling is replaced by base × -0.4
REQUIREMENT_PENALTY_SCALING = -0.4

# Unmet arcane requirement on a status effect: total × 0.6
STATUS_REQUIREMENT_PENALTY = 0.6

# Catalyst spell scaling uses a fixed base of 100
SPELL_SCALING_BASE = 100.0

# Unmet catalyst requirement: total collapses to base × 0.6
SPELL_REQUIREMENT_PENALTY = 0.6

# SpEffect ids at or above this value were added by an affinity
# (e.g. 105000 Blood bleed); innate effects sit below it (e.g. 6401 bleed).
AFFINITY_SP_EFFECT_ID_THRESHOLD = 100000

# Guard damage negation is capped at 100%
GUARD_NEGATION_CAP = 100.0

# Bullet PWU ramp: 1 + 3 × (level / maxLevel) -> 1.0 at +0, 4.0 at max
PWU_RAMP = 3.0

# swordArtsParamId meaning "no skill"
NO_SKILL_ID = 10

# gemMountType value for weapons that accept Ashes of War
GEM_MOUNT_TYPE_AOW = 2


# =============================================================================
# WEAPON TYPES (wepType from EquipParamWeapon)
# =============================================================================

FIST_WEP_TYPE = 35
LIGHT_BOW_WEP_TYPE = 50
BOW_WEP_TYPE = 51
GREATBOW_WEP_TYPE = 53
BALLISTA_WEP_TYPE = 56

# Ranged weapons that are always held in two hands
ALWAYS_TWO_HANDED_WEP_TYPES = frozenset({
    LIGHT_BOW_WEP_TYPE,
    BOW_WEP_TYPE,
    GREATBOW_WEP_TYPE,
    BALLISTA_WEP_TYPE,
})

WEAPON_CLASS_MAP: Dict[int, str] = {
    # Melee weapons
    1: "Dagger",
    3: "Straight Sword",
    5: "Greatsword",
    7: "Colossal Sword",
    9: "Curved Sword",
    11: "Curved Greatsword",
    13: "Katana",
    14: "Twinblade",
    15: "Thrusting Sword",
    16: "Heavy Thrusting Sword",
    17: "Axe",
    19: "Greataxe",
    21: "Hammer",
    23: "Great Hammer",
    24: "Flail",
    25: "Spear",
    28: "Great Spear",
    29: "Halberd",
    31: "Reaper",
    33: "Unarmed",
    35: "Fist",
    37: "Claw",
    39: "Whip",
    41: "Colossal Weapon",
    # Ranged weapons
    50: "Light Bow",
    51: "Bow",
    53: "Greatbow",
    55: "Crossbow",
    56: "Ballista",
    # Catalysts
    57: "Glintstone Staff",
    61: "Sacred Seal",
    # Shields
    65: "Small Shield",
    67: "Medium Shield",
    69: "Greatshield",
    # Other
    87: "Torch",
    # DLC categories
    88: "Hand-to-Hand",
    89: "Perfume Bottle",
    90: "Thrusting Shield",
    91: "Throwing Blade",
    92: "Backhand Blade",
    93: "Light Greatsword",
    94: "Great Katana",
    95: "Beast Claw",
}

WEAPON_CLASS_NAME_TO_ID: Dict[str, int] = {name: wep_id for wep_id, name in WEAPON_CLASS_MAP.items()}


# =============================================================================
# ATTACK ATTRIBUTES
# =============================================================================

ATK_ATTRIBUTE_USE_WEAPON = 252   # Defer to the weapon's atkAttribute field
ATK_ATTRIBUTE_USE_FLAGS = 253    # Defer to the weapon's is*AttackType flags

ATTACK_ATTRIBUTE_MAP: Dict[int, str] = {
    0: "Standard",
    1: "Strike",
    2: "Slash",
    3: "Pierce",
    252: "-",
    253: "-",
    255: "-",
}


# =============================================================================
# SCALING GRADES
# =============================================================================

# (minimum rate-adjusted value, letter), checked top to bottom
SCALING_GRADE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (175, "S"),
    (140, "A"),
    (90, "B"),
    (60, "C"),
    (25, "D"),
)


# =============================================================================
# DATA BUILDER FIELD NAMES
# =============================================================================
# The precomputed JSON bundle keeps the param file's field names. These maps
# translate them to the closed enums above.

# ReinforceParamWeapon attack rate per damage type
ATTACK_RATE_FIELDS: Dict[DamageType, str] = {
    DamageType.PHYSICAL: "physicsAtkRate",
    DamageType.MAGIC: "magicAtkRate",
    DamageType.FIRE: "fireAtkRate",
    DamageType.LIGHTNING: "thunderAtkRate",
    DamageType.HOLY: "darkAtkRate",
}

# ReinforceParamWeapon scaling rate per stat
SCALING_RATE_FIELDS: Dict[Stat, str] = {
    Stat.STRENGTH: "correctStrengthRate",
    Stat.DEXTERITY: "correctAgilityRate",
    Stat.INTELLIGENCE: "correctMagicRate",
    Stat.FAITH: "correctFaithRate",
    Stat.ARCANE: "correctLuckRate",
}

# ReinforceParamWeapon guard cut rate per damage type
GUARD_RATE_FIELDS: Dict[DamageType, str] = {
    DamageType.PHYSICAL: "physicsGuardCutRate",
    DamageType.MAGIC: "magicGuardCutRate",
    DamageType.FIRE: "fireGuardCutRate",
    DamageType.LIGHTNING: "thunderGuardCutRate",
    DamageType.HOLY: "darkGuardCutRate",
}

# SpEffectParam attack power field per status effect
SP_EFFECT_FIELDS: Dict[StatusEffectType, str] = {
    StatusEffectType.POISON: "poizonAttackPower",
    StatusEffectType.SCARLET_ROT: "diseaseAttackPower",
    StatusEffectType.BLEED: "bloodAttackPower",
    StatusEffectType.FROST: "freezeAttackPower",
    StatusEffectType.SLEEP: "sleepAttackPower",
    StatusEffectType.MADNESS: "madnessAttackPower",
}

# AtkParam / AttackElementCorrect naming
AEC_STAT_NAMES: Dict[Stat, str] = {
    Stat.STRENGTH: "Strength",
    Stat.DEXTERITY: "Dexterity",
    Stat.INTELLIGENCE: "Magic",
    Stat.FAITH: "Faith",
    Stat.ARCANE: "Luck",
}

AEC_DAMAGE_TYPE_NAMES: Dict[DamageType, str] = {
    DamageType.PHYSICAL: "Physics",
    DamageType.MAGIC: "Magic",
    DamageType.FIRE: "Fire",
    DamageType.LIGHTNING: "Thunder",
    DamageType.HOLY: "Dark",
}

# Suffix used by precomputed attack rows (motionPhys, flatThun, ...)
ATTACK_FIELD_SUFFIXES: Dict[DamageType, str] = {
    DamageType.PHYSICAL: "Phys",
    DamageType.MAGIC: "Mag",
    DamageType.FIRE: "Fire",
    DamageType.LIGHTNING: "Thun",
    DamageType.HOLY: "Dark",
}

# Display labels
DAMAGE_TYPE_LABELS: Dict[DamageType, str] = {
    DamageType.PHYSICAL: "Physical",
    DamageType.MAGIC: "Magic",
    DamageType.FIRE: "Fire",
    DamageType.LIGHTNING: "Lightning",
    DamageType.HOLY: "Holy",
}

STAT_ABBREVIATIONS: Dict[Stat, str] = {
    Stat.STRENGTH: "STR",
    Stat.DEXTERITY: "DEX",
    Stat.INTELLIGENCE: "INT",
    Stat.FAITH: "FAI",
    Stat.ARCANE: "ARC",
}
