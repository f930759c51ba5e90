"""
Shared pytest fixtures for the AR calculator test suite.

Bundles are written in the data builder's JSON shape (camelCase param
names) so the from_dict constructors are exercised by every test.

Curve 0 is linear (value == level up to 100), so saturation is simply
level / 100 and expected numbers can be checked by hand.
"""

import sys
from pathlib import Path

import pytest

# Add project dir to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core import WeaponData, CurveDefinition, build_curve_table
from aow_data import AowData


# =============================================================================
# Curves
# =============================================================================

LINEAR_CURVE = {
    "stageMaxVal": [0, 25, 50, 75, 100],
    "stageMaxGrowVal": [0, 25, 50, 75, 100],
    "adjPt_maxGrowVal": [1, 1, 1, 1, 1],
}

# Five-stage curve with ease-in then ease-out exponents
SHAPED_CURVE = {
    "stageMaxVal": [25, 60, 80, 150, 150],
    "stageMaxGrowVal": [25, 60, 80, 100, 100],
    "adjPt_maxGrowVal": [1.2, -1.2, 1, 1, 1],
}

CURVES = {"0": LINEAR_CURVE, "1": SHAPED_CURVE}


def _scaling(base, curve_id=0, is_override=False):
    entry = {"base": base, "curveId": curve_id}
    if is_override:
        entry["isOverride"] = True
    return entry


# =============================================================================
# Weapon bundle
# =============================================================================

WEAPON_BUNDLE = {
    "version": "test",
    "curves": CURVES,
    "weapons": {
        "Test Sword": {
            "wepType": 3,
            "maxUpgradeLevel": 25,
            "requirements": {"strength": 12, "dexterity": 10},
            "attackBaseStamina": 20,
            "saWeaponDamage": 15,
            "atkAttribute": 2,
            "isSlashAttackType": True,
            "isThrustAttackType": True,
            "gemMountType": 2,
            "swordArtsParamId": 100,
            "guardStats": {"physical": 90, "magic": 30, "fire": 30, "lightning": 30, "holy": 30,
                           "guardBoost": 40},
            "guardResistance": {"poison": 15, "bleed": 15, "death": 20},
            "affinities": {
                "Standard": {
                    "id": 1000,
                    "reinforceTypeId": 0,
                    "physical": {
                        "attackBase": 100,
                        "scaling": {"strength": _scaling(50), "dexterity": _scaling(30)},
                    },
                    "weaponScaling": {"strength": 50, "dexterity": 30},
                },
                "Magic": {
                    "id": 1800,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 80, "scaling": {"strength": _scaling(40)}},
                    "magic": {"attackBase": 80, "scaling": {"intelligence": _scaling(60)}},
                    "weaponScaling": {"strength": 40, "intelligence": 60},
                },
                "Blood": {
                    "id": 1100,
                    "reinforceTypeId": 100,
                    "physical": {
                        "attackBase": 90,
                        "scaling": {"strength": _scaling(40), "dexterity": _scaling(25)},
                    },
                    "weaponScaling": {"strength": 40, "dexterity": 25, "arcane": 40},
                    "spEffectBehaviorId0": 105000,
                    "spEffectBehaviorId1": 6511,
                    "bleed": {"spEffectBehaviorId": 105000, "spEffectSlot": 0, "statusType": "bleed",
                              "arcaneScaling": 40, "curveId": 0},
                    "poison": {"spEffectBehaviorId": 6511, "spEffectSlot": 1, "statusType": "poison",
                               "arcaneScaling": 40, "curveId": 0},
                },
            },
        },
        "Test Bow": {
            "wepType": 51,
            "maxUpgradeLevel": 25,
            "requirements": {"strength": 10, "dexterity": 10},
            "swordArtsParamId": 10,
            "affinities": {
                "Standard": {
                    "id": 2000,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 100, "scaling": {"strength": _scaling(60)}},
                    "weaponScaling": {"strength": 60},
                },
            },
        },
        "Test Fist": {
            "wepType": 35,
            "maxUpgradeLevel": 25,
            "affinities": {
                "Standard": {
                    "id": 3000,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 100, "scaling": {"strength": _scaling(60)}},
                },
            },
        },
        "Test Twinblade": {
            "wepType": 14,
            "isDualBlade": True,
            "maxUpgradeLevel": 25,
            "affinities": {
                "Standard": {
                    "id": 4000,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 100, "scaling": {"strength": _scaling(60)}},
                },
            },
        },
        "Arcane Knife": {
            "wepType": 1,
            "maxUpgradeLevel": 25,
            "requirements": {"dexterity": 8, "arcane": 20},
            "affinities": {
                "Standard": {
                    "id": 5000,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 80, "scaling": {"dexterity": _scaling(30)}},
                    "weaponScaling": {"dexterity": 30, "arcane": 50},
                    "bleed": {"spEffectBehaviorId": 6401, "spEffectSlot": 0, "statusType": "bleed",
                              "arcaneScaling": 50, "curveId": 0},
                },
            },
        },
        "Test Staff": {
            "wepType": 57,
            "maxUpgradeLevel": 25,
            "requirements": {"intelligence": 20},
            "affinities": {
                "Standard": {
                    "id": 6000,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 30, "scaling": {"strength": _scaling(20)}},
                    "sorceryScaling": {"intelligence": _scaling(150)},
                    "weaponScaling": {"strength": 20, "intelligence": 150},
                },
            },
        },
        "Override Seal": {
            "wepType": 61,
            "maxUpgradeLevel": 25,
            "affinities": {
                "Standard": {
                    "id": 7000,
                    "reinforceTypeId": 0,
                    "physical": {"attackBase": 30},
                    "incantationScaling": {"faith": _scaling(200, is_override=True)},
                },
            },
        },
    },
    "reinforceRates": {
        "0": {},
        "10": {
            "physicsAtkRate": 1.5, "magicAtkRate": 1.5,
            "correctStrengthRate": 1.2, "correctAgilityRate": 1.2, "correctMagicRate": 1.2,
            "correctFaithRate": 1.2, "correctLuckRate": 1.2,
            "staminaAtkRate": 1.1,
            "physicsGuardCutRate": 1.2, "staminaGuardDefRate": 1.25,
        },
        "25": {
            "physicsAtkRate": 2.0, "magicAtkRate": 2.0,
            "correctStrengthRate": 1.5, "correctAgilityRate": 1.2, "correctMagicRate": 1.5,
            "correctFaithRate": 1.5, "correctLuckRate": 1.5,
            "staminaAtkRate": 1.2,
        },
        "100": {"spEffectId1": 0, "spEffectId2": 0},
        "103": {"spEffectId1": 3, "spEffectId2": 0},
    },
    "spEffects": {
        "105000": {"bloodAttackPower": 45},
        "105003": {"bloodAttackPower": 50},
        "6511": {"poizonAttackPower": 60},
        "6401": {"bloodAttackPower": 50},
    },
}


# =============================================================================
# Ash of War bundle
# =============================================================================


AOW_BUNDLE = {
    "version": "test",
    "swordArts": {
        "100": {
            "name": "Spinning Slash",
            "attacks": [
                {"atkId": 1, "name": "[Straight Sword] Spinning Slash #1", "motionPhys": 1.2,
                 "motionStam": 1.0, "motionPoise": 1.5, "atkAttribute": 253,
                 "guardCutCancelRate": -20, "finalDamageRateId": 10001},
                {"atkId": 2, "name": "[Straight Sword] Spinning Slash #2", "motionPhys": 1.5,
                 "atkAttribute": 252, "pvpMultiplier": 0.7},
                {"atkId": 3, "name": "[Var1] Spinning Slash", "motionPhys": 1.0},
                {"atkId": 4, "name": "[Dagger] Spinning Slash #1", "motionPhys": 0.9},
                {"atkId": 5, "name": "Spinning Slash #1", "motionPhys": 1.1},
                {"atkId": 6, "name": "Spinning Slash (Lacking FP)", "motionPhys": 0.5},
            ],
        },
        "200": {
            "name": "Glintblade Phalanx",
            "attacks": [
                {"atkId": 20, "name": "Glintblade Phalanx Bullet", "flatMag": 50, "isAddBaseAtk": True,
                 "overwriteAttackElementCorrectId": 500, "atkAttribute": 3},
                {"atkId": 21, "name": "Glintblade Phalanx Slash", "motionPhys": 1.0, "atkAttribute": 2},
                {"atkId": 22, "name": "Glintblade Phalanx Plain Bullet", "flatMag": 30,
                 "isAddBaseAtk": True, "atkAttribute": 3},
            ],
        },
        "300": {
            "name": "War Cry",
            "attacks": [
                {"atkId": 30, "name": "War Cry R2", "motionPhys": 1.0, "isDisableBothHandsAtkBonus": True},
                {"atkId": 31, "name": "War Cry Bullet", "flatPhys": 40, "isAddBaseAtk": True,
                 "overwriteAttackElementCorrectId": -1, "isDisableBothHandsAtkBonus": True},
                {"atkId": 32, "name": "War Cry R1", "motionPhys": 1.0},
            ],
        },
        "400": {
            "name": "Lion's Claw",
            "attacks": [{"atkId": 40, "name": "Lion's Claw", "motionPhys": 1.6}],
        },
        "500": {"name": "Empty Skill", "attacks": []},
        "600": {
            "name": "Corpse Piler",
            "attacks": [{"atkId": 60, "name": "Corpse Piler #1", "motionPhys": 1.1}],
        },
    },
    "swordArtsByName": {
        "Spinning Slash": 100,
        "Glintblade Phalanx": 200,
        "War Cry": 300,
        "Lion's Claw": 400,
        "Empty Skill": 500,
    },
    "attackElementCorrect": {
        "500": {"isMagicCorrect_byMagic": True, "overwriteMagicCorrectRate_byMagic": 100},
    },
    "finalDamageRates": {"10001": {"physRate": 0.6}},
    "equipParamGem": {
        "1000": {"swordArtsParamId": 100, "configurableWepAttr00": True, "configurableWepAttr08": True,
                 "configurableWepAttr11": True, "canMountWep_Dagger": True,
                 "canMountWep_SwordNormal": True, "canMountWep_katana": True},
        "2000": {"swordArtsParamId": 200, "configurableWepAttr00": True, "configurableWepAttr08": True,
                 "canMountWep_SwordNormal": True},
        "3000": {"swordArtsParamId": 300, "configurableWepAttr00": True,
                 "canMountWep_SwordNormal": True, "canMountWep_SwordLarge": True},
        "4000": {"swordArtsParamId": 400, "configurableWepAttr00": True, "canMountWep_SwordLarge": True},
    },
    "weaponClassMountFieldMap": {
        "Dagger": "canMountWep_Dagger",
        "Straight Sword": "canMountWep_SwordNormal",
        "Greatsword": "canMountWep_SwordLarge",
        "Katana": "canMountWep_katana",
    },
    "affinityConfigFieldMap": {
        "Standard": "configurableWepAttr00",
        "Magic": "configurableWepAttr08",
        "Blood": "configurableWepAttr11",
    },
    "swordArtsIdToGemId": {"100": 1000, "200": 2000, "300": 3000, "400": 4000},
    "aowStatPointBonuses": {"War Cry": {"strength": 10}},
    "skillNames": {
        "100": "Spinning Slash",
        "200": "Glintblade Phalanx",
        "300": "War Cry",
        "400": "Lion's Claw",
        "600": "Corpse Piler",
    },
}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def weapon_data():
    """Fresh weapon bundle (own curve memo) per test."""
    return WeaponData.from_dict(WEAPON_BUNDLE)


@pytest.fixture
def aow_data():
    return AowData.from_dict(AOW_BUNDLE)


@pytest.fixture
def shaped_curve():
    return CurveDefinition.from_dict({"id": 1, **SHAPED_CURVE})


@pytest.fixture
def linear_curve():
    return CurveDefinition.from_dict({"id": 0, **LINEAR_CURVE})


@pytest.fixture
def curve_table(linear_curve, shaped_curve):
    return build_curve_table([linear_curve, shaped_curve])
