"""Pytest configuration and fixtures."""

import pytest

from anvil.engine.resolver import FighterResolver
from anvil.models.catalog import ReferenceCatalog
from anvil.models.selection import BuildSelection

_BASE_MELEE = {
    "range": [0, "baseReach"],
    "attacks": "baseAttacks",
    "strength": "baseStrength",
    "damage": "baseDamage",
    "crit": "baseCrit",
}

CATALOG_DATA = {
    "fighters": [
        {
            "name": "Human",
            "points": 60,
            "stats": {"Mv": 4, "T": 4, "W": 20, "R": 1, "A": 3, "S": 3, "D": 1, "C": 4},
            "runemarks": [],
            "factionRunemarks": ["Order", "Chaos"],
        },
        {
            "name": "Ogre",
            "points": 150,
            "stats": {"Mv": 4, "T": 5, "W": 30, "R": 2, "A": 4, "S": 5, "D": 2, "C": 5},
            "runemarks": ["Brute"],
            "factionRunemarks": ["Destruction"],
        },
        {
            "name": "Malignant",
            "points": 90,
            "stats": {"Mv": 5, "T": 3, "W": 18, "R": 1, "A": 3, "S": 3, "D": 1, "C": 4},
            "runemarks": ["Fly"],
            "factionRunemarks": [],
        },
    ],
    "archetypes": [
        {"name": "Commander", "points": 15, "fighterEffects": {"woundsBonus": 5}, "runemarksAdded": ["Leader"]},
        {"name": "Warrior", "points": 0, "fighterEffects": {"meleeAttackMin": 4}},
        {
            "name": "Zealot",
            "points": 10,
            "fighterEffects": {"movementBonus": 1},
            "runemarksAdded": ["Berserker"],
            "restrictions": {"forbiddenFighters": ["Ogre"], "forbiddenFactions": []},
        },
        {
            "name": "Mage",
            "points": 20,
            "runemarksAdded": ["Mystic"],
            "restrictions": {
                "forbiddenFighters": [],
                "forbiddenFactions": ["Chaos"],
                "mustUseOneHandedPrimary": True,
                "forbidSecondaryEquipment": True,
            },
            "profile": {"name": "Arcane Bolt", "range": [3, 12], "attacks": 2, "strength": 3, "damage": 2, "crit": 5},
        },
        {
            "name": "Brawler",
            "points": 5,
            "profile": {
                "name": "Headbutt",
                "range": [0, "baseReach"],
                "attacks": "baseAttacks",
                "strength": "baseStrength",
                "damage": 1,
                "crit": 2,
            },
        },
    ],
    "primaryWeapons": [
        {"name": "Hand Weapon", "points": 0, "handedness": "one", "profile": _BASE_MELEE},
        {"name": "Spear", "points": 5, "handedness": "one", "profile": _BASE_MELEE, "effects": {"rangeBonus": 1}},
        {
            "name": "Great Weapon",
            "points": 15,
            "handedness": "two",
            "profile": _BASE_MELEE,
            "effects": {"strengthBonus": 1, "damageBonus": 1, "critBonus": 1},
        },
        {
            "name": "Bow",
            "points": 20,
            "handedness": "two",
            "profile": {"range": [3, 15], "attacks": 2, "strength": 3, "damage": 1, "crit": 4},
            "fighterEffects": {"treatAsUnarmedInMelee": True},
        },
        {
            "name": "Pistol",
            "points": 10,
            "handedness": "one",
            "profile": {"range": [3, 10], "attacks": 2, "strength": 4, "damage": 2, "crit": 4},
        },
        {
            "name": "Long Pike",
            "points": 20,
            "handedness": "two",
            "profile": {"range": [0, 4], "attacks": 3, "strength": 4, "damage": 1, "crit": 3},
        },
    ],
    "secondaryWeapons": [
        {"name": "Shield", "points": 10, "fighterEffects": {"toughnessBonus": 1}},
        {
            "name": "Dagger",
            "points": 10,
            "profile": {
                "range": [0, 1],
                "attacks": 2,
                "strength": "baseStrength",
                "damage": "baseDamage",
                "crit": "baseCrit",
                "weaponRunemark": "Dagger",
            },
        },
        {
            "name": "Throwing Axes",
            "points": 10,
            "profile": {"range": [3, 8], "attacks": 2, "strength": 3, "damage": 1, "crit": 3},
        },
    ],
    "mounts": [
        {
            "name": "Warhorse",
            "points": 40,
            "fighterEffects": {"movementBonus": 4, "woundsBonus": 4},
            "restrictions": {"forbiddenFighters": ["Ogre"], "maxMovement": 7},
            "runemarksAdded": ["Mounted"],
            "profile": {"name": "Hooves", "range": [0, 1], "attacks": 2, "strength": 3, "damage": 1, "crit": 3},
        },
        {
            "name": "Spectral Steed",
            "points": 35,
            "fighterEffects": {"movementBonus": 3},
            "restrictions": {
                "forbiddenFighters": ["Ogre"],
                "maxMovement": 10,
                "noMountedRunemarkFor": ["Malignant"],
            },
            "runemarksAdded": ["Mounted", "Ethereal"],
        },
    ],
    "divineBlessings": [
        {
            "name": "Fury",
            "pointsLow": 10,
            "pointsHigh": 20,
            "weaponEffect": {"attackBonus": 1},
            "targetProfile": "melee",
            "targetable": True,
            "description": "Add 1 to the Attacks of one melee weapon.",
        },
        {
            "name": "Might",
            "pointsLow": 15,
            "pointsHigh": 25,
            "weaponEffect": {"strengthBonus": 1, "damageBonus": 1},
            "targetProfile": "any",
            "targetable": True,
        },
        {"name": "Endurance", "pointsLow": 10, "pointsHigh": 20, "fighterEffects": {"woundsBonus": 3}},
        {"name": "Swiftness", "pointsLow": 5, "pointsHigh": 10, "fighterEffects": {"movementBonus": 2}},
        {"name": "Plain", "pointsLow": 10, "pointsHigh": 20, "specialEffect": "Nothing visible."},
    ],
    "extraRunemarks": [
        {"name": "Fly", "points": 15, "restrictions": {"cannotBeMounted": True}},
        {"name": "Agile", "points": 5},
        {"name": "Leader", "points": 5},
        {"name": "Scout", "points": 5},
    ],
    "rules": {
        "maxRunemarks": 3,
        "maxAttackActions": 2,
        "unarmedPenalties": {
            "attackPenalty": -1,
            "damagePenalty": -1,
            "critPenalty": -1,
            "minimumValues": {"attacks": 1, "damage": 1, "crit": 1},
        },
    },
}


def _catalog_input() -> dict:
    """Catalog data keyed by catalog field name."""
    return {
        "fighters": CATALOG_DATA["fighters"],
        "archetypes": CATALOG_DATA["archetypes"],
        "primary_weapons": CATALOG_DATA["primaryWeapons"],
        "secondary_weapons": CATALOG_DATA["secondaryWeapons"],
        "mounts": CATALOG_DATA["mounts"],
        "divine_blessings": CATALOG_DATA["divineBlessings"],
        "extra_runemarks": CATALOG_DATA["extraRunemarks"],
        "rules": CATALOG_DATA["rules"],
    }


@pytest.fixture
def catalog() -> ReferenceCatalog:
    """Small reference catalog covering every rule."""
    return ReferenceCatalog.model_validate(_catalog_input())


@pytest.fixture
def resolver(catalog) -> FighterResolver:
    """Resolver over the test catalog with default config."""
    return FighterResolver(catalog)


@pytest.fixture
def make_selection():
    """Build a selection from keyword arguments."""

    def _make(**kwargs) -> BuildSelection:
        kwargs.setdefault("fighter_type", "Human")
        return BuildSelection(**kwargs)

    return _make
