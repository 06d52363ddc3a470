"""Data models module for Anvil."""

# Stats
from anvil.models.stats import BaseStat, Stat, StatBlock, StatValue, resolve_stat_value

# Reference data
from anvil.models.reference import (
    Archetype,
    ArchetypeRestrictions,
    DivineBlessing,
    ExtraRunemark,
    ExtraRunemarkRestrictions,
    Fighter,
    FighterEffects,
    Handedness,
    Mount,
    MountRestrictions,
    ProfileTemplate,
    Rules,
    TargetClass,
    UnarmedMinimums,
    UnarmedPenalties,
    Weapon,
    WeaponEffects,
)

# Catalog
from anvil.models.catalog import ReferenceCatalog

# Selection
from anvil.models.selection import BuildSelection

# Results
from anvil.models.result import (
    UNARMED_PROFILE_NAME,
    ResolutionResult,
    ResolvedAttackProfile,
    SelectionOptions,
)

__all__ = [
    # Stats
    "BaseStat",
    "Stat",
    "StatBlock",
    "StatValue",
    "resolve_stat_value",
    # Reference data
    "Archetype",
    "ArchetypeRestrictions",
    "DivineBlessing",
    "ExtraRunemark",
    "ExtraRunemarkRestrictions",
    "Fighter",
    "FighterEffects",
    "Handedness",
    "Mount",
    "MountRestrictions",
    "ProfileTemplate",
    "Rules",
    "TargetClass",
    "UnarmedMinimums",
    "UnarmedPenalties",
    "Weapon",
    "WeaponEffects",
    # Catalog
    "ReferenceCatalog",
    # Selection
    "BuildSelection",
    # Results
    "UNARMED_PROFILE_NAME",
    "ResolutionResult",
    "ResolvedAttackProfile",
    "SelectionOptions",
]
