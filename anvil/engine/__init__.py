"""Rules-resolution engine package."""

from anvil.engine.blessing_targets import BlessingTargeting, BlessingTargetResolver
from anvil.engine.build_validator import BuildValidator
from anvil.engine.eligibility import (
    EligibilityFilter,
    EquippedBuild,
    Reconciliation,
    accumulate_runemarks,
)
from anvil.engine.points import PointsAccumulator
from anvil.engine.profile_builder import AttackProfileBuilder
from anvil.engine.resolver import FighterResolver, resolve_build
from anvil.engine.stat_calculator import StatCalculator

__all__ = [
    "AttackProfileBuilder",
    "BlessingTargeting",
    "BlessingTargetResolver",
    "BuildValidator",
    "EligibilityFilter",
    "EquippedBuild",
    "FighterResolver",
    "PointsAccumulator",
    "Reconciliation",
    "StatCalculator",
    "accumulate_runemarks",
    "resolve_build",
]
