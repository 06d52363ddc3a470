"""Stat calculation system."""

from typing import Optional

from anvil.engine.eligibility import EquippedBuild
from anvil.models.reference import FighterEffects
from anvil.models.stats import Stat, StatBlock


class StatCalculator:
    """Computes working stats (base + archetype + mount + secondary + blessing)."""

    @staticmethod
    def calculate_working_stats(build: EquippedBuild) -> StatBlock:
        """
        Calculate the working stat block for a reconciled build.

        Effects are applied in a fixed order: archetype, mount, secondary
        equipment, blessing. Floors raise a stat at the stage that defines
        them. The mount's movement cap is applied once, after every
        movement-affecting effect.

        Args:
            build: Reconciled build

        Returns:
            New StatBlock with effective values
        """
        # Start with base stats
        effective_stats = build.fighter.stats.as_dict()

        stages = [
            build.archetype.fighter_effects if build.archetype else None,
            build.mount.fighter_effects if build.mount else None,
            build.secondary_weapon.fighter_effects if build.secondary_weapon else None,
            build.blessing.fighter_effects if build.blessing else None,
        ]
        for effects in stages:
            StatCalculator._apply_effects(effective_stats, effects)

        # Ensure stats don't go below 0
        for stat in effective_stats:
            effective_stats[stat] = max(0, effective_stats[stat])

        # Movement can't exceed the mount's cap
        max_movement = StatCalculator._movement_cap(build)
        if max_movement is not None:
            effective_stats[Stat.MOVEMENT] = min(effective_stats[Stat.MOVEMENT], max_movement)

        return StatBlock(**{stat.value: value for stat, value in effective_stats.items()})

    @staticmethod
    def _apply_effects(stats: dict[Stat, int], effects: Optional[FighterEffects]) -> None:
        """Add flat bonuses, then raise any stat below its floor."""
        if effects is None:
            return
        for stat, bonus in effects.bonuses().items():
            stats[stat] += bonus
        for stat, floor in effects.floors().items():
            if stats[stat] < floor:
                stats[stat] = floor

    @staticmethod
    def _movement_cap(build: EquippedBuild) -> Optional[int]:
        if build.mount is None or build.mount.restrictions is None:
            return None
        return build.mount.restrictions.max_movement
