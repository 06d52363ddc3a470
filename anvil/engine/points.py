"""Point cost accumulation."""

from anvil.engine.eligibility import EquippedBuild
from anvil.models.reference import DivineBlessing
from anvil.models.stats import StatBlock


class PointsAccumulator:
    """Sums the point costs of every selected component."""

    @staticmethod
    def blessing_cost(blessing: DivineBlessing, wounds: int, threshold: int) -> int:
        """Low cost below the wounds threshold, high cost at or above it."""
        return blessing.points_low if wounds < threshold else blessing.points_high

    @staticmethod
    def itemize(build: EquippedBuild, stats: StatBlock, wounds_threshold: int) -> dict[str, int]:
        """
        Itemised costs, keyed by component.

        The blessing is priced against the final Wounds, i.e. after the
        archetype, mount, equipment and the blessing's own effects.

        Args:
            build: Reconciled build
            stats: Final working stats
            wounds_threshold: Wounds value from which the high blessing cost applies

        Returns:
            Mapping of component name to cost; absent components are omitted
        """
        costs = {"fighter": build.fighter.points}
        if build.archetype is not None:
            costs["archetype"] = build.archetype.points
        if build.primary_weapon is not None:
            costs["primaryWeapon"] = build.primary_weapon.points
        if build.secondary_weapon is not None:
            costs["secondaryWeapon"] = build.secondary_weapon.points
        if build.mount is not None:
            costs["mount"] = build.mount.points
        if build.extra_runemark is not None:
            costs["runemark"] = build.extra_runemark.points
        if build.blessing is not None:
            costs["blessing"] = PointsAccumulator.blessing_cost(
                build.blessing, stats.wounds, wounds_threshold
            )
        return costs

    @staticmethod
    def total(build: EquippedBuild, stats: StatBlock, wounds_threshold: int) -> int:
        return sum(PointsAccumulator.itemize(build, stats, wounds_threshold).values())
