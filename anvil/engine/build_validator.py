"""Build validation system."""

from anvil.engine.eligibility import EquippedBuild
from anvil.models.reference import Rules
from anvil.models.result import ResolvedAttackProfile


class BuildValidator:
    """Advisory checks over a fully resolved build."""

    @staticmethod
    def validate(
        build: EquippedBuild,
        runemarks: list[str],
        profiles: list[ResolvedAttackProfile],
        rules: Rules,
    ) -> list[str]:
        """
        Check the resolved build against the global caps.

        Nothing is removed or clamped; each failed check adds a message.

        Args:
            build: Reconciled build
            runemarks: Accumulated runemarks, faction runemark excluded
            profiles: Final attack profiles
            rules: Global rules constants

        Returns:
            List of messages, empty when the build is within every limit
        """
        messages = []

        if len(runemarks) > rules.max_runemarks:
            messages.append(
                f"A fighter can have a maximum of {rules.max_runemarks} runemarks. "
                "Please adjust your selections."
            )

        if len(profiles) > rules.max_attack_actions:
            messages.append(
                f"A fighter can have a maximum of {rules.max_attack_actions} attack actions. "
                "Please adjust your equipment selections."
            )

        message = BuildValidator._validate_handedness(build)
        if message:
            messages.append(message)

        return messages

    @staticmethod
    def _validate_handedness(build: EquippedBuild) -> str:
        """Secondary equipment needs a one-handed primary weapon."""
        if build.secondary_weapon is None:
            return ""
        if build.primary_weapon is not None and build.primary_weapon.is_one_handed:
            return ""
        return (
            f"{build.secondary_weapon.name} cannot be carried without a one-handed primary weapon."
        )
