"""Divine blessing weapon-effect targeting."""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from anvil.models.reference import DivineBlessing, TargetClass
from anvil.models.result import ResolvedAttackProfile

logger = logging.getLogger(__name__)


class BlessingTargeting(BaseModel):
    """Profiles after targeting, plus what happened."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    profiles: list[ResolvedAttackProfile] = Field(description="Profiles, at most one blessed")
    eligible_targets: list[str] = Field(default_factory=list)
    applied_to: Optional[str] = Field(default=None, description="Profile that got the effect")
    messages: list[str] = Field(default_factory=list)


class BlessingTargetResolver:
    """Applies a targetable blessing's weapon effect to one chosen attack profile."""

    @staticmethod
    def is_melee_for_blessing(profile: ResolvedAttackProfile, melee_max_range: int) -> bool:
        """Melee for targeting: minimum range 0 and maximum range within the melee bound."""
        return profile.min_range == 0 and profile.max_range <= melee_max_range

    @staticmethod
    def eligible_targets(
        blessing: Optional[DivineBlessing],
        profiles: list[ResolvedAttackProfile],
        melee_max_range: int,
    ) -> list[str]:
        """Names of the profiles that may receive the blessing's weapon effect."""
        if blessing is None or not blessing.needs_target:
            return []
        eligible = [
            p for p in profiles if BlessingTargetResolver._accepts(blessing, p, melee_max_range)
        ]
        return list(dict.fromkeys(p.name for p in eligible))

    @staticmethod
    def _accepts(
        blessing: DivineBlessing, profile: ResolvedAttackProfile, melee_max_range: int
    ) -> bool:
        if blessing.target_profile == TargetClass.ANY:
            return True
        return BlessingTargetResolver.is_melee_for_blessing(profile, melee_max_range)

    @staticmethod
    def apply(
        blessing: Optional[DivineBlessing],
        profiles: list[ResolvedAttackProfile],
        target_name: Optional[str],
        melee_max_range: int,
    ) -> BlessingTargeting:
        """
        Apply the blessing's weapon effect to the explicitly chosen profile.

        Nothing is applied by default: a missing or ineligible target only
        produces a message.

        Args:
            blessing: Selected blessing, if any
            profiles: Resolved profiles in display order
            target_name: Name of the profile chosen by the user
            melee_max_range: Upper range bound for melee targets

        Returns:
            BlessingTargeting with the new profile list
        """
        if blessing is None or not blessing.needs_target:
            return BlessingTargeting(profiles=list(profiles))

        eligible = BlessingTargetResolver.eligible_targets(blessing, profiles, melee_max_range)
        if not eligible:
            return BlessingTargeting(
                profiles=list(profiles),
                messages=[
                    f"The '{blessing.name}' Divine Blessing has no eligible "
                    f"{blessing.target_profile.value} weapon to target. Its weapon effect is not applied."
                ],
            )

        if target_name not in eligible:
            return BlessingTargeting(
                profiles=list(profiles),
                eligible_targets=eligible,
                messages=[f"Please select a target weapon for the '{blessing.name}' Divine Blessing."],
            )

        effect = blessing.weapon_effect
        blessed: list[ResolvedAttackProfile] = []
        applied = False
        for profile in profiles:
            if (
                not applied
                and profile.name == target_name
                and BlessingTargetResolver._accepts(blessing, profile, melee_max_range)
            ):
                profile = profile.model_copy(
                    update={
                        "attacks": profile.attacks + effect.attack_bonus,
                        "strength": profile.strength + effect.strength_bonus,
                        "damage": profile.damage + effect.damage_bonus,
                        "crit": profile.crit + effect.crit_bonus,
                    }
                )
                applied = True
            blessed.append(profile)

        logger.debug(f"Applied '{blessing.name}' weapon effect to {target_name}")
        return BlessingTargeting(profiles=blessed, eligible_targets=eligible, applied_to=target_name)
