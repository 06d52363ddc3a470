"""Attack profile building."""

import logging
from typing import Optional

from anvil.engine.eligibility import EquippedBuild
from anvil.models.reference import ProfileTemplate, UnarmedPenalties, WeaponEffects
from anvil.models.result import UNARMED_PROFILE_NAME, ResolvedAttackProfile
from anvil.models.stats import StatBlock, resolve_stat_value

logger = logging.getLogger(__name__)

UNARMED_WEAPON_RUNEMARK = "Fist"


class AttackProfileBuilder:
    """Turns profile templates into resolved attack profiles."""

    @staticmethod
    def resolve_template(
        template: ProfileTemplate,
        stats: StatBlock,
        name: str,
        effects: Optional[WeaponEffects] = None,
    ) -> ResolvedAttackProfile:
        """
        Resolve a single template against the working stats.

        Placeholders are substituted first, then the source's own bonuses
        are added. The template itself is left untouched.

        Args:
            template: Raw profile template
            stats: Working stat block
            name: Display name for the resolved profile
            effects: Optional numeric bonuses of the source

        Returns:
            Resolved attack profile
        """
        min_range = resolve_stat_value(template.range[0], stats)
        max_range = resolve_stat_value(template.range[1], stats)
        attacks = resolve_stat_value(template.attacks, stats)
        strength = resolve_stat_value(template.strength, stats)
        damage = resolve_stat_value(template.damage, stats)
        crit = resolve_stat_value(template.crit, stats)

        if effects is not None:
            max_range += effects.range_bonus
            attacks += effects.attack_bonus
            strength += effects.strength_bonus
            damage += effects.damage_bonus
            crit += effects.crit_bonus

        return ResolvedAttackProfile(
            name=name,
            range=(min_range, max_range),
            attacks=attacks,
            strength=strength,
            damage=damage,
            crit=crit,
            weapon_runemark=template.weapon_runemark,
        )

    @staticmethod
    def build_unarmed(stats: StatBlock, penalties: UnarmedPenalties) -> ResolvedAttackProfile:
        """Unarmed profile: penalised attacks, damage and crit with floors; strength unchanged."""
        floors = penalties.minimum_values
        return ResolvedAttackProfile(
            name=UNARMED_PROFILE_NAME,
            range=(0, 1),
            attacks=max(stats.attacks + penalties.attack_penalty, floors.attacks),
            strength=stats.strength,
            damage=max(stats.damage + penalties.damage_penalty, floors.damage),
            crit=max(stats.crit + penalties.crit_penalty, floors.crit),
            weapon_runemark=UNARMED_WEAPON_RUNEMARK,
        )

    @staticmethod
    def build_profiles(
        build: EquippedBuild, stats: StatBlock, penalties: UnarmedPenalties
    ) -> list[ResolvedAttackProfile]:
        """
        Build every attack profile for a reconciled build.

        Profiles come from the primary weapon, secondary equipment, archetype
        and mount, in that order. Unarmed is listed first when no other
        profile is melee-capable, or when the primary weapon forces the
        wielder to fight Unarmed in melee.

        Args:
            build: Reconciled build
            stats: Working stat block
            penalties: Unarmed penalties from the rules

        Returns:
            Ordered list of resolved attack profiles
        """
        profiles: list[ResolvedAttackProfile] = []

        for weapon in (build.primary_weapon, build.secondary_weapon):
            if weapon is not None and weapon.profile is not None:
                profiles.append(
                    AttackProfileBuilder.resolve_template(
                        weapon.profile, stats, weapon.name, weapon.effects
                    )
                )

        for source in (build.archetype, build.mount):
            if source is not None and source.profile is not None:
                name = source.profile.name or source.name
                profiles.append(AttackProfileBuilder.resolve_template(source.profile, stats, name))

        forced_unarmed = bool(
            build.primary_weapon
            and build.primary_weapon.fighter_effects
            and build.primary_weapon.fighter_effects.treat_as_unarmed_in_melee
        )
        has_melee = any(profile.is_melee_capable for profile in profiles)
        if forced_unarmed or not has_melee:
            profiles.insert(0, AttackProfileBuilder.build_unarmed(stats, penalties))

        logger.debug(
            f"Built {len(profiles)} attack profile(s) (melee={has_melee}, forced_unarmed={forced_unarmed})"
        )
        return profiles
