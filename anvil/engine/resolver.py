"""Rules-resolution engine for fighter builds."""

import logging
from typing import Optional

from anvil.api.engine_config import EngineConfig
from anvil.engine.blessing_targets import BlessingTargetResolver
from anvil.engine.build_validator import BuildValidator
from anvil.engine.eligibility import EligibilityFilter, accumulate_runemarks
from anvil.engine.points import PointsAccumulator
from anvil.engine.profile_builder import AttackProfileBuilder
from anvil.engine.stat_calculator import StatCalculator
from anvil.helpers.debug import log_call
from anvil.models.catalog import ReferenceCatalog
from anvil.models.result import ResolutionResult
from anvil.models.selection import BuildSelection
from anvil.security.name_sanitizer import NameSanitizer

logger = logging.getLogger(__name__)


class FighterResolver:
    """Resolves a selection against the reference catalog into a complete fighter."""

    def __init__(self, catalog: ReferenceCatalog, config: Optional[EngineConfig] = None) -> None:
        """
        Initialize resolver.

        Args:
            catalog: Reference data, shared read-only by every pass
            config: Optional engine config (fallbacks and name limits)
        """
        self._catalog = catalog
        self._config = config or EngineConfig()
        self._eligibility = EligibilityFilter(catalog, self._config)
        self._sanitizer = NameSanitizer(max_length=self._config.max_name_length)

    @property
    def catalog(self) -> ReferenceCatalog:
        """Get reference catalog."""
        return self._catalog

    @property
    def config(self) -> EngineConfig:
        """Get engine config."""
        return self._config

    @log_call
    def resolve(self, selection: BuildSelection) -> ResolutionResult:
        """
        Run one full resolution pass.

        Illegal choices are reverted and reported; the pass never raises for
        rule violations.

        Args:
            selection: Current choices

        Returns:
            ResolutionResult with stats, runemarks, profiles, points and messages
        """
        rules = self._catalog.rules

        reconciliation = self._eligibility.reconcile(selection)
        build = reconciliation.build
        messages = list(reconciliation.messages)

        stats = StatCalculator.calculate_working_stats(build)

        runemarks = accumulate_runemarks(build.fighter, build.archetype, build.mount)
        if build.extra_runemark is not None and build.extra_runemark.name not in runemarks:
            runemarks.append(build.extra_runemark.name)

        profiles = AttackProfileBuilder.build_profiles(build, stats, rules.unarmed_penalties)

        targeting = BlessingTargetResolver.apply(
            build.blessing, profiles, selection.blessing_target_weapon, rules.melee_max_range
        )
        messages.extend(targeting.messages)

        messages.extend(BuildValidator.validate(build, runemarks, targeting.profiles, rules))

        point_breakdown = PointsAccumulator.itemize(build, stats, rules.blessing_wounds_threshold)

        reconciled = reconciliation.selection.model_copy(
            update={"blessing_target_weapon": targeting.applied_to}
        )
        options = reconciliation.options.model_copy(
            update={
                "blessing_targets": targeting.eligible_targets,
                "blessing_target_enabled": bool(targeting.eligible_targets),
            }
        )

        result = ResolutionResult(
            fighter_name=self._display_name(selection.fighter_name),
            fighter_type=build.fighter.name,
            faction_runemark=build.faction_runemark,
            archetype=build.archetype.name if build.archetype else None,
            stats=stats,
            runemarks=runemarks,
            attack_profiles=targeting.profiles,
            point_breakdown=point_breakdown,
            messages=messages,
            blessing_effect=build.blessing.effect_text if build.blessing else "None",
            selection=reconciled,
            options=options,
        )
        logger.debug(
            f"Resolved {result.fighter_type} ({result.archetype}): {result.points} pts, "
            f"{len(result.attack_profiles)} profile(s), {len(result.messages)} message(s)"
        )
        return result

    def _display_name(self, name: str) -> str:
        sanitized = self._sanitizer.sanitize(name)
        return sanitized or self._config.default_fighter_name


def resolve_build(
    catalog: ReferenceCatalog, selection: BuildSelection, config: Optional[EngineConfig] = None
) -> ResolutionResult:
    """Resolve a selection with a throwaway resolver."""
    return FighterResolver(catalog, config).resolve(selection)
