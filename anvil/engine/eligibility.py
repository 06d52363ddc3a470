"""Eligibility filtering for dependent selectors."""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from anvil.api.engine_config import EngineConfig
from anvil.models.catalog import ReferenceCatalog
from anvil.models.reference import (
    Archetype,
    DivineBlessing,
    ExtraRunemark,
    Fighter,
    Mount,
    Weapon,
)
from anvil.models.result import SelectionOptions
from anvil.models.selection import BuildSelection

logger = logging.getLogger(__name__)

MOUNTED_RUNEMARK = "Mounted"


class EquippedBuild(BaseModel):
    """Reference entries picked by a reconciled selection."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    fighter: Fighter
    faction_runemark: Optional[str] = None
    archetype: Optional[Archetype] = None
    primary_weapon: Optional[Weapon] = None
    secondary_weapon: Optional[Weapon] = None
    mount: Optional[Mount] = None
    blessing: Optional[DivineBlessing] = None
    extra_runemark: Optional[ExtraRunemark] = None


class Reconciliation(BaseModel):
    """Outcome of reconciling a selection against the legal option sets."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    build: EquippedBuild
    selection: BuildSelection
    options: SelectionOptions
    messages: list[str]


def accumulate_runemarks(
    fighter: Fighter, archetype: Optional[Archetype], mount: Optional[Mount]
) -> list[str]:
    """Base runemarks plus those added by the archetype and mount, without duplicates."""
    runemarks = list(dict.fromkeys(fighter.runemarks))
    if archetype is not None:
        for runemark in archetype.runemarks_added:
            if runemark not in runemarks:
                runemarks.append(runemark)
    if mount is not None:
        exempt = mount.restrictions.no_mounted_runemark_for if mount.restrictions else ()
        for runemark in mount.runemarks_added:
            if runemark == MOUNTED_RUNEMARK and fighter.name in exempt:
                continue
            if runemark not in runemarks:
                runemarks.append(runemark)
    return runemarks


class EligibilityFilter:
    """Computes legal options for each selector and reverts illegal choices."""

    def __init__(self, catalog: ReferenceCatalog, config: Optional[EngineConfig] = None) -> None:
        """
        Initialize eligibility filter.

        Args:
            catalog: Reference data to draw options from
            config: Engine config supplying fallback choices
        """
        self.catalog = catalog
        self.config = config or EngineConfig()

    # ------------------------------------------------------------------
    # Option sets
    # ------------------------------------------------------------------

    def faction_options(self, fighter: Fighter) -> tuple[list[str], bool]:
        """Allowed factions, and whether "no faction" is allowed."""
        factions = list(fighter.faction_runemarks)
        return factions, not factions

    def archetype_options(self, fighter: Fighter, faction: Optional[str]) -> list[str]:
        return [
            archetype.name
            for archetype in self.catalog.archetypes
            if not archetype.forbids(fighter.name, faction)
        ]

    def primary_options(self, archetype: Optional[Archetype]) -> list[str]:
        one_handed_only = bool(
            archetype and archetype.restrictions and archetype.restrictions.must_use_one_handed_primary
        )
        return [
            weapon.name
            for weapon in self.catalog.primary_weapons
            if weapon.is_one_handed or not one_handed_only
        ]

    def secondary_options(
        self, primary: Optional[Weapon], archetype: Optional[Archetype]
    ) -> list[str]:
        if primary is None or not primary.is_one_handed:
            return []
        if archetype and archetype.restrictions and archetype.restrictions.forbid_secondary_equipment:
            return []
        return [weapon.name for weapon in self.catalog.secondary_weapons]

    def mount_options(self, fighter: Fighter) -> list[str]:
        return [mount.name for mount in self.catalog.mounts if not mount.forbids(fighter.name)]

    def extra_runemark_options(self, runemarks: list[str], mounted: bool) -> list[str]:
        return [
            extra.name
            for extra in self.catalog.extra_runemarks
            if extra.name not in runemarks and not (mounted and extra.forbids_mounted)
        ]

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def reconcile(self, selection: BuildSelection) -> Reconciliation:
        """
        Validate every choice against its legal option set, in dependency order.

        Args:
            selection: Choices as provided by the caller

        Returns:
            Reconciliation with the chosen reference entries, the corrected
            selection, the option sets and one message per reverted choice
        """
        messages: list[str] = []

        fighter = self._reconcile_fighter(selection, messages)
        factions, faction_allows_none = self.faction_options(fighter)
        faction = self._reconcile_faction(selection, fighter, factions, messages)

        archetypes = self.archetype_options(fighter, faction)
        archetype = self._reconcile_archetype(selection, fighter, faction, archetypes, messages)

        primaries = self.primary_options(archetype)
        primary = self._reconcile_primary(selection, archetype, messages)

        secondaries = self.secondary_options(primary, archetype)
        secondary = self._reconcile_secondary(selection, primary, archetype, messages)

        mounts = self.mount_options(fighter)
        mount = self._reconcile_mount(selection, fighter, messages)

        blessing = self._reconcile_blessing(selection, messages)

        runemarks = accumulate_runemarks(fighter, archetype, mount)
        extras = self.extra_runemark_options(runemarks, mounted=mount is not None)
        extra = self._reconcile_extra_runemark(selection, runemarks, mount, extras, messages)

        build = EquippedBuild(
            fighter=fighter,
            faction_runemark=faction,
            archetype=archetype,
            primary_weapon=primary,
            secondary_weapon=secondary,
            mount=mount,
            blessing=blessing,
            extra_runemark=extra,
        )
        reconciled = selection.model_copy(
            update={
                "fighter_type": fighter.name,
                "faction_runemark": faction,
                "archetype": archetype.name if archetype else None,
                "primary_weapon": primary.name if primary else None,
                "secondary_weapon": secondary.name if secondary else None,
                "mount": mount.name if mount else None,
                "blessing": blessing.name if blessing else None,
                "runemark": extra.name if extra else None,
            }
        )
        options = SelectionOptions(
            faction_runemarks=factions,
            faction_allows_none=faction_allows_none,
            archetypes=archetypes,
            primary_weapons=primaries,
            secondary_weapons=secondaries,
            secondary_enabled=bool(secondaries),
            mounts=mounts,
            divine_blessings=[b.name for b in self.catalog.divine_blessings],
            extra_runemarks=extras,
        )
        return Reconciliation(build=build, selection=reconciled, options=options, messages=messages)

    def _revert(self, messages: list[str], message: str) -> None:
        logger.debug(message)
        messages.append(message)

    def _reconcile_fighter(self, selection: BuildSelection, messages: list[str]) -> Fighter:
        fighter = self.catalog.get_fighter(selection.fighter_type)
        if fighter is not None:
            return fighter
        fallback = self.catalog.fighters[0]
        if selection.fighter_type is not None:
            self._revert(
                messages,
                f"Unknown fighter '{selection.fighter_type}'. Reverting Fighter Type to {fallback.name}.",
            )
        return fallback

    def _reconcile_faction(
        self,
        selection: BuildSelection,
        fighter: Fighter,
        factions: list[str],
        messages: list[str],
    ) -> Optional[str]:
        if not factions:
            if selection.faction_runemark is not None:
                self._revert(
                    messages,
                    f"{fighter.name} has no faction runemarks. Reverting Faction Runemark to None.",
                )
            return None
        if selection.faction_runemark in factions:
            return selection.faction_runemark
        if selection.faction_runemark is not None:
            self._revert(
                messages,
                f"{fighter.name} cannot take the {selection.faction_runemark} faction runemark. "
                f"Reverting Faction Runemark to {factions[0]}.",
            )
        return factions[0]

    def _default_archetype(self, legal: list[str]) -> Optional[Archetype]:
        if self.config.default_archetype in legal:
            return self.catalog.get_archetype(self.config.default_archetype)
        if legal:
            return self.catalog.get_archetype(legal[0])
        return None

    def _reconcile_archetype(
        self,
        selection: BuildSelection,
        fighter: Fighter,
        faction: Optional[str],
        legal: list[str],
        messages: list[str],
    ) -> Optional[Archetype]:
        chosen = self.catalog.get_archetype(selection.archetype)
        if chosen is not None and chosen.name in legal:
            return chosen

        fallback = self._default_archetype(legal)
        if selection.archetype is None:
            return fallback

        fallback_name = fallback.name if fallback else "None"
        if chosen is None:
            reason = f"Unknown archetype '{selection.archetype}'."
        elif chosen.forbids(fighter.name, None):
            reason = f"{fighter.name} cannot be a {chosen.name}."
        else:
            reason = f"{faction} cannot have a {chosen.name} Archetype."
        self._revert(messages, f"{reason} Reverting Archetype to {fallback_name}.")
        return fallback

    def _default_primary(self) -> Optional[Weapon]:
        preferred = self.catalog.get_primary_weapon(self.config.default_primary_weapon)
        if preferred is not None and preferred.is_one_handed:
            return preferred
        return next((w for w in self.catalog.primary_weapons if w.is_one_handed), None)

    def _reconcile_primary(
        self,
        selection: BuildSelection,
        archetype: Optional[Archetype],
        messages: list[str],
    ) -> Optional[Weapon]:
        if selection.primary_weapon is None:
            return None
        primary = self.catalog.get_primary_weapon(selection.primary_weapon)
        if primary is None:
            self._revert(
                messages,
                f"Unknown primary weapon '{selection.primary_weapon}'. Reverting Primary Weapon to None.",
            )
            return None
        restrictions = archetype.restrictions if archetype else None
        if restrictions and restrictions.must_use_one_handed_primary and not primary.is_one_handed:
            self._revert(
                messages,
                f"{archetype.name} Archetype requires a one-handed primary weapon. "
                "Reverting Primary Weapon.",
            )
            return self._default_primary()
        return primary

    def _reconcile_secondary(
        self,
        selection: BuildSelection,
        primary: Optional[Weapon],
        archetype: Optional[Archetype],
        messages: list[str],
    ) -> Optional[Weapon]:
        if selection.secondary_weapon is None:
            return None
        secondary = self.catalog.get_secondary_weapon(selection.secondary_weapon)
        if secondary is None:
            self._revert(
                messages,
                f"Unknown secondary equipment '{selection.secondary_weapon}'. "
                "Reverting Secondary Equipment to None.",
            )
            return None
        if primary is None or not primary.is_one_handed:
            held = f"{primary.name} is two-handed" if primary else "No primary weapon is selected"
            self._revert(
                messages,
                f"{held}; secondary equipment needs a one-handed primary weapon. "
                "Reverting Secondary Equipment.",
            )
            return None
        restrictions = archetype.restrictions if archetype else None
        if restrictions and restrictions.forbid_secondary_equipment:
            self._revert(
                messages,
                f"{archetype.name} Archetype forbids secondary equipment. Reverting Secondary Equipment.",
            )
            return None
        return secondary

    def _reconcile_mount(
        self, selection: BuildSelection, fighter: Fighter, messages: list[str]
    ) -> Optional[Mount]:
        if selection.mount is None:
            return None
        mount = self.catalog.get_mount(selection.mount)
        if mount is None:
            self._revert(messages, f"Unknown mount '{selection.mount}'. Reverting Mount.")
            return None
        if mount.forbids(fighter.name):
            self._revert(messages, f"{fighter.name} cannot take a {mount.name}. Reverting Mount.")
            return None
        return mount

    def _reconcile_blessing(
        self, selection: BuildSelection, messages: list[str]
    ) -> Optional[DivineBlessing]:
        if selection.blessing is None:
            return None
        blessing = self.catalog.get_blessing(selection.blessing)
        if blessing is None:
            self._revert(
                messages, f"Unknown divine blessing '{selection.blessing}'. Reverting Divine Blessing."
            )
        return blessing

    def _reconcile_extra_runemark(
        self,
        selection: BuildSelection,
        runemarks: list[str],
        mount: Optional[Mount],
        legal: list[str],
        messages: list[str],
    ) -> Optional[ExtraRunemark]:
        if selection.runemark is None:
            return None
        extra = self.catalog.get_extra_runemark(selection.runemark)
        if extra is not None and extra.name in legal:
            return extra
        if extra is None:
            reason = f"Unknown runemark '{selection.runemark}'."
        elif extra.name in runemarks:
            reason = f"Fighter already has the {extra.name} runemark."
        else:
            reason = f"{extra.name} runemark cannot be taken by a mounted fighter ({mount.name})."
        self._revert(messages, f"{reason} Reverting Additional Runemark.")
        return None
