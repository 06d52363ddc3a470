"""Reference catalog model."""

from typing import Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from anvil.models.reference import (
    Archetype,
    DivineBlessing,
    ExtraRunemark,
    Fighter,
    Mount,
    Rules,
    Weapon,
)

T = TypeVar("T")


def _find_by_name(entries: Sequence[T], name: Optional[str]) -> Optional[T]:
    if name is None:
        return None
    return next((entry for entry in entries if entry.name == name), None)


class ReferenceCatalog(BaseModel):
    """Every reference table, loaded once and read-only for the session."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    fighters: tuple[Fighter, ...] = Field(min_length=1, description="Base fighters")
    archetypes: tuple[Archetype, ...] = Field(description="Archetypes")
    primary_weapons: tuple[Weapon, ...] = Field(description="Primary weapons")
    secondary_weapons: tuple[Weapon, ...] = Field(description="Secondary equipment")
    mounts: tuple[Mount, ...] = Field(default=(), description="Mounts")
    divine_blessings: tuple[DivineBlessing, ...] = Field(default=(), description="Divine blessings")
    extra_runemarks: tuple[ExtraRunemark, ...] = Field(default=(), description="Purchasable runemarks")
    rules: Rules = Field(description="Global rules constants")

    def get_fighter(self, name: Optional[str]) -> Optional[Fighter]:
        return _find_by_name(self.fighters, name)

    def get_archetype(self, name: Optional[str]) -> Optional[Archetype]:
        return _find_by_name(self.archetypes, name)

    def get_primary_weapon(self, name: Optional[str]) -> Optional[Weapon]:
        return _find_by_name(self.primary_weapons, name)

    def get_secondary_weapon(self, name: Optional[str]) -> Optional[Weapon]:
        return _find_by_name(self.secondary_weapons, name)

    def get_mount(self, name: Optional[str]) -> Optional[Mount]:
        return _find_by_name(self.mounts, name)

    def get_blessing(self, name: Optional[str]) -> Optional[DivineBlessing]:
        return _find_by_name(self.divine_blessings, name)

    def get_extra_runemark(self, name: Optional[str]) -> Optional[ExtraRunemark]:
        return _find_by_name(self.extra_runemarks, name)

    def option_names(self) -> dict[str, list[str]]:
        """
        Names for every independent selector, in catalog order.

        Primary weapons also come with handedness labels; a selection may use
        either form.
        """
        return {
            "fighters": [f.name for f in self.fighters],
            "archetypes": [a.name for a in self.archetypes],
            "primaryWeapons": [w.name for w in self.primary_weapons],
            "primaryWeaponLabels": [w.display_name for w in self.primary_weapons],
            "secondaryWeapons": [w.name for w in self.secondary_weapons],
            "mounts": [m.name for m in self.mounts],
            "divineBlessings": [b.name for b in self.divine_blessings],
            "extraRunemarks": [r.name for r in self.extra_runemarks],
        }
