"""Resolution output models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from anvil.models.selection import BuildSelection
from anvil.models.stats import StatBlock

UNARMED_PROFILE_NAME = "Unarmed"


class ResolvedAttackProfile(BaseModel):
    """Attack profile with every value resolved to a concrete number."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    name: str = Field(description="Display name")
    range: tuple[int, int] = Field(description="Minimum and maximum range")
    attacks: int
    strength: int
    damage: int
    crit: int
    weapon_runemark: Optional[str] = Field(default=None, description="Weapon runemark tag")

    @property
    def min_range(self) -> int:
        return self.range[0]

    @property
    def max_range(self) -> int:
        return self.range[1]

    @property
    def is_melee_capable(self) -> bool:
        """Usable in base combat."""
        return self.min_range == 0

    def describe(self) -> str:
        return (
            f'{self.name}: Range {self.min_range}"-{self.max_range}", Attacks {self.attacks}, '
            f"Strength {self.strength}, Damage {self.damage}/{self.crit} (Crit)"
        )


class SelectionOptions(BaseModel):
    """Legal choices for each dependent selector after reconciliation."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    faction_runemarks: list[str] = Field(default_factory=list)
    faction_allows_none: bool = Field(default=True, description="Whether no faction is a valid choice")
    archetypes: list[str] = Field(default_factory=list)
    primary_weapons: list[str] = Field(default_factory=list)
    secondary_weapons: list[str] = Field(default_factory=list)
    secondary_enabled: bool = Field(default=False, description="Secondary selector is usable")
    mounts: list[str] = Field(default_factory=list)
    divine_blessings: list[str] = Field(default_factory=list)
    extra_runemarks: list[str] = Field(default_factory=list)
    blessing_targets: list[str] = Field(default_factory=list)
    blessing_target_enabled: bool = Field(default=False, description="Target selector is usable")


class ResolutionResult(BaseModel):
    """Everything the caller needs to render a fighter."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    fighter_name: str = Field(description="Sanitised display name")
    fighter_type: Optional[str] = Field(default=None, description="Base fighter name")
    faction_runemark: Optional[str] = Field(default=None)
    archetype: Optional[str] = Field(default=None, description="Effective archetype")
    stats: StatBlock = Field(description="Working stats")
    runemarks: list[str] = Field(default_factory=list)
    attack_profiles: list[ResolvedAttackProfile] = Field(default_factory=list)
    point_breakdown: dict[str, int] = Field(default_factory=dict, description="Itemised costs")
    messages: list[str] = Field(default_factory=list, description="Validation messages")
    blessing_effect: str = Field(default="None", description="Blessing description")
    selection: BuildSelection = Field(description="Selection after reconciliation")
    options: SelectionOptions = Field(default_factory=SelectionOptions)

    @computed_field
    def points(self) -> int:
        """Total point cost."""
        return sum(self.point_breakdown.values())

    def profile_card(self) -> list[str]:
        """Plain-text fighter card, one line per entry."""
        lines = [
            "Warcry Anvil of Apotheosis Fighter Profile",
            f"Fighter Name: {self.fighter_name}",
            f"Fighter Type: {self.fighter_type or '-'}",
            f"Faction Runemark: {self.faction_runemark or 'None'}",
            f"Runemarks: {', '.join(self.runemarks) if self.runemarks else 'None'}",
            "Core Stats:",
            f"Movement: {self.stats.movement}, Toughness: {self.stats.toughness}, "
            f"Wounds: {self.stats.wounds}",
            "Attack Profiles:",
        ]
        if self.attack_profiles:
            lines.extend(profile.describe() for profile in self.attack_profiles)
        else:
            lines.append("No attack profiles available.")
        lines.extend(["Divine Blessing:", self.blessing_effect, f"Total Points: {self.points}"])
        return lines
