"""Reference data models: fighters, archetypes, equipment, blessings and rules."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from anvil.config import DEFAULT_BLESSING_WOUNDS_THRESHOLD, DEFAULT_MELEE_MAX_RANGE
from anvil.models.stats import Stat, StatBlock, StatValue

# Stat keys as written in the data files
_STAT_KEYS = ("Mv", "T", "W", "R", "A", "S", "D", "C")


class ReferenceModel(BaseModel):
    """Immutable reference entry read from the data files."""

    model_config = ConfigDict(
        frozen=True,  # Immutable model
        extra="ignore",  # Unknown fields from newer data files are tolerated
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Handedness(str, Enum):
    """How many hands a primary weapon needs."""

    ONE = "one"
    TWO = "two"


class TargetClass(str, Enum):
    """Which attack profiles a blessing's weapon effect may target."""

    MELEE = "melee"
    ANY = "any"


class FighterEffects(ReferenceModel):
    """Fighter-level stat changes granted by an archetype, mount, item or blessing."""

    movement_bonus: int = 0
    toughness_bonus: int = 0
    wounds_bonus: int = 0
    reach_bonus: int = 0
    attacks_bonus: int = 0
    strength_bonus: int = 0
    damage_bonus: int = 0
    crit_bonus: int = 0
    melee_attack_min: Optional[int] = Field(default=None, ge=0, description="Attacks floor")
    minimums: dict[Stat, int] = Field(default_factory=dict, description="Per-stat floors")
    treat_as_unarmed_in_melee: bool = Field(
        default=False, description="Wielder still fights Unarmed in melee"
    )

    def bonuses(self) -> dict[Stat, int]:
        """Non-zero flat bonuses keyed by stat."""
        values = {
            Stat.MOVEMENT: self.movement_bonus,
            Stat.TOUGHNESS: self.toughness_bonus,
            Stat.WOUNDS: self.wounds_bonus,
            Stat.REACH: self.reach_bonus,
            Stat.ATTACKS: self.attacks_bonus,
            Stat.STRENGTH: self.strength_bonus,
            Stat.DAMAGE: self.damage_bonus,
            Stat.CRIT: self.crit_bonus,
        }
        return {stat: bonus for stat, bonus in values.items() if bonus}

    def floors(self) -> dict[Stat, int]:
        """Minimum values keyed by stat, including the melee attack floor."""
        floors = dict(self.minimums)
        if self.melee_attack_min is not None:
            floors[Stat.ATTACKS] = max(floors.get(Stat.ATTACKS, 0), self.melee_attack_min)
        return floors


class WeaponEffects(ReferenceModel):
    """Flat numeric changes applied to a single attack profile."""

    range_bonus: int = 0
    attack_bonus: int = 0
    strength_bonus: int = 0
    damage_bonus: int = 0
    crit_bonus: int = 0


class ProfileTemplate(ReferenceModel):
    """Raw attack profile whose values may refer to the wielder's stats."""

    name: Optional[str] = None
    range: tuple[StatValue, StatValue] = Field(description="Minimum and maximum range")
    attacks: StatValue
    strength: StatValue
    damage: StatValue
    crit: StatValue
    weapon_runemark: Optional[str] = None


class Fighter(ReferenceModel):
    """Base fighter template."""

    name: str
    points: int = Field(ge=0)
    stats: StatBlock
    runemarks: tuple[str, ...] = ()
    faction_runemarks: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_stats(cls, data: Any) -> Any:
        """Accept records that carry Mv..C at the top level instead of a stats block."""
        if not isinstance(data, dict) or "stats" in data:
            return data
        flat = {key: data[key] for key in _STAT_KEYS if key in data}
        if not flat:
            return data
        lifted = {key: value for key, value in data.items() if key not in flat}
        lifted["stats"] = flat
        return lifted


class ArchetypeRestrictions(ReferenceModel):
    forbidden_fighters: tuple[str, ...] = ()
    forbidden_factions: tuple[str, ...] = ()
    must_use_one_handed_primary: bool = False
    forbid_secondary_equipment: bool = False


class Archetype(ReferenceModel):
    """Role overlay granting effects, runemarks and restrictions."""

    name: str
    points: int = Field(ge=0)
    fighter_effects: Optional[FighterEffects] = None
    runemarks_added: tuple[str, ...] = ()
    restrictions: Optional[ArchetypeRestrictions] = None
    profile: Optional[ProfileTemplate] = None

    def forbids(self, fighter_name: Optional[str], faction: Optional[str]) -> bool:
        """Whether this archetype may not be taken by the fighter or faction."""
        if self.restrictions is None:
            return False
        if fighter_name is not None and fighter_name in self.restrictions.forbidden_fighters:
            return True
        return faction is not None and faction in self.restrictions.forbidden_factions


class Weapon(ReferenceModel):
    """Primary weapon or secondary equipment."""

    name: str
    points: int = Field(ge=0)
    handedness: Optional[Handedness] = None
    profile: Optional[ProfileTemplate] = None
    effects: Optional[WeaponEffects] = None
    fighter_effects: Optional[FighterEffects] = None

    @property
    def is_one_handed(self) -> bool:
        return self.handedness == Handedness.ONE

    @property
    def display_name(self) -> str:
        """Name with handedness, e.g. "Hand Weapon (One-handed)"."""
        if self.handedness is None:
            return self.name
        return f"{self.name} ({self.handedness.value.capitalize()}-handed)"


class MountRestrictions(ReferenceModel):
    forbidden_fighters: tuple[str, ...] = ()
    max_movement: Optional[int] = Field(default=None, ge=0)
    no_mounted_runemark_for: tuple[str, ...] = ()


class Mount(ReferenceModel):
    """Mount carrying the fighter."""

    name: str
    points: int = Field(ge=0)
    fighter_effects: Optional[FighterEffects] = None
    restrictions: Optional[MountRestrictions] = None
    runemarks_added: tuple[str, ...] = ()
    profile: Optional[ProfileTemplate] = None

    def forbids(self, fighter_name: Optional[str]) -> bool:
        return (
            self.restrictions is not None
            and fighter_name is not None
            and fighter_name in self.restrictions.forbidden_fighters
        )


class DivineBlessing(ReferenceModel):
    """Divine blessing, priced by the fighter's final Wounds."""

    name: str
    points_low: int = Field(ge=0)
    points_high: int = Field(ge=0)
    fighter_effects: Optional[FighterEffects] = None
    weapon_effect: Optional[WeaponEffects] = None
    target_profile: TargetClass = TargetClass.MELEE
    targetable: bool = False
    description: str = ""
    special_effect: Optional[str] = None

    @property
    def needs_target(self) -> bool:
        """Whether the weapon effect must be assigned to one attack profile."""
        return self.targetable and self.weapon_effect is not None

    @property
    def effect_text(self) -> str:
        return self.description or self.special_effect or self.name


class ExtraRunemarkRestrictions(ReferenceModel):
    cannot_be_mounted: bool = False


class ExtraRunemark(ReferenceModel):
    """Additional runemark bought for points."""

    name: str
    points: int = Field(ge=0)
    restrictions: Optional[ExtraRunemarkRestrictions] = None

    @property
    def forbids_mounted(self) -> bool:
        return self.restrictions is not None and self.restrictions.cannot_be_mounted


class UnarmedMinimums(ReferenceModel):
    attacks: int = Field(default=1, ge=0)
    damage: int = Field(default=1, ge=0)
    crit: int = Field(default=1, ge=0)


class UnarmedPenalties(ReferenceModel):
    """Penalties applied to the synthesized Unarmed profile."""

    attack_penalty: int = 0
    damage_penalty: int = 0
    crit_penalty: int = 0
    minimum_values: UnarmedMinimums = Field(default_factory=UnarmedMinimums)


class Rules(ReferenceModel):
    """Global rules constants."""

    max_runemarks: int = Field(ge=0)
    max_attack_actions: int = Field(ge=0)
    unarmed_penalties: UnarmedPenalties = Field(default_factory=UnarmedPenalties)
    blessing_wounds_threshold: int = Field(default=DEFAULT_BLESSING_WOUNDS_THRESHOLD, ge=0)
    melee_max_range: int = Field(default=DEFAULT_MELEE_MAX_RANGE, ge=0)
