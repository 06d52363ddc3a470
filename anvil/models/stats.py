"""Fighter statistics models."""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Stat(str, Enum):
    """Fighter characteristics."""

    MOVEMENT = "movement"
    TOUGHNESS = "toughness"
    WOUNDS = "wounds"
    REACH = "reach"
    ATTACKS = "attacks"
    STRENGTH = "strength"
    DAMAGE = "damage"
    CRIT = "crit"


class BaseStat(str, Enum):
    """Placeholder meaning "use the wielder's current value of this stat"."""

    ATTACKS = "baseAttacks"
    STRENGTH = "baseStrength"
    DAMAGE = "baseDamage"
    CRIT = "baseCrit"
    REACH = "baseReach"

    @property
    def stat(self) -> Stat:
        """The stat this placeholder refers to."""
        return _PLACEHOLDER_STATS[self]


_PLACEHOLDER_STATS = {
    BaseStat.ATTACKS: Stat.ATTACKS,
    BaseStat.STRENGTH: Stat.STRENGTH,
    BaseStat.DAMAGE: Stat.DAMAGE,
    BaseStat.CRIT: Stat.CRIT,
    BaseStat.REACH: Stat.REACH,
}

# Either a fixed number or a reference to one of the wielder's stats
StatValue = Union[int, BaseStat]


class StatBlock(BaseModel):
    """Complete fighter statistics."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Immutable model

    movement: int = Field(ge=0, alias="Mv", description="Movement")
    toughness: int = Field(ge=0, alias="T", description="Toughness")
    wounds: int = Field(ge=0, alias="W", description="Wounds")
    reach: int = Field(ge=0, default=1, alias="R", description="Melee reach")
    attacks: int = Field(ge=0, alias="A", description="Attacks")
    strength: int = Field(ge=0, alias="S", description="Strength")
    damage: int = Field(ge=0, alias="D", description="Damage")
    crit: int = Field(ge=0, alias="C", description="Critical damage")

    def get(self, stat: Stat) -> int:
        """Value of a single stat."""
        return getattr(self, stat.value)

    def as_dict(self) -> dict[Stat, int]:
        """Mutable copy keyed by Stat, for building a working block."""
        return {stat: self.get(stat) for stat in Stat}


def resolve_stat_value(value: StatValue, stats: StatBlock) -> int:
    """Turn a fixed number or a placeholder into a concrete number."""
    if isinstance(value, BaseStat):
        return stats.get(value.stat)
    return value
