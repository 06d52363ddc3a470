"""Selection input model."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Legacy selector values carry the handedness, e.g. "Great Axe (Two-handed)"
_HANDEDNESS_SUFFIX = re.compile(r"\s*\((?:One|Two)-handed\)$", re.IGNORECASE)

NONE_VALUES = ("", "None", "none")

CHOICE_FIELDS = (
    "fighter_type",
    "faction_runemark",
    "archetype",
    "primary_weapon",
    "secondary_weapon",
    "mount",
    "blessing",
    "blessing_target_weapon",
    "runemark",
)


class BuildSelection(BaseModel):
    """Current choices made by the user; any choice may be empty."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    fighter_name: str = Field(default="", description="Free-text display name")
    fighter_type: Optional[str] = Field(default=None, description="Base fighter name")
    faction_runemark: Optional[str] = Field(default=None, description="Faction runemark")
    archetype: Optional[str] = Field(default=None, description="Archetype name")
    primary_weapon: Optional[str] = Field(default=None, description="Primary weapon name")
    secondary_weapon: Optional[str] = Field(default=None, description="Secondary equipment name")
    mount: Optional[str] = Field(default=None, description="Mount name")
    blessing: Optional[str] = Field(default=None, description="Divine blessing name")
    blessing_target_weapon: Optional[str] = Field(
        default=None, description="Attack profile that receives the blessing's weapon effect"
    )
    runemark: Optional[str] = Field(default=None, description="Extra runemark name")

    @field_validator("fighter_name", mode="before")
    @classmethod
    def _coerce_name(cls, value):
        return "" if value is None else value

    @field_validator(*CHOICE_FIELDS, mode="before")
    @classmethod
    def _normalize_choice(cls, value):
        if value is None:
            return None
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value in NONE_VALUES:
            return None
        return value

    @field_validator("primary_weapon", "secondary_weapon", mode="after")
    @classmethod
    def _strip_handedness(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _HANDEDNESS_SUFFIX.sub("", value) or None

    def record_fields(self) -> dict[str, str]:
        """Flat camelCase record with "None" for empty choices."""
        dumped = self.model_dump(by_alias=True)
        return {key: ("None" if value is None else value) for key, value in dumped.items()}
