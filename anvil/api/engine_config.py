"""Resolution engine configuration."""

from typing import Optional

from pydantic import BaseModel, Field

from anvil.config import (
    DEFAULT_ARCHETYPE,
    DEFAULT_FIGHTER_DISPLAY_NAME,
    DEFAULT_MAX_NAME_LENGTH,
    DEFAULT_PRIMARY_WEAPON,
)


class EngineConfig(BaseModel):
    """Fallbacks and limits used by a resolution pass."""

    default_archetype: str = Field(
        default=DEFAULT_ARCHETYPE, description="Archetype used when the chosen one is illegal"
    )
    default_primary_weapon: str = Field(
        default=DEFAULT_PRIMARY_WEAPON,
        description="Primary weapon used when a one-handed weapon is required",
    )
    default_fighter_name: str = Field(
        default=DEFAULT_FIGHTER_DISPLAY_NAME, description="Display name for un-named fighters"
    )
    max_name_length: int = Field(
        default=DEFAULT_MAX_NAME_LENGTH,
        ge=1,
        le=500,
        description="Maximum fighter display name length",
    )


class EngineConfigManager:
    """Manages engine configuration."""

    def __init__(self, initial_config: Optional[EngineConfig] = None) -> None:
        """Initialize with optional config."""
        self._config = initial_config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        """Get current config."""
        return self._config

    def update_config(self, new_config: EngineConfig) -> None:
        """Update configuration."""
        self._config = new_config
