"""Central configuration defaults and constants for Anvil."""

import os

# Reference data
DEFAULT_DATA_DIR = os.getenv(
    "ANVIL_DATA_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
)
REFERENCE_DATA_FILES = (
    "fighters.json",
    "archetypes.json",
    "primaryWeapons.json",
    "secondaryWeapons.json",
    "mounts.json",
    "divineBlessings.json",
    "extraRunemarks.json",
    "rules.json",
)

# Saved builds
DEFAULT_BUILD_DIR = os.getenv("ANVIL_BUILD_DIR", "/var/anvil/builds")

# Fallbacks used when a selection is no longer legal
DEFAULT_ARCHETYPE = os.getenv("ANVIL_DEFAULT_ARCHETYPE", "Commander")
DEFAULT_PRIMARY_WEAPON = os.getenv("ANVIL_DEFAULT_PRIMARY_WEAPON", "Hand Weapon")

# Rules constants that the reference data may override
DEFAULT_BLESSING_WOUNDS_THRESHOLD = int(os.getenv("ANVIL_BLESSING_WOUNDS_THRESHOLD", "23"))  # Below: low cost
DEFAULT_MELEE_MAX_RANGE = int(os.getenv("ANVIL_MELEE_MAX_RANGE", "3"))  # Upper bound for blessing targets

# Fighter display name
DEFAULT_FIGHTER_DISPLAY_NAME = "Un-named Fighter"
DEFAULT_MAX_NAME_LENGTH = int(os.getenv("ANVIL_MAX_NAME_LENGTH", "60"))

# Logging
DEFAULT_LOG_LEVEL = os.getenv("ANVIL_LOG_LEVEL", "INFO").upper()
