"""Smoke tests for configuration in anvil/config.py."""

import os

from anvil.config import (
    DEFAULT_ARCHETYPE,
    DEFAULT_BLESSING_WOUNDS_THRESHOLD,
    DEFAULT_DATA_DIR,
    DEFAULT_MELEE_MAX_RANGE,
    DEFAULT_PRIMARY_WEAPON,
    REFERENCE_DATA_FILES,
)


class TestConfigSmoke:
    """Smoke tests to validate configuration defaults."""

    def test_config_imports_successfully(self):
        """Test that all config constants can be imported without errors."""
        assert DEFAULT_ARCHETYPE is not None
        assert DEFAULT_PRIMARY_WEAPON is not None
        assert isinstance(DEFAULT_BLESSING_WOUNDS_THRESHOLD, int)
        assert isinstance(DEFAULT_MELEE_MAX_RANGE, int)

    def test_shipped_data_files_exist(self):
        """Test that every reference data file ships with the package."""
        assert len(REFERENCE_DATA_FILES) == 8
        for file_name in REFERENCE_DATA_FILES:
            assert os.path.isfile(os.path.join(DEFAULT_DATA_DIR, file_name)), file_name
