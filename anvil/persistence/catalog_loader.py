"""Loads the reference catalog from its data files."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from anvil.config import DEFAULT_DATA_DIR, REFERENCE_DATA_FILES
from anvil.errors import CatalogLoadError
from anvil.models.catalog import ReferenceCatalog

logger = logging.getLogger(__name__)

# Data file name -> catalog field
_CATALOG_FIELDS = {
    "fighters.json": "fighters",
    "archetypes.json": "archetypes",
    "primaryWeapons.json": "primary_weapons",
    "secondaryWeapons.json": "secondary_weapons",
    "mounts.json": "mounts",
    "divineBlessings.json": "divine_blessings",
    "extraRunemarks.json": "extra_runemarks",
    "rules.json": "rules",
}


class CatalogLoader:
    """Reads the eight reference data files and validates them into a catalog."""

    def __init__(self, data_directory: Union[str, Path] = DEFAULT_DATA_DIR):
        """
        Initialize catalog loader.

        Args:
            data_directory: Directory holding the reference data files
        """
        self.data_directory = Path(data_directory)

    def load(self) -> ReferenceCatalog:
        """
        Load and validate every reference data file.

        Returns:
            Immutable ReferenceCatalog

        Raises:
            CatalogLoadError: if a file is missing, unparsable or invalid
        """
        raw = {
            _CATALOG_FIELDS[file_name]: self._read_file(file_name)
            for file_name in REFERENCE_DATA_FILES
        }

        try:
            catalog = ReferenceCatalog.model_validate(raw)
        except ValidationError as e:
            file_name = self._file_for_error(e)
            logger.error(f"Invalid reference data in {file_name}: {e}")
            raise CatalogLoadError(file_name, str(e)) from e

        logger.info(
            f"Loaded reference catalog from {self.data_directory}: "
            f"{len(catalog.fighters)} fighters, {len(catalog.archetypes)} archetypes, "
            f"{len(catalog.primary_weapons)} primary weapons"
        )
        return catalog

    def _read_file(self, file_name: str) -> Any:
        file_path = self.data_directory / file_name
        if not file_path.is_file():
            logger.error(f"Reference data file not found: {file_path}")
            raise CatalogLoadError(file_name, "file not found")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading reference data from {file_path}: {e}", exc_info=True)
            raise CatalogLoadError(file_name, str(e)) from e

        logger.debug(f"Read reference data from {file_path}")
        return data

    @staticmethod
    def _file_for_error(error: ValidationError) -> str:
        """Name the data file behind the first validation error."""
        fields = {field: file_name for file_name, field in _CATALOG_FIELDS.items()}
        for detail in error.errors():
            if detail["loc"] and detail["loc"][0] in fields:
                return fields[detail["loc"][0]]
        return "reference data"


def load_default_catalog(data_directory: Optional[Union[str, Path]] = None) -> ReferenceCatalog:
    """Load the catalog shipped with the package, or one from another directory."""
    return CatalogLoader(data_directory or DEFAULT_DATA_DIR).load()
