"""Build record formatting and on-disk storage of saved builds."""

import json
import logging
import re
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from anvil.config import DEFAULT_BUILD_DIR
from anvil.errors import BuildRecordError
from anvil.models.selection import BuildSelection

logger = logging.getLogger(__name__)

_RECORD_LINE = re.compile(r"^\s*([A-Za-z]+)\s*:\s?(.*)$")
_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_ESCAPED = re.compile(r"\\(.)")


def _escape_value(value: str) -> str:
    """Keep each value on one line."""
    return "".join(_ESCAPES.get(char, char) for char in value)


def _unescape_value(value: str) -> str:
    unescaped = {"n": "\n", "r": "\r"}
    return _ESCAPED.sub(lambda m: unescaped.get(m.group(1), m.group(1)), value)


def format_build_record(selection: BuildSelection) -> str:
    """Render a selection as a key: value text block, one line per field."""
    return (
        "\n".join(
            f"{key}: {_escape_value(value)}" for key, value in selection.record_fields().items()
        )
        + "\n"
    )


def parse_build_record(text: str) -> BuildSelection:
    """
    Parse a key: value text block back into a selection.

    Blank lines and unknown keys are ignored. Backslash escapes written by
    format_build_record are undone.

    Args:
        text: Text produced by format_build_record

    Returns:
        BuildSelection

    Raises:
        BuildRecordError: if a line is not a key: value pair
    """
    known = set(BuildSelection().record_fields())
    fields = {}
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        match = _RECORD_LINE.match(line)
        if match is None:
            raise BuildRecordError(f"Line {line_number} is not a 'key: value' pair: {line!r}")
        key, value = match.group(1), _unescape_value(match.group(2))
        if key in known:
            fields[key] = value
    try:
        return BuildSelection.model_validate(fields)
    except ValidationError as e:
        raise BuildRecordError(f"Invalid build record: {e}") from e


def _slugify(name: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", name.strip()).strip("_")
    if not slug:
        raise ValueError(f"Build name {name!r} has no usable characters")
    return slug


class BuildStore:
    """Saves builds to disk and loads them back."""

    def __init__(self, directory: Union[str, Path] = DEFAULT_BUILD_DIR):
        """
        Initialize build store.

        Args:
            directory: Directory where builds will be saved
        """
        self.directory = Path(directory)
        self._ensure_directory_exists()

    def _ensure_directory_exists(self) -> None:
        """Ensure build directory exists, create if it doesn't."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Build directory ready: {self.directory}")
        except PermissionError:
            logger.error(f"Permission denied creating directory: {self.directory}")
            raise
        except OSError as e:
            logger.error(f"Error creating directory {self.directory}: {e}")
            raise

    def _build_path(self, name: str) -> Path:
        return self.directory / f"{_slugify(name)}.json"

    def save_build(self, name: str, selection: BuildSelection) -> str:
        """
        Save a build as {slug}.json.

        Args:
            name: Build name
            selection: Selection to save

        Returns:
            Path to the saved file
        """
        file_path = self._build_path(name)
        try:
            # Write to file atomically
            temp_path = file_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(selection.model_dump_json(by_alias=True, indent=2))
            temp_path.replace(file_path)

            logger.debug(f"Saved build {name!r} to {file_path}")
            return str(file_path)
        except Exception as e:
            logger.error(f"Error saving build {name!r} to {file_path}: {e}", exc_info=True)
            raise

    def load_build(self, name: str) -> Optional[BuildSelection]:
        """
        Load a saved build.

        Args:
            name: Build name

        Returns:
            BuildSelection if found, None otherwise
        """
        file_path = self._build_path(name)
        if not file_path.exists():
            logger.warning(f"Build file not found: {file_path}")
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            selection = BuildSelection.model_validate(data)
            logger.debug(f"Loaded build from {file_path}")
            return selection
        except Exception as e:
            logger.error(f"Error loading build from {file_path}: {e}", exc_info=True)
            return None

    def list_builds(self) -> list[str]:
        """
        List the names of all saved builds.

        Returns:
            Sorted list of build names
        """
        if not self.directory.exists():
            return []
        return sorted(path.stem for path in self.directory.glob("*.json") if path.is_file())

    def delete_build(self, name: str) -> bool:
        """
        Delete a saved build.

        Returns:
            True if a file was removed
        """
        file_path = self._build_path(name)
        if not file_path.exists():
            return False
        file_path.unlink()
        logger.info(f"Deleted build {name!r}")
        return True
