"""Exceptions raised by Anvil."""


class AnvilError(Exception):
    """Base class for Anvil errors."""


class CatalogLoadError(AnvilError):
    """A reference data file is missing, unparsable or fails validation."""

    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Failed to load {file_name}: {reason}")


class BuildRecordError(AnvilError):
    """A saved build record could not be parsed."""
