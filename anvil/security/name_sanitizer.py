"""Sanitization for the free-text fighter name."""

import re
import unicodedata
from typing import Optional

from anvil.config import DEFAULT_MAX_NAME_LENGTH


class NameSanitizer:
    """Cleans the fighter display name before it is rendered or exported."""

    # Markup that would be interpreted by the rendering layer
    DANGEROUS_TOKENS = [
        "<",
        ">",
        "{",
        "}",
        "`",
    ]

    # Maximum name length (characters)
    MAX_NAME_LENGTH = DEFAULT_MAX_NAME_LENGTH

    def __init__(self, max_length: int = MAX_NAME_LENGTH) -> None:
        """Initialize sanitizer with configurable limits."""
        self.max_length = max_length

    def sanitize(self, name: str) -> str:
        """
        Sanitize a name by:
        1. Normalizing unicode
        2. Stripping markup tokens
        3. Removing control characters
        4. Collapsing whitespace
        5. Truncating to max length
        """
        if not isinstance(name, str):
            raise TypeError(f"Name must be a string, got {type(name)}")

        # Normalize unicode (NFKC: compatibility decomposition + composition)
        sanitized = unicodedata.normalize("NFKC", name)

        for token in self.DANGEROUS_TOKENS:
            sanitized = sanitized.replace(token, "")

        # Names are single-line
        sanitized = re.sub(r"[\x00-\x1F\x7F]", " ", sanitized)
        sanitized = re.sub(r"\s+", " ", sanitized).strip()

        if len(sanitized) > self.max_length:
            sanitized = sanitized[: self.max_length].rstrip()

        return sanitized

    def is_safe(self, name: str) -> tuple[bool, Optional[str]]:
        """
        Check if a name can be used as-is.
        Returns (is_safe, error_message).
        """
        if not name or not name.strip():
            return False, "Name is empty"

        if len(name) > self.max_length:
            return False, f"Name exceeds maximum length of {self.max_length} characters"

        for token in self.DANGEROUS_TOKENS:
            if token in name:
                return False, f"Name contains forbidden token: {token}"

        if re.search(r"[\x00-\x1F\x7F]", name):
            return False, "Name contains control characters"

        return True, None
