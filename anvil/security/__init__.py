"""Input sanitization module for Anvil."""

from anvil.security.name_sanitizer import NameSanitizer

__all__ = [
    "NameSanitizer",
]
