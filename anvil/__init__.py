"""Anvil: rules engine for building Warcry fighter profiles."""

__version__ = "0.1.0"
