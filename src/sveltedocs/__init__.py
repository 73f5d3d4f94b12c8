"""Keyword search over the Svelte documentation."""

__version__ = "0.1.0"
