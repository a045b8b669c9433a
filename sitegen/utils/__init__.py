"""Utility modules for the site generation pipeline."""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
