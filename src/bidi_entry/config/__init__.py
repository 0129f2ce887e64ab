"""Configuration management for bidi-entry."""

from __future__ import annotations

from bidi_entry.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
