"""Centralized path definitions for bidi-entry.

Respects $XDG_CONFIG_HOME when set.
"""

from __future__ import annotations

import os
from pathlib import Path

_xdg_config = os.environ.get("XDG_CONFIG_HOME")

CONFIG_DIR = (
    (Path(_xdg_config) / "bidi-entry") if _xdg_config else (Path.home() / ".config" / "bidi-entry")
)
CONFIG_FILE = CONFIG_DIR / "config.toml"
