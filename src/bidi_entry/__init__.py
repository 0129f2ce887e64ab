"""Direction-hinted single-line text entry for terminal UIs."""

__version__ = "0.1.0"
