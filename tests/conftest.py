"""Shared test fixtures for bidi-entry."""


import pytest

ARABIC = "مرحبا"


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def editor():
    from bidi_entry.services.line_editor import LineEditor
    return LineEditor()


@pytest.fixture
def arabic() -> str:
    return ARABIC
