"""Settings management using TOML configuration."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Self

from bidi_entry.config.paths import CONFIG_FILE
from bidi_entry.utils.graphemes import resolve_encoding


@dataclass
class BidiSettings:
    encoding: str = "utf-8"


@dataclass
class InputSettings:
    placeholder: str = ""
    max_length: int = 0  # grapheme clusters, 0 = unlimited
    strip_on_submit: bool = True


@dataclass
class LoggingSettings:
    level: str = "WARNING"
    file: str = ""  # empty = stderr only


SECTION_MAP: dict[str, type] = {
    "bidi": BidiSettings,
    "input": InputSettings,
    "logging": LoggingSettings,
}


@dataclass
class Settings:
    bidi: BidiSettings = field(default_factory=BidiSettings)
    input: InputSettings = field(default_factory=InputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> Self:
        settings = cls()

        if not path.exists():
            settings._create_default(path)
            return settings

        with open(path, "rb") as f:
            data = tomllib.load(f)

        for section_name, section_cls in SECTION_MAP.items():
            if section_name in data:
                section_data = data[section_name]
                section_instance = section_cls()
                for f_info in fields(section_instance):
                    if f_info.name in section_data:
                        value = section_data[f_info.name]
                        expected = type(getattr(section_instance, f_info.name))
                        if type(value) is not expected:
                            raise ValueError(
                                f"{section_name}.{f_info.name} must be {expected.__name__}, "
                                f"got {type(value).__name__}"
                            )
                        setattr(section_instance, f_info.name, value)
                setattr(settings, section_name, section_instance)

        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        resolve_encoding(self.bidi.encoding)
        if self.input.max_length < 0:
            raise ValueError(f"input.max_length must be >= 0, got {self.input.max_length}")
        if not isinstance(logging.getLevelName(self.logging.level.upper()), int):
            raise ValueError(f"Unknown log level '{self.logging.level}'")

    def save(self, path: Path = CONFIG_FILE) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines: list[str] = []

        for section_name in SECTION_MAP:
            section = getattr(self, section_name)
            lines.append(f"[{section_name}]")
            for f_info in fields(section):
                value = getattr(section, f_info.name)
                lines.append(f"{f_info.name} = {_format_toml_value(value)}")
            lines.append("")

        path.write_text("\n".join(lines), encoding="utf-8")

    def _create_default(self, path: Path) -> None:
        self.save(path)

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.logging.level.upper())


_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\b": "\\b",
    "\f": "\\f",
}


def _escape_toml_char(char: str) -> str:
    if char in _TOML_ESCAPES:
        return _TOML_ESCAPES[char]
    if ord(char) < 0x20 or ord(char) == 0x7F:
        return f"\\u{ord(char):04x}"
    return char


def _format_toml_value(value: object) -> str:
    match value:
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case str():
            return f'"{"".join(_escape_toml_char(c) for c in value)}"'
        case _:
            return repr(value)


_settings: Settings | None = None


def get_settings(path: Path | None = None) -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.load(path or CONFIG_FILE)
    return _settings
