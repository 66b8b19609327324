"""Shell settings with JSON persistence.

Settings are read from ``~/.pi/shell.json`` (or ``$PI_CONFIG_DIR/shell.json``)
and overridden by command-line options.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

EofPolicy = Literal["always", "empty-line"]
EOF_POLICIES: tuple[str, ...] = ("always", "empty-line")
LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error")

CONFIG_DIR_NAME = ".pi"
SETTINGS_FILE_NAME = "shell.json"

# JSON key -> dataclass field
_FIELD_NAMES: dict[str, str] = {
    "prompt": "prompt",
    "historySize": "history_size",
    "maxLineLength": "max_line_length",
    "eofPolicy": "eof_policy",
    "logFile": "log_file",
    "logLevel": "log_level",
}


@dataclass
class ShellSettings:
    """Resolved shell configuration."""

    prompt: str | None = None
    history_size: int | None = None
    max_line_length: int | None = None
    eof_policy: EofPolicy = "always"
    log_file: str | None = None
    log_level: str = "warning"

    def __post_init__(self) -> None:
        if self.history_size is not None and self.history_size < 1:
            raise ValueError("historySize must be a positive integer")
        if self.max_line_length is not None and self.max_line_length < 1:
            raise ValueError("maxLineLength must be a positive integer")
        if self.eof_policy not in EOF_POLICIES:
            raise ValueError(
                f"eofPolicy must be one of {', '.join(EOF_POLICIES)}, got {self.eof_policy!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"logLevel must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShellSettings:
        kwargs = {
            _FIELD_NAMES[key]: value
            for key, value in data.items()
            if key in _FIELD_NAMES and value is not None
        }
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, name) for key, name in _FIELD_NAMES.items()}

    def with_overrides(self, **overrides: Any) -> ShellSettings:
        """Return a copy with every non-None override applied."""
        values = {name: getattr(self, name) for name in _FIELD_NAMES.values()}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ShellSettings(**values)


def get_config_dir() -> Path:
    return Path(os.environ.get("PI_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILE_NAME


def load_settings(path: Path | None = None) -> ShellSettings:
    """Load settings from *path*, falling back to defaults on any problem."""
    settings_path = path or get_settings_path()
    if not settings_path.exists():
        return ShellSettings()
    try:
        data = json.loads(settings_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("settings file must contain a JSON object")
        return ShellSettings.from_dict(data)
    except Exception as e:
        print(f"Error reading settings from {settings_path}: {e}", file=sys.stderr)
        return ShellSettings()

