"""
Configuration management for Screenshot Reporter.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from screenshot_reporter.core.errors import ConfigurationError

CONFIG_ENV = "SCREENSHOT_REPORTER_CONFIG"
SESSION_ENV = "SCREENSHOT_REPORTER_SESSION_ID"
CONFIG_FILE_NAME = "screenshot_reporter.toml"

PATH_KEYS = frozenset({"data_dir", "external_dir", "config_file"})


@dataclass
class Config:
    """Configuration class for Screenshot Reporter."""

    # Storage locations; the report lands in data_dir/app_testify or external_dir/testify
    data_dir: Optional[Path] = None
    external_dir: Optional[Path] = None
    use_sd_card: bool = False

    # Shared by every process of one run so their reports merge
    session_id: Optional[str] = None

    verbosity: int = 0  # 0=warnings, 1=merge decisions, 2=same, 3=debug
    config_file: Optional[Path] = None

    def __post_init__(self):
        """Post-initialization processing."""
        self._load_config_file()

        if self.session_id is None:
            self.session_id = os.environ.get(SESSION_ENV) or None

        base = Path.cwd()
        if self.data_dir is None:
            self.data_dir = base
        if self.external_dir is None:
            self.external_dir = base / "sdcard"
        self.data_dir = Path(self.data_dir).expanduser()
        self.external_dir = Path(self.external_dir).expanduser()

        if not isinstance(self.use_sd_card, bool):
            raise ConfigurationError(f"use_sd_card must be a boolean, got {self.use_sd_card!r}")

        if not isinstance(self.verbosity, int) or not 0 <= self.verbosity <= 3:
            raise ConfigurationError(f"verbosity must be between 0 and 3, got {self.verbosity}")

    def _load_config_file(self) -> None:
        """Load defaults from screenshot_reporter.toml if present."""
        env_path = os.environ.get(CONFIG_ENV)
        if env_path:
            self.config_file = Path(env_path).resolve()
        elif self.config_file is None:
            self.config_file = Path.cwd() / CONFIG_FILE_NAME
        else:
            self.config_file = Path(self.config_file)

        if not self.config_file.exists():
            return

        try:
            try:
                import tomllib  # Python 3.11+
            except ModuleNotFoundError:  # Python 3.8-3.10
                import tomli as tomllib

            data = tomllib.loads(self.config_file.read_text())
        except Exception as e:
            raise ConfigurationError(f"Failed to read config file: {self.config_file}: {e}") from e

        table = data.get("screenshot_reporter") or data.get("tool", {}).get("screenshot_reporter", {})
        if not isinstance(table, dict):
            raise ConfigurationError(f"[screenshot_reporter] in {self.config_file} is not a table")

        # Explicit constructor arguments win over the file
        defaults = Config.__dataclass_fields__
        for key, value in table.items():
            if key not in defaults or key == "config_file" or value is None:
                continue
            if getattr(self, key) != defaults[key].default:
                continue
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "data_dir": str(self.data_dir),
            "external_dir": str(self.external_dir),
            "use_sd_card": self.use_sd_card,
            "session_id": self.session_id,
            "verbosity": self.verbosity,
            "config_file": str(self.config_file) if self.config_file else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        data = dict(data)
        for key in PATH_KEYS:
            if key in data and isinstance(data[key], str):
                data[key] = Path(data[key])
        return cls(**data)
