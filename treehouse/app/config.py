"""
Treehouse Configuration.

Central configuration management for Buddy's Treehouse hosts.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from treehouse.core.rules import DEFAULT_TICK_INTERVAL_SECONDS
from treehouse.systems.storage.snapshot_store import DEFAULT_STORAGE_KEY


CONFIG_FILENAME = "treehouse_config.json"


# ============================================================================
# Default Paths
# ============================================================================


def get_default_data_dir() -> Path:
    """Get the default data directory for the treehouse."""
    if env_path := os.environ.get("TREEHOUSE_DATA_DIR"):
        return Path(env_path)

    return Path.home() / ".treehouse"


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class TreehouseConfig:
    """Host configuration: where Buddy lives and how fast time passes."""

    # Paths
    data_dir: Path = field(default_factory=get_default_data_dir)
    log_dir: Path | None = None

    # Persistence
    storage_key: str = DEFAULT_STORAGE_KEY

    # Time
    tick_interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    def __post_init__(self):
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        if self.tick_interval_seconds <= 0:
            raise ValueError(f"tick_interval_seconds must be positive, got {self.tick_interval_seconds}")

    @property
    def snapshot_path(self) -> Path:
        return self.data_dir / f"{self.storage_key}.json"

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "TreehouseConfig":
        """Load configuration from a JSON file.

        Args:
            config_path: Path to config file. If None, uses the default location.

        Returns:
            TreehouseConfig instance (defaults if the file doesn't exist)
        """
        if config_path is None:
            config_path = get_default_data_dir() / CONFIG_FILENAME

        config_path = Path(config_path)

        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreehouseConfig":
        """Create config from dictionary."""
        log_dir = data.get("log_dir")
        return cls(
            data_dir=Path(data.get("data_dir", get_default_data_dir())),
            log_dir=Path(log_dir) if log_dir else None,
            storage_key=data.get("storage_key", DEFAULT_STORAGE_KEY),
            tick_interval_seconds=float(data.get("tick_interval_seconds", DEFAULT_TICK_INTERVAL_SECONDS)),
            log_level=data.get("log_level", "WARNING"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "data_dir": str(self.data_dir),
            "log_dir": str(self.log_dir) if self.log_dir else None,
            "storage_key": self.storage_key,
            "tick_interval_seconds": self.tick_interval_seconds,
            "log_level": self.log_level,
        }

    def save(self, config_path: str | Path | None = None) -> Path:
        """Save configuration to a JSON file.

        Args:
            config_path: Path to save to. If None, saves next to the data.

        Returns:
            Path to saved file
        """
        if config_path is None:
            config_path = self.data_dir / CONFIG_FILENAME

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: TreehouseConfig | None = None


def get_config() -> TreehouseConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = TreehouseConfig.load()
    return _global_config


def set_config(config: TreehouseConfig) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> TreehouseConfig:
    """Reload configuration from disk."""
    global _global_config
    _global_config = TreehouseConfig.load(config_path)
    return _global_config
