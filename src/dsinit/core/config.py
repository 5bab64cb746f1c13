"""User configuration for dsinit.

Defaults for `dsinit new` live in a JSON file:
    $DSINIT_CONFIG_DIR/config.json   (default: ~/.config/dsinit/config.json)

CLI options fall back to these values when not given explicitly.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional, Any

from filelock import FileLock

from dsinit.core.engine import atomic_write
from dsinit.core.entry import DEFAULT_LICENSE, DEFAULT_PYTHON_VERSION

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "DSINIT_CONFIG_DIR"
CONFIG_FILE = "config.json"


# =============================================================================
# Configuration Data Class
# =============================================================================

@dataclass
class DsinitConfig:
    """Defaults applied to every new project."""
    default_tier: str = "core"
    python_version: str = DEFAULT_PYTHON_VERSION
    author: str = ""
    license: str = DEFAULT_LICENSE

    # Collaborators
    env_manager: str = "auto"  # auto, conda, mamba
    init_git: bool = True
    create_env: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "DsinitConfig":
        """Build a config from parsed JSON, converting values to field types.

        Raises:
            TypeError: data is not a JSON object
            ValueError: a boolean field holds an unrecognized value
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(**{
            k: coerce_value(k, str(v)) for k, v in data.items()
            if k in cls.__dataclass_fields__ and v is not None
        })


def coerce_value(key: str, raw: str) -> Any:
    """Convert a string from the command line to the field's type.

    Raises:
        KeyError: Unknown configuration key
        ValueError: Value cannot be converted
    """
    types = {f.name: f.type for f in fields(DsinitConfig)}
    if key not in types:
        raise KeyError(key)

    if types[key] in (bool, "bool"):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"Expected a boolean for '{key}', got '{raw}'")
    return raw


# =============================================================================
# Config Manager
# =============================================================================

def default_config_dir() -> Path:
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".config" / "dsinit"


class ConfigManager:
    """Loads and saves DsinitConfig."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or default_config_dir()
        self.config_file = self.config_dir / CONFIG_FILE
        self._config: Optional[DsinitConfig] = None
        self._lock = FileLock(str(self.config_file) + ".lock", timeout=30)

    @property
    def config(self) -> DsinitConfig:
        """Get configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> DsinitConfig:
        """Load configuration from file, falling back to defaults."""
        if self.config_file.exists():
            try:
                data = json.loads(self.config_file.read_text(encoding="utf-8"))
                return DsinitConfig.from_dict(data)
            except (ValueError, TypeError, OSError) as e:
                logger.warning("Config file %s unreadable: %s. Using defaults.", self.config_file, e)
        return DsinitConfig()

    def save(self) -> None:
        """Save configuration (atomic, under a file lock)."""
        if self._config is None:
            return
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with self._lock:
            atomic_write(self.config_file, json.dumps(self._config.to_dict(), indent=2) + "\n")

    def update(self, **kwargs) -> DsinitConfig:
        """Update configuration values and save.

        Raises:
            KeyError: If a key is not a configuration field
        """
        for key, value in kwargs.items():
            if not hasattr(self.config, key):
                raise KeyError(key)
            setattr(self.config, key, value)
        self.save()
        return self.config


def get_config(config_dir: Optional[Path] = None) -> DsinitConfig:
    """Convenience accessor for the current configuration."""
    return ConfigManager(config_dir).config
