"""
Runtime Configuration

Central configuration for the anchor service: operator identity, batch
capacity and storage locations.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class AnchorConfig:
    """Operator identity and initial batch capacity."""
    operator: str = "operator"
    path_limit: int = 4


@dataclass
class StorageConfig:
    """Where receipts are read from and snapshots are kept."""
    ledger_path: Optional[str] = None
    # None keeps snapshots in memory only
    snapshot_dir: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the anchor service.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    anchor: AnchorConfig = field(default_factory=AnchorConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ANCHOR_OPERATOR: operator identity allowed to commit
        - ANCHOR_PATH_LIMIT: initial path limit (0..10)
        - ANCHOR_LEDGER_PATH: JSON-lines receipts file
        - ANCHOR_SNAPSHOT_DIR: durable snapshot directory
        - ANCHOR_LOG_LEVEL: logging level name
        """
        overrides: dict[str, Any] = {}

        if os.getenv("ANCHOR_OPERATOR"):
            overrides.setdefault("anchor", {})["operator"] = os.getenv("ANCHOR_OPERATOR")
        if os.getenv("ANCHOR_PATH_LIMIT"):
            overrides.setdefault("anchor", {})["path_limit"] = int(os.environ["ANCHOR_PATH_LIMIT"])

        if os.getenv("ANCHOR_LEDGER_PATH"):
            overrides.setdefault("storage", {})["ledger_path"] = os.getenv("ANCHOR_LEDGER_PATH")
        if os.getenv("ANCHOR_SNAPSHOT_DIR"):
            overrides.setdefault("storage", {})["snapshot_dir"] = os.getenv("ANCHOR_SNAPSHOT_DIR")

        if os.getenv("ANCHOR_LOG_LEVEL"):
            overrides["log_level"] = os.environ["ANCHOR_LOG_LEVEL"].upper()

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load a YAML (.yaml/.yml) or JSON config file."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        anchor_data = data.get("anchor", {})
        storage_data = data.get("storage", {})

        anchor = AnchorConfig(**anchor_data) if anchor_data else AnchorConfig()
        storage = StorageConfig(**storage_data) if storage_data else StorageConfig()

        return cls(
            anchor=anchor,
            storage=storage,
            log_level=str(data.get("log_level", "INFO")).upper(),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("anchor", {}).items():
            setattr(new_config.anchor, key, value)

        for key, value in overrides.get("storage", {}).items():
            setattr(new_config.storage, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "anchor": {
                "operator": self.anchor.operator,
                "path_limit": self.anchor.path_limit,
            },
            "storage": {
                "ledger_path": self.storage.ledger_path,
                "snapshot_dir": self.storage.snapshot_dir,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


def default_config_paths() -> list[Path]:
    """Config file locations searched when none is given explicitly."""
    return [
        Path.cwd() / "anchor.yaml",
        Path.cwd() / "anchor.json",
        Path.cwd() / ".anchor.json",
        Path.home() / ".config" / "receipt-anchor" / "config.yaml",
    ]


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    With no explicit path, the first existing file from default_config_paths()
    is used, falling back to defaults. Environment variables always win.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
        logger.info(f"Loaded config from {config_path}")
        return config.with_env_overrides()

    config = RuntimeConfig()
    for path in default_config_paths():
        if path.exists():
            config = RuntimeConfig.from_file(path)
            logger.info(f"Loaded config from {path}")
            break

    return config.with_env_overrides()


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
