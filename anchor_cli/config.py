"""
Module 11 - CLI Configuration

Configuration loading for the anchor CLI. Files and environment variables
resolve to the shared RuntimeConfig; command-line flags override both.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from core.config.runtime import RuntimeConfig, load_runtime_config


# Environment variable prefix
ENV_PREFIX = "ANCHOR_"

DEFAULT_CONFIG_FILE = "anchor.yaml"


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to a YAML or JSON config file

    Returns:
        Merged configuration
    """
    return load_runtime_config(config_path)


def apply_cli_overrides(config: RuntimeConfig, args: Namespace) -> RuntimeConfig:
    """Overlay --ledger / --snapshot-dir / --log-level onto the loaded config."""
    if getattr(args, "ledger", None):
        config.storage.ledger_path = args.ledger
    if getattr(args, "snapshot_dir", None):
        config.storage.snapshot_dir = args.snapshot_dir
    if getattr(args, "log_level", None):
        config.log_level = args.log_level
    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return f"""# Receipt anchor configuration.
# Every value can be overridden with {ENV_PREFIX}* environment variables.
anchor:
  operator: operator
  # Batches hold 2**path_limit receipts (0..10)
  path_limit: 4
storage:
  ledger_path: receipts.jsonl
  snapshot_dir: snapshots
log_level: INFO
"""
