"""
Pytest configuration and shared fixtures for receipt anchor tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_ledger = _common.make_ledger
make_recorder = _common.make_recorder
make_service = _common.make_service
write_jsonl_ledger = _common.write_jsonl_ledger


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def empty_ledger():
    """An in-memory ledger with no receipts."""
    return make_ledger(0)


@pytest.fixture
def three_receipt_ledger():
    """Three identical receipts (amount 100000, target AAAAAAAAA)."""
    return make_ledger(3)


@pytest.fixture
def batch_ledger():
    """Fifteen receipts whose amount equals their id."""
    return make_ledger(15, amount=None)


@pytest.fixture
def service(three_receipt_ledger):
    """Service over the three-receipt ledger with 16-leaf batches."""
    return make_service(three_receipt_ledger)


@pytest.fixture
def jsonl_ledger_path(tmp_path):
    """A JSON-lines ledger file holding three receipts."""
    return write_jsonl_ledger(tmp_path / "receipts.jsonl", 3)


@pytest.fixture(autouse=True)
def _isolate_anchor_env(monkeypatch):
    """Keep ANCHOR_* variables from the developer's shell out of tests."""
    for name in (
        "ANCHOR_OPERATOR",
        "ANCHOR_PATH_LIMIT",
        "ANCHOR_LEDGER_PATH",
        "ANCHOR_SNAPSHOT_DIR",
        "ANCHOR_LOG_LEVEL",
        "ANCHOR_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
