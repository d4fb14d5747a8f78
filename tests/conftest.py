"""
Pytest configuration and shared fixtures for Proof-of-Reserve tests.

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

EXAMPLE_ITEMS = _common.EXAMPLE_ITEMS
make_items = _common.make_items
make_store = _common.make_store
make_service = _common.make_service


# =============================================================================
# Environment isolation
# =============================================================================

_POR_ENV_VARS = [
    "POR_LEAF_TAG",
    "POR_BRANCH_TAG",
    "POR_ACCOUNTS_FILE",
    "POR_HOST",
    "POR_PORT",
    "POR_LOG_LEVEL",
    "POR_LOG_FILE",
    "POR_OUTPUT_FORMAT",
]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep a developer's POR_* variables and por.json out of every test."""
    for name in _POR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def example_items():
    """The five-item example list."""
    return list(EXAMPLE_ITEMS)


@pytest.fixture
def store():
    """The eight-account sample store."""
    return make_store()


@pytest.fixture
def service():
    """ProofOfReserveService over the sample store."""
    return make_service()


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
