"""
Pytest configuration and shared fixtures for allowtree tests.

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

make_text_leaves = _common.make_text_leaves
make_address_leaves = _common.make_address_leaves
make_numbered_leaves = _common.make_numbered_leaves

from allowtree.config.runtime import set_default_config
from allowtree.merkle import MerkleTree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def reset_default_config():
    """Keep the process-wide default config from leaking between tests."""
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abcde_leaves():
    """Five text leaves: a..e (odd count, exercises the carry rule)."""
    return make_text_leaves("abcde")


@pytest.fixture
def abcdef_leaves():
    """Six text leaves: a..f."""
    return make_text_leaves("abcdef")


@pytest.fixture
def address_leaves():
    """The recorded 10-address allow list as raw 20-byte leaves."""
    return make_address_leaves()


@pytest.fixture
def abcde_tree(abcde_leaves):
    """Tree over a..e."""
    return MerkleTree(abcde_leaves)


@pytest.fixture
def leaf_file(tmp_path):
    """Write leaves to a file and return its path."""
    def _write(lines, name="leaves.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
