"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def reset_adapter_bootstrap():
    """Every test starts without a cached adapter singleton."""
    from infra.bootstrap import AdapterBootstrap

    AdapterBootstrap.reset()
    yield
    AdapterBootstrap.reset()
