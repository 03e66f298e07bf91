"""Shared pytest fixtures for particlefx tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Randomness Fixtures
# ============================================================================


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for spread sampling."""
    return np.random.default_rng(1234)
