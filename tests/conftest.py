"""
Test fixtures for training-log-api.

Provides the FastAPI test client and sample training log documents.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Repo root: .../training-log-api
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import training_log_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from training_log_api.main import app


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def api_client() -> TestClient:
    """Shared FastAPI TestClient for training-log-api."""
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Per-test FastAPI TestClient (for tests needing fresh state)."""
    return TestClient(app)


# ---------------------------------------------------------------------------
# Sample Data Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def push_day_log() -> str:
    """A single session with inline sets."""
    return "# Push Day\n20/02/2025\n\nBench Press (4x8) : 45kg A, / C7, 40kg C6, 35kg A\n"


@pytest.fixture
def training_log() -> str:
    """Three sessions mixing inline sets, list items, drop sets and timed work."""
    return """# Push Day
20/02/2025 18:30

Bench Press (4x8): 45kg A, / C7, 40kg C6, 35kg A
Cable Flyes (3x12):
- 10/5kg C7/5
- / B 'shoulder felt tight'
Plank (3*1min): A, /, C45s

# Pull Day
22/02/2025

Barbell Row (3x10):
- 60kg A
- /
- 55kg C8
---
# Push Day
27/02/2025 07:15

Bench Press (4x8):
- 47.5kg A
- / B
- / C6
- /
"""
