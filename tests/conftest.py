import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"

# src/ for the package, repo root for tests.helpers
for path in (SRC_DIR, REPO_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def params():
    """Fresh default tracking parameters for each test."""
    from wave_tracker.config import get_default_params

    return get_default_params()
