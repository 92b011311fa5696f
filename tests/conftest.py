from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Repo root on sys.path so `hexasphere` and `scripts` import from any CWD.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hexasphere import tessellation  # noqa: E402


@pytest.fixture(scope="session")
def sphere_n2():
    return tessellation.generate(10.0, 2, 1.0)


@pytest.fixture(scope="session")
def sphere_n3_shrunk():
    return tessellation.generate(10.0, 3, 0.5)
