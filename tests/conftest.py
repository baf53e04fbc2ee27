from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _clean_bfvm_env(monkeypatch) -> None:
    # Settings read BFVM_* variables; keep tests independent of the host shell.
    from bfvm.config import _ENV_FIELDS

    for var in _ENV_FIELDS.values():
        monkeypatch.delenv(var, raising=False)
