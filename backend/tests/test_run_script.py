import importlib.util
from pathlib import Path

import pytest

from app.core.config import settings

# Loaded by path: frontend/ ships a run.py of its own
_spec = importlib.util.spec_from_file_location("backend_run", Path(__file__).resolve().parents[1] / "run.py")
run = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(run)


@pytest.mark.parametrize("mode, expected", [("mongodb", True), ("local", False)])
def test_mongodb_check_follows_settings(monkeypatch, mode, expected):
    monkeypatch.setattr(settings, "STORAGE_MODE", mode)

    assert run.needs_mongodb() is expected
