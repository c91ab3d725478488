"""Shared fixtures: isolate tests from the caller's PRS_* env and
config files."""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in list(os.environ):
        if key.startswith("PRS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
