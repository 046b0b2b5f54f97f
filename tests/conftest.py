"""Root test configuration: fixed build time and environment isolation"""

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Drop BLOGCORPUS_* variables so a developer's shell cannot leak into settings."""
    for key in list(os.environ):
        if key.startswith("BLOGCORPUS_"):
            monkeypatch.delenv(key)


@pytest.fixture(name="now")
def now_fixture():
    return NOW


@pytest.fixture(name="write_files")
def write_files_fixture(tmp_path):
    """Return a helper that writes {filename: text} into a content directory."""
    def _write(files: dict[str, str], dirname: str = "content") -> Path:
        root = tmp_path / dirname
        root.mkdir(exist_ok=True)
        for name, text in files.items():
            (root / name).write_text(text, encoding="utf-8")
        return root
    return _write
