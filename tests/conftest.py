from __future__ import annotations

from pathlib import Path

import pytest

import hash40.label_map
from hash40.label_map import LabelMap


@pytest.fixture(autouse=True)
def fresh_global_labels(monkeypatch):
    """Every test starts with an unset process-wide label map."""
    monkeypatch.setattr(hash40.label_map, "_LABELS", None)


@pytest.fixture
def labels() -> LabelMap:
    return LabelMap()


@pytest.fixture
def clean_file(tmp_path: Path) -> Path:
    return tmp_path / "labels.txt"
