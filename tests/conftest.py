from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def targets_file(tmp_path: Path):
    def _make(*names: str) -> Path:
        path = tmp_path / "targets.txt"
        path.write_text("\n".join(names) + "\n")
        return path

    return _make


@pytest.fixture
def tmp_path(tmp_path: Path) -> Path:
    return tmp_path.resolve()
