from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RECORDMAP_DATA_DIR", str(tmp_path / "recordmap-data"))
    monkeypatch.delenv("RECORDMAP_NAME_FORMAT", raising=False)
