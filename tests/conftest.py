from __future__ import annotations

from pathlib import Path

import pytest

from pagepress.log import create_logger


@pytest.fixture
def logger(capsys):
    return create_logger("DEBUG", name="pagepress-test")


@pytest.fixture
def site(tmp_path: Path, monkeypatch):
    """A project directory set as cwd, with a helper to write files into it."""
    monkeypatch.chdir(tmp_path)

    def write(rel: str, text: str) -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    write.root = tmp_path
    return write
