from __future__ import annotations

import re
import shutil
from pathlib import Path

from .errors import StaticCopyError

TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_static(source: Path, dest: Path) -> None:
    """Copy a file or merge a directory tree into ``dest``, overwriting files."""
    if source.is_dir():
        shutil.copytree(source, dest, dirs_exist_ok=True)
    elif source.is_file():
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, dest)
    else:
        raise StaticCopyError(f"Static source not found: {source}")
