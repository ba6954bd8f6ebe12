from __future__ import annotations

import math
import shutil
from pathlib import Path, PurePosixPath

from .errors import BuildError, UnsafePathError


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def safe_join(root: Path, rel: str) -> Path:
    """Join ``rel`` under ``root``, refusing anything that lands outside it."""
    rel_path = PurePosixPath(rel.replace("\\", "/"))
    if rel_path.is_absolute() or ".." in rel_path.parts:
        raise UnsafePathError(f"Output path escapes {root}: {rel}")
    target = root.joinpath(*rel_path.parts)
    if not target.resolve().is_relative_to(root.resolve()):
        raise UnsafePathError(f"Output path escapes {root}: {rel}")
    return target


def clean_output_dir(output_dir: Path, project_root: Path) -> bool:
    if not output_dir.exists():
        return False
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if root_resolved.is_relative_to(output_resolved):
        raise BuildError(f"Refusing to clean project root or one of its parents: {output_dir}")
    shutil.rmtree(output_dir)
    return True


def format_elapsed(seconds: float) -> str:
    millis = int(seconds * 1000)
    if millis > 1000:
        tenths = math.floor(millis / 100 + 0.5)
        if tenths % 10 == 0:
            return f"{tenths // 10}s"
        return f"{tenths / 10}s"
    return f"{millis}ms"
