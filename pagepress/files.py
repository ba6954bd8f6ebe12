from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import SourceDirectoryError
from .log import LOG


@dataclass(frozen=True)
class FileEntry:
    segments: tuple[str, ...]
    filename: str
    content: str

    @property
    def rel_path(self) -> str:
        return "/".join((*self.segments, self.filename))

    @property
    def stem(self) -> str:
        if "." not in self.filename:
            return self.filename
        return self.filename.rsplit(".", 1)[0]

    @property
    def ext(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[1].lower()

    @property
    def name(self) -> str:
        """Relative path without the extension, e.g. ``blog/post1``."""
        return "/".join((*self.segments, self.stem))


def collect_files(
    root: Path,
    logger: logging.Logger,
    kind: str = "file",
    recurse: bool = False,
    required: bool = True,
) -> dict[str, FileEntry]:
    """Read every file under ``root`` into a mapping keyed by posix relative path."""
    logger.debug(f"Looking for {kind} files at: {root}")
    if not root.is_dir():
        if required:
            raise SourceDirectoryError(f"Missing {kind} directory: {root}")
        logger.warning(f"No {kind} directory at: {root}")
        return {}

    files: dict[str, FileEntry] = {}
    _walk(root, (), files, logger, kind, recurse, {root.resolve()})
    logger.log(LOG, f"Found {len(files)} {kind} entries")
    return files


def _walk(
    directory: Path,
    segments: tuple[str, ...],
    files: dict[str, FileEntry],
    logger: logging.Logger,
    kind: str,
    recurse: bool,
    visited: set[Path],
) -> None:
    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        if not segments:
            raise SourceDirectoryError(f"Unable to read {kind} directory {directory}: {exc}") from exc
        logger.warning(f"Unable to read {kind} directory: {directory} ({exc})")
        return

    for child in children:
        if child.is_dir():
            if not recurse:
                logger.debug(f"Skipping non-file {kind} entry: {child.name}")
                continue
            resolved = child.resolve()
            if resolved in visited:
                logger.warning(f"Skipping already visited {kind} directory: {child}")
                continue
            _walk(child, (*segments, child.name), files, logger, kind, recurse, visited | {resolved})
            continue
        if not child.is_file():
            logger.debug(f"Skipping non-file {kind} entry: {child.name}")
            continue
        try:
            content = child.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Unable to read {kind} file: {child} ({exc})")
            continue
        entry = FileEntry(segments=segments, filename=child.name, content=content)
        files[entry.rel_path] = entry
        logger.debug(f"Found {kind}: {entry.rel_path}")
