from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CONFIG_FILENAME, Options, load_options
from .errors import BuildError
from .log import LOG, create_logger
from .pages import gather_pages, write_pages
from .render import copy_static
from .search import build_search_index
from .templates import build_templates
from .utils import clean_output_dir, format_elapsed, safe_join


@dataclass
class BuildResult:
    pages: list[Path] = field(default_factory=list)
    templates: list[str] = field(default_factory=list)
    static: list[Path] = field(default_factory=list)
    search_index: Optional[Path] = None
    elapsed: float = 0.0


def build_site(
    options: Options,
    logger: logging.Logger,
    project_root: Optional[Path] = None,
    start: Optional[float] = None,
) -> BuildResult:
    if start is None:
        start = time.perf_counter()
    if project_root is None:
        project_root = Path.cwd()
    destination = Path(options.destination)
    result = BuildResult()

    logger.info("Starting build...")

    if options.clean:
        logger.log(LOG, "Cleaning previous build...")
        if clean_output_dir(destination, project_root):
            logger.debug(f"Removed previous build folder: {destination}")
    else:
        logger.debug("Skipping clean step")

    templates = build_templates(options, logger)
    result.templates = templates.names()
    logger.info(f"Parsed {len(templates)} templates for use: {', '.join(result.templates)}")

    destination.mkdir(parents=True, exist_ok=True)
    logger.log(LOG, f"Created build directory at: {destination}")

    pages = gather_pages(options, logger)
    result.pages = write_pages(pages, templates, destination, logger)

    for item in options.static_copy:
        dest = safe_join(destination, item.dest)
        logger.debug(f"copying {item.source} to {dest}")
        copy_static(Path(item.source), dest)
        result.static.append(dest)
    if options.static_copy:
        logger.info(f"Copied static assets to {destination}")

    if options.build_index:
        result.search_index = build_search_index(destination, logger)

    result.elapsed = time.perf_counter() - start
    logger.info(f"Finished build in {format_elapsed(result.elapsed)}")
    return result


def main(argv: Optional[list[str]] = None) -> None:
    start = time.perf_counter()
    parser = argparse.ArgumentParser(description="Render pages into layouts and write a static site.")
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_FILENAME,
        help="Path to build config file (JSON, TOML or YAML).",
    )
    args = parser.parse_args(argv)

    logger = create_logger()
    options = load_options(Path(args.config), logger)
    try:
        build_site(options, logger, start=start)
    except BuildError as exc:
        logger.error(str(exc))
        sys.exit(1)
