from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pagefind.index import IndexConfig, PagefindIndex

from .errors import SearchIndexError

INDEX_DIRNAME = "__pagefind"


async def _index_site(site_dir: Path, output_path: Path) -> object:
    # Pagefind writes the bundle to output_path when the block exits cleanly.
    config = IndexConfig(output_path=str(output_path.resolve()))
    async with PagefindIndex(config=config) as index:
        added = await index.add_directory(str(site_dir.resolve()))
    return added


def build_search_index(destination: Path, logger: logging.Logger) -> Path:
    """Index the generated HTML and write pagefind's bundle under ``destination``.

    Blocks until the indexer has finished and shut down.
    """
    output_path = destination / INDEX_DIRNAME
    logger.info(f"Building search index for {destination}")
    try:
        added = asyncio.run(_index_site(destination, output_path))
    except Exception as exc:
        raise SearchIndexError(f"Search index build failed: {exc}") from exc
    logger.debug(f"Indexed pages: {added}")
    logger.info(f"Wrote search index to: {output_path}")
    return output_path
