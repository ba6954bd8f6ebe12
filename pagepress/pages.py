from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from jinja2 import TemplateNotFound

from .config import Options
from .content import extract_title_element, parse_front_matter, transform_content
from .errors import LayoutNotFoundError, TemplateRenderError
from .files import collect_files
from .render import write_text
from .templates import TemplateSet
from .utils import safe_join


@dataclass(frozen=True)
class Page:
    name: str
    contents: str
    metadata: Mapping[str, str]
    layout: str
    source_loc: str
    dest_loc: str

    def context(self) -> dict[str, str]:
        return {**self.metadata, "contents": self.contents}


def gather_pages(options: Options, logger: logging.Logger) -> dict[str, Page]:
    """Parse, transform and resolve a layout for every page source."""
    pages_dir = Path(options.pages_loc)
    page_files = collect_files(pages_dir, logger, "page", recurse=options.recurse_pages)
    pages: dict[str, Page] = {}
    for rel_path, entry in page_files.items():
        metadata, body = parse_front_matter(entry.content)
        if not metadata:
            logger.debug(f"No front matter in page file: {rel_path}")
        contents = transform_content(
            entry.ext,
            body,
            logger,
            extensions=options.markdown_extensions,
            source=rel_path,
        )
        if contents is None:
            logger.warning(f"Skipping page file with unsupported extension: {rel_path}")
            continue

        if options.title_element and not metadata.get("title"):
            title = extract_title_element(contents, options.title_element)
            if title is None:
                logger.debug(f"No <{options.title_element}> element to use as title in: {rel_path}")
            else:
                metadata["title"] = title

        name = entry.name
        if name in pages:
            logger.warning(f"Skipping {rel_path}, page {name} already comes from {pages[name].source_loc}")
            continue
        logger.debug(f"Parsed metadata for: {name}: {json.dumps(metadata)}")
        pages[name] = Page(
            name=name,
            contents=contents,
            metadata=MappingProxyType(metadata),
            layout=metadata.get("layout") or options.default_layout,
            source_loc=(pages_dir / rel_path).as_posix(),
            dest_loc=f"{name}.html",
        )
    logger.info(f"Parsed {len(pages)} pages for processing")
    return pages


def render_page(page: Page, templates: TemplateSet) -> str:
    template = templates.layouts.get(page.layout)
    if template is None:
        raise LayoutNotFoundError(page.name, page.layout)
    try:
        return template.render(page.context())
    except TemplateNotFound as exc:
        raise TemplateRenderError(page.name, page.layout, f"missing partial {exc.name}") from exc


def write_pages(
    pages: Mapping[str, Page], templates: TemplateSet, destination: Path, logger: logging.Logger
) -> list[Path]:
    written = []
    for name, page in pages.items():
        result = render_page(page, templates)
        logger.debug(f"Generated page ({name}) from template ({page.layout})")
        out_path = safe_join(destination, page.dest_loc)
        write_text(out_path, result)
        logger.debug(f"Wrote page contents to: {out_path}")
        written.append(out_path)
    return written
