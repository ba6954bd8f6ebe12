from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import DictLoader, Environment, Template, TemplateSyntaxError

from .config import Options
from .errors import TemplateCompileError
from .files import FileEntry, collect_files
from .log import LOG


@dataclass
class TemplateSet:
    env: Environment
    layouts: dict[str, Template] = field(default_factory=dict)
    partials: dict[str, str] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.layouts

    def __len__(self) -> int:
        return len(self.layouts)

    def names(self) -> list[str]:
        return list(self.layouts)


def create_environment(partials: dict[str, str]) -> Environment:
    return Environment(
        loader=DictLoader(partials),
        autoescape=False,
        keep_trailing_newline=True,
    )


def _by_stem(files: dict[str, FileEntry], kind: str, logger: logging.Logger) -> dict[str, FileEntry]:
    named: dict[str, FileEntry] = {}
    for entry in files.values():
        if entry.stem in named:
            logger.warning(f"Duplicate {kind} name {entry.stem}, ignoring {entry.filename}")
            continue
        named[entry.stem] = entry
    return named


def _compile(env: Environment, entry: FileEntry, root: Path) -> Template:
    try:
        return env.from_string(entry.content)
    except TemplateSyntaxError as exc:
        raise TemplateCompileError(entry.stem, str(root / entry.rel_path), str(exc)) from exc


def build_templates(options: Options, logger: logging.Logger) -> TemplateSet:
    """Register partials and compile every layout into a render template."""
    partials_dir = Path(options.partials_loc)
    partial_files = _by_stem(collect_files(partials_dir, logger, "partial", required=False), "partial", logger)
    if not partial_files:
        logger.warning(f"No partials registered from: {partials_dir}")
    partials = {name: entry.content for name, entry in partial_files.items()}
    env = create_environment(partials)

    # A partial with bad syntax would only fail when first included.
    for entry in partial_files.values():
        _compile(env, entry, partials_dir)
    logger.debug(f"Registered {len(partials)} partials with the template engine")

    layouts_dir = Path(options.layouts_loc)
    layout_files = _by_stem(collect_files(layouts_dir, logger, "layout"), "layout", logger)
    if not layout_files:
        logger.warning(f"No layouts found in: {layouts_dir}")
    templates = TemplateSet(env=env, partials=partials)
    for name, entry in layout_files.items():
        templates.layouts[name] = _compile(env, entry, layouts_dir)
        logger.debug(f"Compiled {name} template from layout file")
    logger.log(LOG, f"Compiled {len(templates)} layout templates")
    return templates
