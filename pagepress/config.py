from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml

from .utils import parse_bool

DEFAULT_CONFIG_FILENAME = "build.json"
DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "codehilite")


@dataclass(frozen=True)
class StaticCopy:
    source: str
    dest: str


@dataclass(frozen=True)
class Options:
    destination: str = "build/"
    clean: bool = True
    default_layout: str = "basic"
    layouts_loc: str = "layouts/"
    partials_loc: str = "layouts/partials/"
    pages_loc: str = "pages/"
    static_copy: tuple[StaticCopy, ...] = ()
    build_index: bool = False
    recurse_pages: bool = False
    title_element: Optional[str] = None
    markdown_extensions: tuple[str, ...] = DEFAULT_MARKDOWN_EXTENSIONS
    extra: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    def as_dict(self) -> dict:
        return {
            "destination": self.destination,
            "clean": self.clean,
            "default_layout": self.default_layout,
            "layouts_loc": self.layouts_loc,
            "partials_loc": self.partials_loc,
            "pages_loc": self.pages_loc,
            "static_copy": [{"source": item.source, "dest": item.dest} for item in self.static_copy],
            "build_index": self.build_index,
            "recurse_pages": self.recurse_pages,
            "title_element": self.title_element,
            "markdown_extensions": list(self.markdown_extensions),
            **dict(self.extra),
        }


def read_config_file(path: Path) -> dict:
    """Parse a JSON, TOML or YAML config file by suffix.

    Raises ``OSError`` or ``ValueError`` on unreadable or malformed input.
    """
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        data = tomllib.loads(text)
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(str(exc)) from exc
        if data is None:
            data = {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("config must be a mapping")
    return data


def parse_static_copy(value: object, logger: logging.Logger) -> tuple[StaticCopy, ...]:
    if not value:
        return ()
    if not isinstance(value, list):
        logger.warning(f"Ignoring static_copy, expected a list: {value!r}")
        return ()
    items = []
    for entry in value:
        if not isinstance(entry, dict) or "source" not in entry or "dest" not in entry:
            logger.warning(f"Ignoring static_copy entry without source/dest: {entry!r}")
            continue
        items.append(StaticCopy(source=str(entry["source"]), dest=str(entry["dest"])))
    return tuple(items)


def options_from_mapping(data: Mapping[str, object], logger: logging.Logger) -> Options:
    defaults = Options()

    def cfg_str(key: str, default: str) -> str:
        value = data.get(key)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = data.get(key)
        return default if value is None else parse_bool(value)

    title_element = data.get("title_element")
    if title_element is not None:
        title_element = str(title_element).strip() or None

    extensions = data.get("markdown_extensions")
    if extensions is None:
        extensions = defaults.markdown_extensions
    elif isinstance(extensions, list):
        extensions = tuple(str(ext) for ext in extensions)
    else:
        logger.warning(f"Ignoring markdown_extensions, expected a list: {extensions!r}")
        extensions = defaults.markdown_extensions

    known = {name for name in Options.__dataclass_fields__ if name != "extra"}
    extra = {key: value for key, value in data.items() if key not in known}

    return Options(
        destination=cfg_str("destination", defaults.destination),
        clean=cfg_bool("clean", defaults.clean),
        default_layout=cfg_str("default_layout", defaults.default_layout),
        layouts_loc=cfg_str("layouts_loc", defaults.layouts_loc),
        partials_loc=cfg_str("partials_loc", defaults.partials_loc),
        pages_loc=cfg_str("pages_loc", defaults.pages_loc),
        static_copy=parse_static_copy(data.get("static_copy"), logger),
        build_index=cfg_bool("build_index", defaults.build_index),
        recurse_pages=cfg_bool("recurse_pages", defaults.recurse_pages),
        title_element=title_element,
        markdown_extensions=extensions,
        extra=MappingProxyType(extra),
    )


def load_options(path: Optional[Path], logger: logging.Logger) -> Options:
    """Load build options, falling back to the defaults on any config problem."""
    if path is None:
        path = Path(DEFAULT_CONFIG_FILENAME)
    data: dict = {}
    logger.debug(f"Reading options from file: {path}")
    try:
        data = read_config_file(path)
    except (OSError, ValueError) as exc:
        logger.warning(f"Unable to read options from file: {path} ({exc})")
    options = options_from_mapping(data, logger)
    logger.debug(f"Using options: {json.dumps(options.as_dict(), indent=2, default=str)}")
    return options
