from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Optional, Sequence

import markdown

from .render import strip_tags

FRONT_MATTER_MARKER = "---"
HTML_EXTENSIONS = {"html", "htm"}
MARKDOWN_EXTENSIONS = {"md", "markdown"}

LIST_MARKER_RE = re.compile(r"^(?P<indent>[ \t]*)(?:[-+*]|\d+[.)])\s+")
FENCE_RE = re.compile(r"^(?P<indent>[ \t]*)(`{3,}|~{3,})")


def parse_front_matter(text: str) -> tuple[dict[str, str], str]:
    """Split ``text`` into its ``---`` delimited metadata block and body.

    Text without an opening ``---`` line and a later closing one is returned
    whole as the body, with empty metadata.
    """
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONT_MATTER_MARKER:
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == FRONT_MATTER_MARKER:
            end = i
            break
    if end is None:
        return {}, clean_text

    meta: dict[str, str] = {}
    for line in lines[1:end]:
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if not key:
            continue
        meta[key] = value.strip()
    body = "".join(lines[end + 1 :])
    return meta, body


def normalize_list_spacing(text: str) -> str:
    """Insert the blank line Markdown needs before a list that follows a paragraph."""
    lines = text.splitlines()
    out: list[str] = []
    in_fence = False
    fence_marker = ""
    for line in lines:
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(2)
            if not in_fence:
                in_fence = True
                fence_marker = marker
            elif marker == fence_marker:
                in_fence = False
                fence_marker = ""
            out.append(line)
            continue
        if in_fence:
            out.append(line)
            continue
        list_match = LIST_MARKER_RE.match(line)
        if list_match and not list_match.group("indent"):
            if out and out[-1].strip() and not LIST_MARKER_RE.match(out[-1]):
                out.append("")
        out.append(line)
    return "\n".join(out)


def transform_content(
    ext: str,
    body: str,
    logger: logging.Logger,
    extensions: Sequence[str] = ("fenced_code", "tables", "codehilite"),
    source: str = "",
) -> Optional[str]:
    """Return the HTML for a page body, or ``None`` for unsupported extensions."""
    ext = ext.lower()
    if ext in HTML_EXTENSIONS:
        return body
    if ext not in MARKDOWN_EXTENSIONS:
        return None
    try:
        md = markdown.Markdown(extensions=list(extensions))
        return md.convert(normalize_list_spacing(body))
    except Exception as exc:
        logger.error(f"Markdown conversion failed for {source or 'page'}, using raw content: {exc}")
        return body


def extract_title_element(html_text: str, tag: str) -> Optional[str]:
    """Inner text of the first ``<tag>`` element, or ``None`` when absent."""
    pattern = re.compile(
        rf"<{re.escape(tag)}(?:\s[^>]*)?>(?P<inner>.*?)</{re.escape(tag)}\s*>",
        re.IGNORECASE | re.DOTALL,
    )
    match = pattern.search(html_text)
    if match is None:
        return None
    title = html_lib.unescape(strip_tags(match.group("inner"))).strip()
    return title or None
