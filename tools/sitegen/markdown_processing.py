from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

import markdown

from .config import (
    BLOCK_MARK,
    FENCE,
    FIRST_H1,
    FRONT_MATTER,
    HEADING_MARK,
    INLINE_CODE,
    MARKDOWN_EXTENSIONS,
    MD_IMAGE,
    MD_LINK,
    NEWLINES,
    WHITESPACE,
)
from .utils import strip_extension


@dataclass(frozen=True)
class ParsedDocument:
    meta: Dict[str, str] = field(default_factory=dict)
    body: str = ""


def parse_front_matter(text: str) -> ParsedDocument:
    """
    Split a leading `---` block of `key: value` lines from the body.

    Values are kept as trimmed strings; nothing is YAML-decoded. Without
    a block the whole text is the body.
    """
    m = FRONT_MATTER.match(text)
    if not m:
        return ParsedDocument(meta={}, body=text)

    meta: Dict[str, str] = {}
    for line in m.group(1).split("\n"):
        idx = line.find(":")
        if idx <= 0:
            continue
        key = line[:idx].strip().lower()
        if key:
            meta[key] = line[idx + 1 :].strip()
    return ParsedDocument(meta=meta, body=text[m.end() :])


def title_from_body(body: str) -> Optional[str]:
    m = FIRST_H1.search(body)
    if not m:
        return None
    return strip_extension(m.group(1).strip())


def strip_markdown(text: str) -> str:
    out = str(text or "")
    out = FENCE.sub(" ", out)
    out = INLINE_CODE.sub(r"\1", out)
    out = MD_IMAGE.sub(" ", out)
    out = MD_LINK.sub(r"\1", out)
    out = HEADING_MARK.sub("", out)
    out = BLOCK_MARK.sub("", out)
    out = NEWLINES.sub(" ", out)
    return WHITESPACE.sub(" ", out).strip()


def md_to_html(body: str) -> str:
    return markdown.markdown(
        body,
        extensions=MARKDOWN_EXTENSIONS,
        output_format="html",
    )
