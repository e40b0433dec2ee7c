from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class PostDescriptor:
    """One manifest entry. Overrides are kept exactly as the manifest had them."""

    file: str
    title: Optional[Any] = None
    summary: Optional[Any] = None
    date: Optional[Any] = None


def _descriptor(entry: Any) -> Optional[PostDescriptor]:
    if isinstance(entry, str):
        return PostDescriptor(file=entry)
    if isinstance(entry, dict) and isinstance(entry.get("file"), str):
        return PostDescriptor(
            file=entry["file"],
            title=entry.get("title"),
            summary=entry.get("summary"),
            date=entry.get("date"),
        )
    return None


def normalize_manifest(payload: Any) -> List[PostDescriptor]:
    """
    Turn a decoded manifest into descriptors.

    - A payload that is not a list yields no posts.
    - "hello.md" and {"file": "hello.md", ...} are both accepted.
    - Any other entry shape is dropped.
    """
    if not isinstance(payload, list):
        return []
    out: List[PostDescriptor] = []
    for entry in payload:
        d = _descriptor(entry)
        if d is not None:
            out.append(d)
    return out


def parse_manifest(text: str) -> List[PostDescriptor]:
    return normalize_manifest(json.loads(text))


def load_manifest(path: pathlib.Path) -> List[PostDescriptor]:
    return parse_manifest(path.read_text(encoding="utf-8"))
