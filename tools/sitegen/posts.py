from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import FIRST_H1, SUMMARY_LIMIT, SiteConfig
from .manifest import PostDescriptor
from .markdown_processing import (
    ParsedDocument,
    md_to_html,
    parse_front_matter,
    strip_markdown,
    title_from_body,
)
from .utils import _norm_text, date_timestamp, slug_from_file_name, strip_extension


class SlugCollisionError(ValueError):
    pass


@dataclass(frozen=True)
class Post:
    title: str
    summary: str
    date: str
    slug: str
    url: str
    html: str = ""
    file: str = ""


Resolver = Callable[[PostDescriptor, ParsedDocument], Any]


# ---------- Field resolvers, tried in order until one is non-empty

def _title_override(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return entry.title


def _title_meta(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return doc.meta.get("title")


def _title_heading(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return title_from_body(doc.body)


def _title_file_name(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return strip_extension(entry.file) or entry.file


def _summary_override(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return entry.summary


def _summary_meta(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return doc.meta.get("summary")


def _summary_body(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    # the first h1 is the post title, not part of its summary
    return strip_markdown(FIRST_H1.sub("", doc.body, count=1))[:SUMMARY_LIMIT]


def _date_override(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return entry.date


def _date_meta(entry: PostDescriptor, doc: ParsedDocument) -> Any:
    return doc.meta.get("date")


TITLE_RESOLVERS: Tuple[Resolver, ...] = (
    _title_override,
    _title_meta,
    _title_heading,
    _title_file_name,
)
SUMMARY_RESOLVERS: Tuple[Resolver, ...] = (
    _summary_override,
    _summary_meta,
    _summary_body,
)
DATE_RESOLVERS: Tuple[Resolver, ...] = (
    _date_override,
    _date_meta,
)


def resolve_field(
    resolvers: Iterable[Resolver],
    entry: PostDescriptor,
    doc: ParsedDocument,
) -> str:
    for resolver in resolvers:
        value = resolver(entry, doc)
        if value:
            return str(value)
    return ""


def resolve_post(
    entry: PostDescriptor, raw: str, config: SiteConfig
) -> Post:
    doc = parse_front_matter(raw)
    slug = slug_from_file_name(entry.file)
    if not slug:
        raise ValueError(f"post file {entry.file!r} yields an empty slug")

    return Post(
        title=resolve_field(TITLE_RESOLVERS, entry, doc),
        summary=resolve_field(SUMMARY_RESOLVERS, entry, doc),
        date=resolve_field(DATE_RESOLVERS, entry, doc),
        slug=slug,
        url=config.post_url(slug),
        html=md_to_html(doc.body),
        file=entry.file,
    )


def read_post(entry: PostDescriptor, config: SiteConfig) -> Post:
    path: pathlib.Path = config.posts_dir / entry.file
    raw = _norm_text(path.read_text(encoding="utf-8"))
    return resolve_post(entry, raw, config)


def read_posts(
    entries: Sequence[PostDescriptor], config: SiteConfig
) -> List[Post]:
    return [read_post(entry, config) for entry in entries]


def sort_key(post: Post) -> Tuple[float, str]:
    return (-date_timestamp(post.date), post.title)


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Newest first; undated posts last; equal dates by title."""
    return sorted(posts, key=sort_key)


def ensure_unique_slugs(posts: Iterable[Post]) -> None:
    seen: Dict[str, List[str]] = {}
    for p in posts:
        seen.setdefault(p.slug, []).append(p.file)
    clashes = {slug: files for slug, files in seen.items() if len(files) > 1}
    if clashes:
        detail = "; ".join(
            f"{slug}: {', '.join(files)}" for slug, files in sorted(clashes.items())
        )
        raise SlugCollisionError(f"duplicate post slugs: {detail}")


def neighbours(
    posts_sorted: Sequence[Post],
) -> Iterator[Tuple[Post, Optional[Post], Optional[Post]]]:
    """Yield (post, newer, older) for each post of a sorted collection."""
    for i, p in enumerate(posts_sorted):
        newer = posts_sorted[i - 1] if i > 0 else None
        older = posts_sorted[i + 1] if i < len(posts_sorted) - 1 else None
        yield p, newer, older
