#!/usr/bin/env python3
from __future__ import annotations

import os
import pathlib
import re
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple
from urllib.parse import quote

# ---------- Paths

# This assumes the package sits in tools/ at the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
TEMPLATE_DIR = pathlib.Path(__file__).resolve().parent / "templates"
SITE_CONFIG_NAME = "site.yml"

# ---------- Config

DEFAULT_SITE_URL = "https://wayfarer-games.com"
DEFAULT_TITLE = "Wayfarer Games Blog"
DEFAULT_DESCRIPTION = "Devlogs and technical breakdowns from Wayfarer Games."
DEFAULT_STATIC_PAGES = (
    "/",
    "/blog/",
    "/blog/rss.xml",
    "/100-days-blog/",
    "/timer-privacy-policy/",
)
FEED_LANGUAGE = "en-gb"
SUMMARY_LIMIT = 280
POST_EXTENSIONS = ("md", "markdown", "txt")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists", "toc"]

# Some shared regexes

POST_EXT_RE = re.compile(
    r"\.(?:" + "|".join(POST_EXTENSIONS) + r")$", re.IGNORECASE
)
FRONT_MATTER = re.compile(r"\A---\n(.*?)\n---\n?", re.DOTALL)
FIRST_H1 = re.compile(r"^#\s+(.+)$", re.MULTILINE)
FENCE = re.compile(r"```.*?```", re.DOTALL)
INLINE_CODE = re.compile(r"`([^`]+)`")
MD_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]+\)")
MD_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
HEADING_MARK = re.compile(r"^#{1,6}\s+", re.MULTILINE)
BLOCK_MARK = re.compile(r"^[>\-*+]\s+", re.MULTILINE)
NEWLINES = re.compile(r"\r?\n+")
WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SiteConfig:
    site_url: str = DEFAULT_SITE_URL
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    static_pages: Tuple[str, ...] = DEFAULT_STATIC_PAGES
    root: pathlib.Path = field(default=ROOT)

    # ---------- Paths

    @property
    def public_dir(self) -> pathlib.Path:
        return self.root / "public"

    @property
    def blog_dir(self) -> pathlib.Path:
        return self.public_dir / "blog"

    @property
    def posts_dir(self) -> pathlib.Path:
        return self.blog_dir / "posts"

    @property
    def manifest_path(self) -> pathlib.Path:
        return self.posts_dir / "posts.json"

    @property
    def rss_path(self) -> pathlib.Path:
        return self.blog_dir / "rss.xml"

    @property
    def robots_path(self) -> pathlib.Path:
        return self.public_dir / "robots.txt"

    @property
    def sitemap_path(self) -> pathlib.Path:
        return self.public_dir / "sitemap.xml"

    def post_page_path(self, slug: str) -> pathlib.Path:
        return self.blog_dir / slug / "index.html"

    # ---------- URLs

    @property
    def blog_url(self) -> str:
        return f"{self.site_url}/blog/"

    @property
    def rss_url(self) -> str:
        return f"{self.site_url}/blog/rss.xml"

    @property
    def sitemap_url(self) -> str:
        return f"{self.site_url}/sitemap.xml"

    def page_url(self, path: str) -> str:
        return f"{self.site_url}/{path.lstrip('/')}"

    def post_url(self, slug: str) -> str:
        return f"{self.site_url}/blog/{quote(slug)}/"


def normalize_site_url(url: str) -> str:
    return url.strip().rstrip("/")


def load_site_config(
    root: Optional[pathlib.Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SiteConfig:
    """
    Build the site configuration for a project root.

    Precedence for the base URL: SITE_URL env var, then `site_url` in
    site.yml, then DEFAULT_SITE_URL. Title, description and static pages
    come from site.yml when present.
    """
    from .utils import read_yaml

    root = pathlib.Path(root) if root is not None else ROOT
    environ = os.environ if environ is None else environ
    data = read_yaml(root / SITE_CONFIG_NAME)

    site_url = (
        environ.get("SITE_URL")
        or data.get("site_url")
        or DEFAULT_SITE_URL
    )
    static_pages = data.get("static_pages") or DEFAULT_STATIC_PAGES

    return SiteConfig(
        site_url=normalize_site_url(str(site_url)),
        title=str(data.get("title") or DEFAULT_TITLE),
        description=str(data.get("description") or DEFAULT_DESCRIPTION),
        static_pages=tuple(str(p) for p in static_pages),
        root=root,
    )
