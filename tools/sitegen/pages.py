from __future__ import annotations

import functools
from typing import Any, Dict, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .config import TEMPLATE_DIR, SiteConfig
from .posts import Post, neighbours
from .utils import human_date, parse_date


@functools.lru_cache(maxsize=1)
def template_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def structured_data(post: Post, config: SiteConfig) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": post.title,
        "description": post.summary,
        "url": post.url,
        "mainEntityOfPage": {"@type": "WebPage", "@id": post.url},
        "publisher": {"@type": "Organization", "name": config.title},
    }
    dt = parse_date(post.date)
    if dt:
        data["datePublished"] = dt.date().isoformat()
    return data


def render_post_page(
    post: Post,
    config: SiteConfig,
    newer: Optional[Post] = None,
    older: Optional[Post] = None,
) -> str:
    template = template_env().get_template("post.html.j2")
    json_ld = structured_data(post, config)
    return template.render(
        post=post,
        body=Markup(post.html),
        site=config,
        display_date=human_date(post.date),
        iso_date=json_ld.get("datePublished", ""),
        json_ld=json_ld,
        newer=newer,
        older=older,
    )


def build_post_pages(
    posts_sorted: Sequence[Post], config: SiteConfig
) -> Dict[str, str]:
    return {
        p.slug: render_post_page(p, config, newer=newer, older=older)
        for p, newer, older in neighbours(posts_sorted)
    }
