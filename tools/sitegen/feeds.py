from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .config import FEED_LANGUAGE, SiteConfig
from .posts import Post
from .utils import format_http_date, to_pub_date, xml_escape


def _rss_item(post: Post) -> str:
    pub_date = to_pub_date(post.date)
    lines = [
        "    <item>",
        f"      <title>{xml_escape(post.title)}</title>",
        f"      <link>{xml_escape(post.url)}</link>",
        f"      <guid>{xml_escape(post.url)}</guid>",
        f"      <description>{xml_escape(post.summary)}</description>",
    ]
    if pub_date:
        lines.append(f"      <pubDate>{xml_escape(pub_date)}</pubDate>")
    lines.append("    </item>")
    return "\n".join(lines)


def build_rss_xml(
    posts: Sequence[Post],
    config: SiteConfig,
    now: Optional[datetime] = None,
) -> str:
    """
    RSS 2.0 feed for an already sorted collection.

    lastBuildDate follows the newest post; with no posts it is `now`
    (current UTC time unless given).
    """
    if posts:
        last_build = to_pub_date(posts[0].date)
    else:
        last_build = format_http_date(now or datetime.now(timezone.utc))

    lines: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">',
        "  <channel>",
        f"    <title>{xml_escape(config.title)}</title>",
        f"    <description>{xml_escape(config.description)}</description>",
        f"    <link>{xml_escape(config.blog_url)}</link>",
        f'    <atom:link href="{xml_escape(config.rss_url)}" '
        'rel="self" type="application/rss+xml" />',
        f"    <language>{FEED_LANGUAGE}</language>",
        f"    <lastBuildDate>{xml_escape(last_build)}</lastBuildDate>",
    ]
    lines.extend(_rss_item(p) for p in posts)
    lines += ["  </channel>", "</rss>", ""]
    return "\n".join(lines)


def sitemap_urls(posts: Sequence[Post], config: SiteConfig) -> List[str]:
    urls = [config.page_url(p) for p in config.static_pages]
    urls += [p.url for p in posts]
    return list(dict.fromkeys(urls))


def build_sitemap_xml(posts: Sequence[Post], config: SiteConfig) -> str:
    lines: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for url in sitemap_urls(posts, config):
        lines += ["  <url>", f"    <loc>{xml_escape(url)}</loc>", "  </url>"]
    lines += ["</urlset>", ""]
    return "\n".join(lines)


def build_robots_txt(config: SiteConfig) -> str:
    return "\n".join(
        ["User-agent: *", "Allow: /", f"Sitemap: {config.sitemap_url}", ""]
    )
