"""Tests for the RSS, sitemap and robots emitters."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from sitegen.config import SiteConfig
from sitegen.feeds import build_robots_txt, build_rss_xml, build_sitemap_xml, sitemap_urls
from sitegen.posts import Post
from sitegen.utils import xml_escape

NOW = datetime(2025, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
STATIC = [
    "https://example.test/",
    "https://example.test/blog/",
    "https://example.test/blog/rss.xml",
    "https://example.test/100-days-blog/",
    "https://example.test/timer-privacy-policy/",
]


def _post(slug: str, title: str = "T", date: str = "", summary: str = "S") -> Post:
    return Post(title, summary, date, slug, f"https://example.test/blog/{slug}/", file=f"{slug}.md")


def test_xml_escape_round_trips_through_parser() -> None:
    raw = "Tom & Jerry's <\"quoted\"> tale"
    doc = ET.fromstring(f'<r a="{xml_escape(raw)}">{xml_escape(raw)}</r>')
    assert doc.text == raw
    assert doc.get("a") == raw


class TestRss:
    def test_channel_and_items(self, config: SiteConfig) -> None:
        posts = [
            _post("b", "B <b>", "2024-06-01", "Fish & chips"),
            _post("a", "A", ""),
        ]
        xml = build_rss_xml(posts, config, now=NOW)
        root = ET.fromstring(xml)
        channel = root.find("channel")
        assert root.get("version") == "2.0"
        assert channel.findtext("title") == config.title
        assert channel.findtext("link") == "https://example.test/blog/"
        assert channel.findtext("language") == "en-gb"
        assert channel.findtext("lastBuildDate") == "Sat, 01 Jun 2024 00:00:00 GMT"
        atom = channel.find("{http://www.w3.org/2005/Atom}link")
        assert atom.get("href") == "https://example.test/blog/rss.xml"
        assert atom.get("rel") == "self"

        items = channel.findall("item")
        assert [i.findtext("title") for i in items] == ["B <b>", "A"]
        assert items[0].findtext("description") == "Fish & chips"
        assert items[0].findtext("guid") == items[0].findtext("link") == "https://example.test/blog/b/"
        assert items[0].findtext("pubDate") == "Sat, 01 Jun 2024 00:00:00 GMT"
        assert items[1].find("pubDate") is None

    def test_unparseable_newest_date_gives_empty_last_build(self, config: SiteConfig) -> None:
        xml = build_rss_xml([_post("x", date="someday")], config, now=NOW)
        channel = ET.fromstring(xml).find("channel")
        assert channel.findtext("lastBuildDate") == ""
        assert channel.find("item").find("pubDate") is None

    def test_empty_collection_uses_now(self, config: SiteConfig) -> None:
        xml = build_rss_xml([], config, now=NOW)
        channel = ET.fromstring(xml).find("channel")
        assert channel.findall("item") == []
        assert channel.findtext("lastBuildDate") == "Tue, 04 Mar 2025 05:06:07 GMT"

    def test_output_is_deterministic(self, config: SiteConfig) -> None:
        posts = [_post("a", date="2024-01-01")]
        assert build_rss_xml(posts, config, now=NOW) == build_rss_xml(posts, config, now=NOW)
        assert build_rss_xml(posts, config).endswith("</rss>\n")


class TestSitemap:
    def test_static_pages_then_posts_deduplicated(self, config: SiteConfig) -> None:
        posts = [_post("one"), _post("two"), _post("one")]
        assert sitemap_urls(posts, config) == STATIC + [
            "https://example.test/blog/one/",
            "https://example.test/blog/two/",
        ]

    def test_empty_collection_keeps_static_urls(self, config: SiteConfig) -> None:
        root = ET.fromstring(build_sitemap_xml([], config))
        ns = {"s": "http://www.sitemaps.org/schemas/sitemap/0.9"}
        assert [loc.text for loc in root.findall("s:url/s:loc", ns)] == STATIC

    def test_locs_are_escaped(self, tmp_path) -> None:
        config = SiteConfig(site_url="https://example.test", static_pages=("/?a=1&b=2",), root=tmp_path)
        xml = build_sitemap_xml([], config)
        assert "<loc>https://example.test/?a=1&amp;b=2</loc>" in xml


def test_robots_txt(config: SiteConfig) -> None:
    assert build_robots_txt(config) == (
        "User-agent: *\nAllow: /\nSitemap: https://example.test/sitemap.xml\n"
    )
