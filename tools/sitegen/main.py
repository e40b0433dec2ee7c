#!/usr/bin/env python3
"""
Static asset generator for the Wayfarer Games site.

- Posts: public/blog/posts/posts.json lists markdown files in
  public/blog/posts/, each with optional `---` front matter.
- Outputs:
  public/blog/rss.xml, public/sitemap.xml, public/robots.txt,
  public/blog/<slug>/index.html per post.

Every run rebuilds everything from the manifest and overwrites the
outputs. Any read/parse failure aborts the run.

Other commands:
- `nav`: print the documentation sidebar for a page path.
- `serve`: preview public/ with directory index.html lookup.
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from datetime import datetime
from typing import List, Optional, Sequence

from .config import ROOT, SiteConfig, load_site_config
from .devserver import serve
from .docs_nav import load_nav_groups, render_default_sidebar
from .feeds import build_robots_txt, build_rss_xml, build_sitemap_xml
from .manifest import load_manifest
from .pages import build_post_pages
from .posts import ensure_unique_slugs, read_posts, sort_posts
from .utils import ensure_dir


def _write(path: pathlib.Path, text: str, config: SiteConfig) -> pathlib.Path:
    ensure_dir(path.parent)
    path.write_text(text, encoding="utf-8")
    try:
        shown = path.relative_to(config.root)
    except ValueError:
        shown = path
    print(f"✓ generated {shown.as_posix()}")
    return path


def generate(
    config: SiteConfig, now: Optional[datetime] = None
) -> List[pathlib.Path]:
    ensure_dir(config.blog_dir)

    entries = load_manifest(config.manifest_path)
    posts = sort_posts(read_posts(entries, config))
    ensure_unique_slugs(posts)

    written = [
        _write(config.rss_path, build_rss_xml(posts, config, now=now), config),
        _write(config.robots_path, build_robots_txt(config), config),
        _write(config.sitemap_path, build_sitemap_xml(posts, config), config),
    ]
    for slug, page in build_post_pages(posts, config).items():
        written.append(_write(config.post_page_path(slug), page, config))

    print(f"✓ built {len(posts)} posts")
    return written


def cmd_build(args: argparse.Namespace) -> int:
    config = load_site_config(args.root)
    if not config.manifest_path.exists():
        print(
            f"ERROR: {config.manifest_path} missing",
            file=sys.stderr,
        )
        return 1
    generate(config)
    return 0


def cmd_nav(args: argparse.Namespace) -> int:
    groups = load_nav_groups(args.nav_file) if args.nav_file else None
    print(
        render_default_sidebar(
            args.path,
            current_hash=args.hash,
            base_path=args.base,
            groups=groups,
        ),
        end="",
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    config = load_site_config(args.root)
    serve(config.public_dir, host=args.host, port=args.port)
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sitegen",
        description="Build RSS, sitemap, robots.txt and post pages for the site.",
    )
    sub = parser.add_subparsers(dest="command")

    build = sub.add_parser("build", help="Generate SEO assets and post pages.")
    build.add_argument("--root", type=pathlib.Path, default=ROOT)
    build.set_defaults(func=cmd_build)

    nav = sub.add_parser("nav", help="Print the docs sidebar for a page path.")
    nav.add_argument("path", help="Page path, e.g. /patterns/basic-patterns/")
    nav.add_argument("--hash", default="", help="Current fragment, e.g. #tuning-tips")
    nav.add_argument("--base", default=".", help="Docs base URL relative to the page.")
    nav.add_argument("--nav-file", type=pathlib.Path, help="YAML nav tree to use instead.")
    nav.set_defaults(func=cmd_nav)

    srv = sub.add_parser("serve", help="Preview public/ locally.")
    srv.add_argument("--root", type=pathlib.Path, default=ROOT)
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=5173)
    srv.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["build"])
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
