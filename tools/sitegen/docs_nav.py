"""
Sidebar navigation for the Bulletfury documentation site.

The tree is hand-authored; only the active state depends on the page
being rendered. Output replaces the per-page table of contents.
"""

from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple
from urllib.parse import urljoin, urlparse

import yaml

from .pages import template_env


@dataclass(frozen=True)
class NavLink:
    label: str
    href: str


@dataclass(frozen=True)
class NavGroup:
    title: str
    href: Optional[str] = None
    children: Tuple[NavLink, ...] = ()


_SETUP = "/getting-started/setup-and-first-spawn/"
_MODULES = "/modules/free-modules/"
_PATTERNS = "/patterns/basic-patterns/"
_EXTENDING = "/extending/write-your-own-modules/"
_PAID = "/paid-version/"

DEFAULT_NAV_GROUPS: Tuple[NavGroup, ...] = (
    NavGroup("Intro", href="/"),
    NavGroup("Setup", children=(
        NavLink("Install the package", f"{_SETUP}#1-install-the-package"),
        NavLink("Create a spawner object", f"{_SETUP}#2-create-a-spawner-object"),
        NavLink("Make it visible", f"{_SETUP}#3-make-it-visible"),
        NavLink("Configure the basics", f"{_SETUP}#4-configure-the-basics"),
        NavLink("Fire", f"{_SETUP}#5-fire"),
        NavLink("Manual spawning", f"{_SETUP}#manual-spawning"),
        NavLink("Troubleshooting", f"{_SETUP}#troubleshooting"),
    )),
    NavGroup("Free Modules", children=(
        NavLink("How modules work", f"{_MODULES}#how-modules-work"),
        NavLink("The modules", f"{_MODULES}#the-modules"),
        NavLink("Performance tips", f"{_MODULES}#performance-tips"),
    )),
    NavGroup("Patterns", children=(
        NavLink("Straight stream", f"{_PATTERNS}#1-straight-stream"),
        NavLink("Radial burst", f"{_PATTERNS}#2-radial-burst"),
        NavLink("Rotating spiral", f"{_PATTERNS}#3-rotating-spiral"),
        NavLink("Wave stream", f"{_PATTERNS}#4-wave-stream"),
        NavLink("Hold and release", f"{_PATTERNS}#5-hold-release"),
        NavLink("Shotgun blast", f"{_PATTERNS}#6-shotgun-blast"),
        NavLink("Tuning tips", f"{_PATTERNS}#tuning-tips"),
    )),
    NavGroup("Write Your Own Modules", children=(
        NavLink("How it works", f"{_EXTENDING}#how-it-works"),
        NavLink("Choose your interface", f"{_EXTENDING}#choose-your-weapon-interface"),
        NavLink("Examples", f"{_EXTENDING}#example-1-making-bullets-drift-sideways"),
        NavLink(
            "Performance note",
            f"{_EXTENDING}#a-note-on-performance-parallel-vs-main-thread",
        ),
    )),
    NavGroup("Paid Version", children=(
        NavLink("Why upgrade", f"{_PAID}#why-upgrade"),
        NavLink("Free vs Pro", f"{_PAID}#free-vs-pro-whats-the-difference"),
    )),
)


def load_nav_groups(path: pathlib.Path) -> Tuple[NavGroup, ...]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    groups = []
    for g in raw:
        children = tuple(
            NavLink(str(c["label"]), str(c["href"]))
            for c in (g.get("children") or [])
        )
        groups.append(NavGroup(str(g["title"]), href=g.get("href"), children=children))
    return tuple(groups)


def normalize_path(value: Optional[str]) -> str:
    if not value:
        return "/"
    path = value
    if re.match(r"^https?://", path):
        path = urlparse(path).path
    path = path.split("#")[0]
    if not path.endswith("/"):
        path += "/"
    return path


def docs_root_from_base(base_path: str, page_url: str) -> str:
    root = urlparse(urljoin(page_url, f"{base_path}/")).path
    return root if root.endswith("/") else f"{root}/"


def build_href(docs_root: str, target: str) -> str:
    path_part, _, hash_part = target.partition("#")
    relative = path_part.lstrip("/")
    path = re.sub(r"/{2,}", "/", f"{docs_root}{relative}")
    return f"{path}#{hash_part}" if hash_part else path


def is_current_path(link_path: str, current_path: str) -> bool:
    return normalize_path(link_path) == normalize_path(current_path)


def is_current_group(group: NavGroup, docs_root: str, current_path: str) -> bool:
    if group.href and is_current_path(build_href(docs_root, group.href), current_path):
        return True
    return any(
        is_current_path(build_href(docs_root, c.href), current_path)
        for c in group.children
    )


def is_current_link(full_href: str, current_path: str, current_hash: str) -> bool:
    link_path, _, link_hash = full_href.partition("#")
    if not is_current_path(link_path, current_path):
        return False
    if not link_hash:
        return True
    return f"#{link_hash}" == current_hash


def _link(link: NavLink, docs_root: str, current_path: str, current_hash: str) -> dict:
    href = build_href(docs_root, link.href)
    return {
        "label": link.label,
        "href": href,
        "active": is_current_link(href, current_path, current_hash),
    }


def render_sidebar(
    groups: Iterable[NavGroup],
    docs_root: str,
    current_path: str,
    current_hash: str = "",
) -> str:
    items = []
    for g in groups:
        if g.href:
            items.append({
                "link": _link(NavLink(g.title, g.href), docs_root, current_path, current_hash),
            })
            continue
        items.append({
            "title": g.title,
            "open": is_current_group(g, docs_root, current_path),
            "children": [
                _link(c, docs_root, current_path, current_hash) for c in g.children
            ],
        })
    return template_env().get_template("docs_nav.html.j2").render(items=items)


def render_default_sidebar(
    current_path: str,
    current_hash: str = "",
    base_path: str = ".",
    groups: Optional[Sequence[NavGroup]] = None,
) -> str:
    """Render the sidebar for a page path, resolving the docs root like the site does."""
    page_url = f"http://docs.local{current_path}"
    docs_root = docs_root_from_base(base_path, page_url)
    return render_sidebar(
        groups if groups is not None else DEFAULT_NAV_GROUPS,
        docs_root,
        current_path,
        current_hash,
    )
