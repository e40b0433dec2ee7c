from __future__ import annotations

import pathlib
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Dict, Optional

import yaml
from dateutil import parser as date_parser

from .config import POST_EXT_RE

# dateutil fills missing fields from this, so partial dates stay deterministic
_DATE_DEFAULT = datetime(1970, 1, 1)


def ensure_dir(p: pathlib.Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return data if isinstance(data, dict) else {}
    return {}


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def strip_extension(name: str) -> str:
    return POST_EXT_RE.sub("", name)


def slug_from_file_name(name: str) -> str:
    return strip_extension(name).strip().lower()


def xml_escape(text: Any = "") -> str:
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )



def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a post date into an aware UTC datetime.

    Accepts ISO 8601 first, then anything dateutil understands
    (e.g. "June 1, 2024", RFC 2822). Naive values are taken as UTC.
    Returns None for empty or unparseable input; never raises.
    """
    s = str(value or "").strip()
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        try:
            dt = date_parser.parse(s, default=_DATE_DEFAULT)
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        return None


def date_timestamp(value: Any) -> float:
    dt = parse_date(value)
    return dt.timestamp() if dt else 0.0


def format_http_date(dt: datetime) -> str:
    # e.g. "Mon, 01 Jan 2024 00:00:00 GMT"
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def to_pub_date(value: Any) -> str:
    dt = parse_date(value)
    return format_http_date(dt) if dt else ""


def human_date(value: Any) -> str:
    dt = parse_date(value)
    return f"{dt.day} {dt:%B %Y}" if dt else ""
