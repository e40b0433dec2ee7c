from __future__ import annotations

import json
import pathlib
from typing import Dict

import pytest

from sitegen.config import SiteConfig


@pytest.fixture
def config(tmp_path: pathlib.Path) -> SiteConfig:
    return SiteConfig(site_url="https://example.test", root=tmp_path)


@pytest.fixture
def make_site(config: SiteConfig):
    """Write a manifest plus post files under the temp project root."""

    def _make(manifest, files: Dict[str, str]) -> SiteConfig:
        config.posts_dir.mkdir(parents=True, exist_ok=True)
        text = manifest if isinstance(manifest, str) else json.dumps(manifest)
        config.manifest_path.write_text(text, encoding="utf-8")
        for name, content in files.items():
            path = config.posts_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return config

    return _make
