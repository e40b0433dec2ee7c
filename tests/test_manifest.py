"""Tests for manifest normalisation and loading."""

from __future__ import annotations

import json

import pytest

from sitegen.manifest import (
    PostDescriptor,
    load_manifest,
    normalize_manifest,
    parse_manifest,
)


class TestNormalizeManifest:
    def test_string_entries_have_no_overrides(self) -> None:
        out = normalize_manifest(["hello.md", "notes/two.markdown"])
        assert out == [
            PostDescriptor(file="hello.md"),
            PostDescriptor(file="notes/two.markdown"),
        ]
        for d in out:
            assert d.title is None and d.summary is None and d.date is None

    def test_object_entries_keep_overrides_verbatim(self) -> None:
        out = normalize_manifest([
            {"file": "a.md", "title": "  Spaced  ", "summary": "S", "date": "2024-01-01"},
        ])
        assert out == [PostDescriptor("a.md", "  Spaced  ", "S", "2024-01-01")]

    def test_invalid_entries_are_dropped_in_order(self) -> None:
        out = normalize_manifest([
            "first.md",
            42,
            None,
            {"title": "no file"},
            {"file": 7},
            ["nested.md"],
            {"file": "last.md"},
        ])
        assert [d.file for d in out] == ["first.md", "last.md"]

    @pytest.mark.parametrize("payload", [{}, {"posts": ["a.md"]}, "a.md", 3, None])
    def test_non_list_payload_is_empty(self, payload) -> None:
        assert normalize_manifest(payload) == []


def test_parse_manifest_rejects_malformed_json() -> None:
    with pytest.raises(json.JSONDecodeError):
        parse_manifest("[\"a.md\",")


def test_load_manifest_reads_file(tmp_path) -> None:
    path = tmp_path / "posts.json"
    path.write_text(json.dumps(["a.md", {"file": "b.md", "title": "B"}]), encoding="utf-8")
    assert load_manifest(path) == [
        PostDescriptor("a.md"),
        PostDescriptor("b.md", title="B"),
    ]


def test_load_manifest_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_manifest(tmp_path / "nope.json")
