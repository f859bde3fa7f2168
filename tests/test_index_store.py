"""Tests for csdn_sync.output.index_store module."""

import json

import pytest

from csdn_sync.errors import FormatError
from csdn_sync.models import Post
from csdn_sync.output.index_store import load_index, merge_posts, save_index


def _record(url: str, date: str, **fields) -> dict:
    return {"id": 1, "title": url, "date": date, "originalUrl": url, **fields}


class TestMergePosts:
    def test_existing_url_updates_in_place(self) -> None:
        existing = [_record("a", "2024-01-01", views=1, extra="kept"), _record("b", "2024-02-01")]
        result = merge_posts(existing, [_record("a", "2024-01-01", views=99)])

        assert len(result.posts) == 2
        assert result.updated == 1
        assert result.inserted == 0
        updated = next(p for p in result.posts if p["originalUrl"] == "a")
        assert updated["views"] == 99
        assert updated["extra"] == "kept"

    def test_new_url_adds_exactly_one(self) -> None:
        existing = [_record("a", "2024-01-01"), _record("b", "2024-02-01")]
        result = merge_posts(existing, [_record("c", "2024-03-01")])
        assert len(result.posts) == len(existing) + 1
        assert result.inserted == 1

    def test_urls_unique_and_sorted_descending(self) -> None:
        existing = [_record("a", "2023-05-01"), _record("b", "2024-02-01"), _record("a", "2023-06-01")]
        new = [_record("b", "2024-02-02"), _record("c", "2022-01-01"), _record("c", "2022-01-03")]
        result = merge_posts(existing, new)

        urls = [p["originalUrl"] for p in result.posts]
        assert len(urls) == len(set(urls)) == 3
        dates = [p["date"] for p in result.posts]
        assert dates == sorted(dates, reverse=True)

    def test_accepts_post_objects(self) -> None:
        post = Post(id=1, title="t", slug="t", date="2024-01-01", original_url="https://x/1")
        result = merge_posts([], [post])
        assert result.posts[0]["originalUrl"] == "https://x/1"
        assert result.posts[0]["coverImage"] == ""

    def test_records_without_url_are_kept(self) -> None:
        existing = [{"id": 9, "title": "legacy", "date": "2020-01-01"}]
        result = merge_posts(existing, [_record("a", "2024-01-01")])
        assert len(result.posts) == 2
        assert result.posts[-1]["title"] == "legacy"

    def test_empty_inputs(self) -> None:
        assert merge_posts([], []).posts == []


class TestPersistence:
    def test_missing_file_is_empty(self, tmp_path) -> None:
        assert load_index(tmp_path / "nope.json") == []

    def test_round_trip_keeps_unicode(self, tmp_path) -> None:
        path = tmp_path / "data" / "blog.json"
        save_index(path, [_record("a", "2024-01-01", title="前端")])
        raw = path.read_text(encoding="utf-8")
        assert "前端" in raw
        assert raw.startswith("[\n  {")
        assert load_index(path)[0]["title"] == "前端"
        assert not path.with_suffix(".json.tmp").exists()

    def test_invalid_json_raises(self, tmp_path) -> None:
        path = tmp_path / "blog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FormatError):
            load_index(path)

    def test_non_array_raises(self, tmp_path) -> None:
        path = tmp_path / "blog.json"
        path.write_text(json.dumps({"posts": []}), encoding="utf-8")
        with pytest.raises(FormatError):
            load_index(path)
