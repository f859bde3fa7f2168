"""Tests for csdn_sync.processors.normalize module."""

from datetime import date, datetime, timezone
from unittest.mock import patch

from csdn_sync.models import ArticleDetail, FeedItem
from csdn_sync.processors.normalize import (
    build_post,
    determine_category,
    estimate_read_minutes,
    extract_cover_image,
    extract_post_id,
    extract_tags,
    fallback_detail,
    format_post_date,
    post_slug,
    slugify,
    truncate_description,
)


class TestSlugify:
    def test_lowercases_and_hyphenates(self) -> None:
        assert slugify("Hello World  Again") == "hello-world-again"

    def test_strips_punctuation(self) -> None:
        assert slugify("Vue3: ref() vs reactive()!") == "vue3-ref-vs-reactive"

    def test_keeps_cjk(self) -> None:
        assert slugify("前端 开发 技巧") == "前端-开发-技巧"

    def test_collapses_repeated_hyphens(self) -> None:
        assert slugify("a -- b") == "a-b"

    def test_truncates_to_50(self) -> None:
        assert len(slugify("word " * 30)) == 50

    def test_is_idempotent(self) -> None:
        for title in ["Hello, World!", "前端开发技巧 Part 2", "a  -  b", "C++ & Rust"]:
            once = slugify(title)
            assert slugify(once) == once

    def test_post_slug_falls_back_to_article_id(self) -> None:
        item = FeedItem(title="!!!", link="https://blog.csdn.net/demo/article/details/42")
        assert post_slug(item) == "post-42"


class TestDates:
    def test_formats_published(self) -> None:
        published = datetime(2024, 3, 5, 0, 30, tzinfo=timezone.utc)
        assert format_post_date(published) == "2024-03-05"

    def test_uses_today_when_missing(self) -> None:
        assert format_post_date(None, date(2024, 6, 1)) == "2024-06-01"

    @patch("csdn_sync.processors.normalize.datetime", wraps=datetime)
    def test_default_today_is_utc_date(self, mock_datetime) -> None:
        mock_datetime.now.return_value = datetime(2024, 12, 31, 23, 30, tzinfo=timezone.utc)
        assert format_post_date(None) == "2024-12-31"
        mock_datetime.now.assert_called_once_with(timezone.utc)


class TestExtraction:
    def test_cover_image_from_description(self) -> None:
        html = '<p><img alt="x" src="https://img.example.com/a.png"></p>'
        assert extract_cover_image(html) == "https://img.example.com/a.png"

    def test_cover_image_missing(self) -> None:
        assert extract_cover_image("<p>no image</p>") is None
        assert extract_cover_image("") is None

    def test_tags_capped_at_five(self) -> None:
        assert extract_tags(["a", "b", "c", "d", "e", "f"], "技术") == ["a", "b", "c", "d", "e"]

    def test_tags_default_when_empty(self) -> None:
        assert extract_tags([], "技术") == ["技术"]

    def test_post_id(self) -> None:
        assert extract_post_id("https://blog.csdn.net/x/article/details/13579") == "13579"
        assert extract_post_id("https://example.com/post") is None


class TestDetermineCategory:
    def test_frontend_title(self) -> None:
        assert determine_category("前端开发技巧", []) == "前端"

    def test_no_match_is_generic(self) -> None:
        assert determine_category("Weekly Notes", []) == "技术文章"

    def test_backend_tag(self) -> None:
        assert determine_category("Notes", ["Python"]) == "后端"

    def test_algorithm_title(self) -> None:
        assert determine_category("动态规划算法入门", []) == "算法"

    def test_essay_tag(self) -> None:
        assert determine_category("周末", ["生活"]) == "随笔"

    def test_frontend_wins_over_backend(self) -> None:
        assert determine_category("前端与后端", ["java"]) == "前端"
        assert determine_category("Full stack", ["python", "css"]) == "前端"


class TestTruncateDescription:
    def test_truncates_long_text(self) -> None:
        text = "x" * 200
        assert truncate_description(text, 150) == "x" * 150 + "..."

    def test_short_text_unchanged(self) -> None:
        text = "y" * 100
        assert truncate_description(text, 150) == text

    def test_multiline_text_unchanged(self) -> None:
        text = ("line one\n  line two  " * 5)[:100]
        assert len(text) == 100
        assert truncate_description(text, 150) == text

    def test_keeps_line_breaks_when_stripping_tags(self) -> None:
        assert truncate_description("<p>first</p>\n<p>second</p>", 150) == "first\nsecond"

    def test_strips_html(self) -> None:
        assert truncate_description("<p>Hello <b>there</b></p>", 150) == "Hello there"

    def test_empty(self) -> None:
        assert truncate_description(None, 150) == ""


class TestReadTime:
    def test_empty_body_is_one_minute(self) -> None:
        assert estimate_read_minutes("") == 1

    def test_rounds_up(self) -> None:
        assert estimate_read_minutes("a" * 301) == 2

    def test_ignores_whitespace(self) -> None:
        assert estimate_read_minutes("a b\n" * 150) == 1

    def test_detail_read_time_string(self) -> None:
        assert ArticleDetail(markdown_body="", estimated_read_minutes=3).read_time == "3分钟"


class TestBuildPost:
    def test_fallback_detail(self) -> None:
        detail = fallback_detail("<p>" + "z" * 300 + "</p>")
        assert detail.markdown_body == "z" * 200 + "..."
        assert detail.read_time == "5分钟"
        assert (detail.views, detail.likes, detail.comments) == (0, 0, 0)

    def test_assembles_fields(self, sync_config, fixed_today) -> None:
        item = FeedItem(
            title="前端开发技巧",
            link="https://blog.csdn.net/demo/article/details/1",
            published=None,
            description='<img src="https://img.example.com/c.png"><p>Short</p>',
            categories=[],
        )
        detail = ArticleDetail(markdown_body="b" * 600, estimated_read_minutes=2, views=9)
        post = build_post(item, detail, post_id=3, config=sync_config, today=fixed_today)

        assert post.id == 3
        assert post.slug == "前端开发技巧"
        assert post.date == "2024-06-01"
        assert post.tags == ["技术"]
        assert post.category == "前端"
        assert post.author == "Demo Author"
        assert post.excerpt == "Short"
        assert post.cover_image == "https://img.example.com/c.png"
        assert post.read_time == "2分钟"
        assert post.views == 9
        assert post.content == "b" * 500 + "..."

    def test_content_preview_always_ends_with_ellipsis(self, sync_config, fixed_today) -> None:
        item = FeedItem(title="t", link="https://example.com/a")
        detail = ArticleDetail(markdown_body="short body")
        post = build_post(item, detail, post_id=1, config=sync_config, today=fixed_today)
        assert post.content == "short body..."
        assert post.source == "csdn"
        assert post.original_url == item.link

    def test_default_cover(self, sync_config, fixed_today) -> None:
        item = FeedItem(title="t", link="https://example.com/a")
        post = build_post(item, fallback_detail(""), post_id=1, config=sync_config, today=fixed_today)
        assert post.cover_image == "assets/default.jpg"
