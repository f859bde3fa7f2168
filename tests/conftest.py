"""Shared fixtures for the sync tests."""

from datetime import date

import pytest

from csdn_sync.utils.sync_config import SyncConfig


@pytest.fixture
def sync_config(tmp_path) -> SyncConfig:
    return SyncConfig(
        username="demo",
        max_posts=10,
        output_json_path=tmp_path / "data" / "blog.json",
        markdown_dir=tmp_path / "content" / "posts",
        image_dir=tmp_path / "assets" / "images",
        author="Demo Author",
        default_cover_image="assets/default.jpg",
        content_root=tmp_path,
        request_delay=1.0,
    )


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 6, 1)
