from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import yaml

from .sync_config import SyncConfig


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing required fields."""


# Flat key -> SyncConfig attribute
_FLAT_KEYS = {
    "username": "username",
    "maxPosts": "max_posts",
    "outputJsonPath": "output_json_path",
    "markdownDir": "markdown_dir",
    "imageDir": "image_dir",
    "author": "author",
    "defaultCoverImage": "default_cover_image",
    "contentRoot": "content_root",
    "feedUrlTemplate": "feed_url_template",
    "sourceTag": "source_tag",
    "defaultTag": "default_tag",
    "requestDelay": "request_delay",
    "articleTimeout": "article_timeout",
    "userAgent": "user_agent",
}

# Nested layout of the legacy config.json: section -> {key -> flat key}
_NESTED_KEYS = {
    "csdn": {"username": "username", "maxPosts": "maxPosts"},
    "paths": {"outputJson": "outputJsonPath", "markdownDir": "markdownDir", "imageDir": "imageDir"},
    "site": {"author": "author", "defaultCover": "defaultCoverImage"},
}

_PATH_FIELDS = {"output_json_path", "markdown_dir", "image_dir", "content_root"}
_INT_FIELDS = {"max_posts"}
_FLOAT_FIELDS = {"request_delay", "article_timeout"}


def _flatten(data: Dict[str, Any]) -> Dict[str, Any]:
    """Accept both the flat layout and the nested ``csdn``/``paths``/``site`` layout."""
    flat = {k: v for k, v in data.items() if k in _FLAT_KEYS}
    for section, keys in _NESTED_KEYS.items():
        block = data.get(section)
        if block is None:
            continue
        if not isinstance(block, dict):
            raise ConfigError(f"'{section}' must be a mapping in the configuration")
        for key, flat_key in keys.items():
            if key in block:
                flat.setdefault(flat_key, block[key])
    return flat


def _coerce(attr: str, value: Any) -> Any:
    if attr in _PATH_FIELDS:
        return Path(str(value))
    if attr in _INT_FIELDS:
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'{attr}' must be an integer, got {value!r}") from exc
        if number < 1:
            raise ConfigError(f"'{attr}' must be at least 1, got {number}")
        return number
    if attr in _FLOAT_FIELDS:
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'{attr}' must be a number, got {value!r}") from exc
        if number < 0:
            raise ConfigError(f"'{attr}' must not be negative, got {number}")
        return number
    return str(value).strip()


def _validate(config: SyncConfig) -> None:
    if not config.username:
        raise ConfigError("Missing required field 'username'")
    if "{username}" not in config.feed_url_template:
        raise ConfigError("'feedUrlTemplate' must contain a '{username}' placeholder")
    parsed = urlparse(config.feed_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid feed URL '{config.feed_url}'. Must be absolute http(s) URL.")


def build_sync_config(data: Dict[str, Any]) -> SyncConfig:
    """Build a validated ``SyncConfig`` from a parsed configuration mapping.

    Unknown keys are ignored for forward compatibility.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got: {type(data)}")
    values = {_FLAT_KEYS[k]: _coerce(_FLAT_KEYS[k], v) for k, v in _flatten(data).items() if v is not None}
    config = SyncConfig(**{"username": "", **values})
    _validate(config)
    return config


def apply_overrides(
    config: SyncConfig,
    *,
    username: Optional[str] = None,
    max_posts: Optional[int] = None,
) -> SyncConfig:
    """Layer environment (``CSDN_USERNAME``, ``SYNC_MAX_POSTS``) and explicit overrides."""
    env_username = os.getenv("CSDN_USERNAME")
    env_max_posts = os.getenv("SYNC_MAX_POSTS")

    changes: Dict[str, Any] = {}
    if env_username:
        changes["username"] = env_username.strip()
    if env_max_posts:
        changes["max_posts"] = _coerce("max_posts", env_max_posts)
    if username:
        changes["username"] = username.strip()
    if max_posts is not None:
        changes["max_posts"] = _coerce("max_posts", max_posts)
    if not changes:
        return config

    updated = replace(config, **changes)
    _validate(updated)
    return updated


def load_sync_config(path: Path | str) -> SyncConfig:
    """Load the sync configuration (YAML, or the legacy JSON file) into a ``SyncConfig``.

    Recognized keys: username, maxPosts, outputJsonPath, markdownDir,
    imageDir, author, defaultCoverImage; optionally contentRoot,
    feedUrlTemplate, sourceTag, defaultTag, requestDelay, articleTimeout,
    userAgent. The nested legacy layout is accepted too::

        csdn:  {username, maxPosts}
        paths: {outputJson, markdownDir, imageDir}
        site:  {author, defaultCover}
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config file {config_path} is not valid YAML/JSON: {exc}") from exc

    return build_sync_config(data)
