"""Tests for FeedConfig loading and merging."""

import pytest

from feedtui.config import FeedConfig, load_config, merge_config_with_cli_args
from feedtui.models import SortMode


def test_defaults():
    config = FeedConfig()

    assert config.feed_id == "reactjs"
    assert config.sort is SortMode.HOT
    assert config.page_size == 10
    assert config.scroll_threshold == 8
    assert config.theme == "Github Dark"


def test_missing_file_returns_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.config")) == FeedConfig()


def test_load_config_ignores_unknown_keys(tmp_path):
    path = tmp_path / "feedtui.config"
    path.write_text('feed_id = "python"\nsort_mode = "new"\npage_size = 25\nunknown = 1\n')

    config = load_config(str(path))

    assert config.feed_id == "python"
    assert config.sort is SortMode.NEW
    assert config.page_size == 25


def test_load_config_rejects_invalid_values(tmp_path):
    path = tmp_path / "feedtui.config"
    path.write_text('theme = "Neon"\n')

    with pytest.raises(ValueError, match="Invalid theme"):
        load_config(str(path))


def test_load_config_rejects_broken_toml(tmp_path):
    path = tmp_path / "feedtui.config"
    path.write_text("feed_id = \n")

    with pytest.raises(ValueError, match="Error loading config file"):
        load_config(str(path))


@pytest.mark.parametrize(
    "overrides",
    [
        {"sort_mode": "best"},
        {"page_size": 0},
        {"page_size": 101},
        {"scroll_threshold": -1},
        {"request_timeout": 0},
        {"feed_id": "   "},
        {"log_level": "chatty"},
    ],
)
def test_invalid_settings_raise(overrides):
    with pytest.raises(ValueError):
        FeedConfig(**overrides)


def test_log_level_is_normalized():
    assert FeedConfig(log_level="debug").log_level == "DEBUG"


def test_cli_args_override_config_values():
    config = FeedConfig(feed_id="python", sort_mode="top", page_size=20)

    merged = merge_config_with_cli_args(config, feed_id="rust", sort_mode=None, page_size=None, theme="Dracula")

    assert merged.feed_id == "rust"
    assert merged.sort_mode == "top"
    assert merged.page_size == 20
    assert merged.theme == "Dracula"
