"""Configuration management for feedtui."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from feedtui.gateways.reddit import DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from feedtui.models import SortMode
from feedtui.ui.constants import SCROLL_THRESHOLD_LINES

ALLOWED_THEMES = ["Github Dark", "Dracula", "Solarized", "Sepia"]
ALLOWED_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
CONFIG_FILE_PATH = Path.home() / ".feedtui.config"
LOG_FILE_PATH = Path.home() / ".feedtui.log"
MAX_PAGE_SIZE = 100


@dataclass
class FeedConfig:
    """Feed viewer configuration settings."""

    feed_id: str = "reactjs"
    sort_mode: str = SortMode.HOT.value
    theme: str = "Github Dark"
    page_size: int = 10
    scroll_threshold: int = SCROLL_THRESHOLD_LINES
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    log_file: str = str(LOG_FILE_PATH)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        self.feed_id = (self.feed_id or "").strip()
        if not self.feed_id:
            raise ValueError("Feed name must not be empty")

        sort_modes = [mode.value for mode in SortMode]
        if self.sort_mode not in sort_modes:
            raise ValueError(f"Invalid sort mode '{self.sort_mode}'. Allowed sort modes: {', '.join(sort_modes)}")

        if self.theme not in ALLOWED_THEMES:
            raise ValueError(f"Invalid theme '{self.theme}'. Allowed themes: {', '.join(ALLOWED_THEMES)}")

        if not 1 <= int(self.page_size) <= MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}")

        if int(self.scroll_threshold) < 0:
            raise ValueError("Scroll threshold must not be negative")

        if float(self.request_timeout) <= 0:
            raise ValueError("Request timeout must be positive")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in ALLOWED_LOG_LEVELS:
            raise ValueError(f"Invalid log level '{self.log_level}'. Allowed levels: {', '.join(ALLOWED_LOG_LEVELS)}")

    @property
    def sort(self) -> SortMode:
        return SortMode(self.sort_mode)


def load_config(config_file_path: Optional[str] = None) -> FeedConfig:
    """Load configuration from file."""
    if config_file_path:
        config_path = Path(config_file_path)
    else:
        config_path = CONFIG_FILE_PATH

    if not config_path.exists():
        return FeedConfig()

    try:
        with open(config_path, "r") as f:
            config_data = toml.load(f)

        # Unknown keys are ignored
        valid_fields = set(FeedConfig.__dataclass_fields__)
        filtered_config = {key: value for key, value in config_data.items() if key in valid_fields}

        return FeedConfig(**filtered_config)

    except Exception as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def merge_config_with_cli_args(config: FeedConfig, **cli_args) -> FeedConfig:
    """Merge configuration with CLI arguments, giving priority to CLI args."""
    merged_config = {field_name: getattr(config, field_name) for field_name in FeedConfig.__dataclass_fields__}

    for key, value in cli_args.items():
        if value is not None:
            merged_config[key] = value

    return FeedConfig(**merged_config)
