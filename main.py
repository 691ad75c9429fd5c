from pathlib import Path

import click
import toml

from feedtui.config import ALLOWED_THEMES, CONFIG_FILE_PATH, FeedConfig, load_config, merge_config_with_cli_args
from feedtui.logging_config import configure_logging
from feedtui.models import SortMode
from feedtui.ui.app import FeedTUI

SORT_CHOICES = [mode.value for mode in SortMode]


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--feed",
    "-f",
    "feed_id",
    type=str,
    help="Feed (subreddit) to open, e.g. 'python'",
    default=None,
)
@click.option(
    "--sort",
    "sort_mode",
    type=click.Choice(SORT_CHOICES, case_sensitive=False),
    help="Sort mode of the listing",
    default=None,
)
@click.option(
    "--page-size",
    type=click.IntRange(1, 100),
    help="Number of posts to load per page",
    default=None,
)
@click.option(
    "--theme",
    type=click.Choice(ALLOWED_THEMES, case_sensitive=False),
    help="Theme to use for the UI",
    default=None,
)
@click.option(
    "--log-level",
    type=str,
    help="Log level for the log file (e.g. DEBUG, INFO)",
    default=None,
)
@click.option(
    "--config",
    type=click.Path(exists=True, readable=True, path_type=str),
    help="Path to configuration file (default: ~/.feedtui.config)",
    default=None,
)
def cli(
    ctx,
    feed_id: str | None = None,
    sort_mode: str | None = None,
    page_size: int | None = None,
    theme: str | None = None,
    log_level: str | None = None,
    config: str | None = None,
):
    """Feed Terminal UI - Browse paginated listing feeds."""
    if ctx.invoked_subcommand is None:
        main(feed_id, sort_mode, page_size, theme, log_level, config)


@cli.command()
@click.option(
    "--config",
    type=click.Path(path_type=str),
    help="Path to configuration file (default: ~/.feedtui.config)",
    default=None,
)
def configure(config: str | None = None):
    """Interactive configuration setup for feedtui"""
    config_path = Path(config) if config else CONFIG_FILE_PATH

    click.echo("feedtui Configuration Setup")
    click.echo("=" * 27)
    click.echo("Leave fields empty to keep the current value or use defaults.")
    click.echo()

    existing_config = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                existing_config = toml.load(f)
            click.echo(f"Found existing configuration at {config_path}")
            click.echo()
        except (OSError, toml.TomlDecodeError) as e:
            click.echo(f"Ignoring unreadable configuration at {config_path}: {e}")

    defaults = FeedConfig()
    new_config = {}

    # Feed Configuration
    click.echo("Feed Configuration:")
    click.echo("-" * 19)

    new_config["feed_id"] = click.prompt(
        "Default feed (subreddit)", default=existing_config.get("feed_id", defaults.feed_id), type=str
    ).strip()

    new_config["sort_mode"] = click.prompt(
        "Default sort mode",
        default=existing_config.get("sort_mode", defaults.sort_mode),
        type=click.Choice(SORT_CHOICES, case_sensitive=False),
    )

    new_config["page_size"] = click.prompt(
        "Posts per page",
        default=existing_config.get("page_size", defaults.page_size),
        type=click.IntRange(1, 100),
    )

    # Theme Configuration
    click.echo()
    click.echo("Theme Configuration:")
    click.echo("-" * 20)

    current_theme = existing_config.get("theme", defaults.theme)
    click.echo("Available themes:")
    for i, theme in enumerate(ALLOWED_THEMES, 1):
        marker = " (current)" if theme == current_theme else ""
        click.echo(f"  {i}. {theme}{marker}")

    theme_choice = click.prompt(
        f"Select theme (1-{len(ALLOWED_THEMES)})",
        default=ALLOWED_THEMES.index(current_theme) + 1 if current_theme in ALLOWED_THEMES else 1,
        type=click.IntRange(1, len(ALLOWED_THEMES)),
    )
    new_config["theme"] = ALLOWED_THEMES[theme_choice - 1]

    # Keep settings this wizard does not ask about
    for key, value in existing_config.items():
        new_config.setdefault(key, value)

    click.echo()
    try:
        FeedConfig(**{key: value for key, value in new_config.items() if key in FeedConfig.__dataclass_fields__})
        click.echo("✓ Configuration validated successfully!")
    except (TypeError, ValueError) as e:
        click.echo(f"✗ Configuration validation failed: {e}")
        if not click.confirm("Save configuration anyway?"):
            click.echo("Configuration cancelled.")
            return

    click.echo()
    try:
        with open(config_path, "w") as f:
            toml.dump(new_config, f)
        click.echo(f"✓ Configuration saved to {config_path}")
    except OSError as e:
        click.echo(f"✗ Failed to save configuration: {e}")


def main(
    feed_id: str | None = None,
    sort_mode: str | None = None,
    page_size: int | None = None,
    theme: str | None = None,
    log_level: str | None = None,
    config: str | None = None,
):
    """Feed Terminal UI - Browse paginated listing feeds."""
    try:
        config_obj = load_config(config)

        # CLI arguments take priority over the config file
        config_obj = merge_config_with_cli_args(
            config_obj,
            feed_id=feed_id,
            sort_mode=sort_mode,
            page_size=page_size,
            theme=theme,
            log_level=log_level,
        )
    except ValueError as e:
        raise click.ClickException(str(e))

    configure_logging(config_obj.log_level, config_obj.log_file)

    app = FeedTUI(config=config_obj)
    app.run()


if __name__ == "__main__":
    cli()
