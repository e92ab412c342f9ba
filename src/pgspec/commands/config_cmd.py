"""Configuration management commands."""

from __future__ import annotations

from pathlib import Path

import rich_click as click
import yaml

from pgspec import console as con
from pgspec.config import (
    CONFIG_FILE_NAME,
    find_config_file,
    generate_default_config,
    load_config,
)


@click.group()
def config() -> None:
    """Manage pgspec configuration."""
    pass


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite existing config file.")
@click.option("--path", "target_dir", type=click.Path(file_okay=False, path_type=Path),
              default=Path("."), help="Directory to write the config file to.")
def config_init(force: bool, target_dir: Path) -> None:
    """Initialize a new .pgspec.yaml configuration file."""
    config_path: Path = target_dir / CONFIG_FILE_NAME

    if config_path.exists() and not force:
        con.print_warning(f"Config file already exists: {config_path}")
        click.echo("Use --force to overwrite.")
        return

    config_content: str = generate_default_config()

    with config_path.open("w", encoding="utf-8") as f:
        f.write(config_content)

    con.print_success(f"Created {config_path}")


@config.command("show")
def config_show() -> None:
    """Show the current configuration."""
    config_path: Path | None = find_config_file()

    if config_path:
        con.print_key_value("Config file", con.format_path(str(config_path)))
    else:
        con.print_key_value("Config file", "[muted]none (using defaults)[/muted]")

    settings = load_config(config_path)
    click.echo(yaml.safe_dump(settings.to_dict(), default_flow_style=False, sort_keys=False))
