"""Rich console output utilities for the pgspec CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

PGSPEC_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "heading": "bold magenta",
        "muted": "dim",
        "cluster": "bold blue",
        "instance": "bold green",
        "hash": "cyan",
        "path": "dim cyan",
    }
)


console = Console(theme=PGSPEC_THEME)
err_console = Console(theme=PGSPEC_THEME, stderr=True)


def print_success(message: str, prefix: str = "✓") -> None:
    """Print a success message."""
    console.print(f"[success]{prefix}[/success] {message}")


def print_error(message: str, prefix: str = "✗") -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]{prefix}[/error] {message}")


def print_warning(message: str, prefix: str = "⚠") -> None:
    console.print(f"[warning]{prefix}[/warning] {message}")


def print_header(title: str) -> None:
    """Print a section header."""
    console.print(f"\n[heading]{title}[/heading]")
    console.print(f"[muted]{'─' * len(title)}[/muted]")


def print_key_value(key: str, value: str, indent: int = 0) -> None:
    spaces = "  " * indent
    console.print(f"{spaces}[muted]{key}:[/muted] {value}")


def format_cluster(name: str) -> str:
    return f"[cluster]{name}[/cluster]"


def format_instance(name: str) -> str:
    return f"[instance]{name}[/instance]"


def format_hash(value: str) -> str:
    return f"[hash]{value}[/hash]"


def format_path(path: str) -> str:
    return f"[path]{path}[/path]"


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a styled table."""
    return Table(
        title=title,
        show_header=show_header,
        header_style="bold",
        border_style="muted",
        title_style="heading",
    )


def print_env_table(entries: list[tuple[str, str]]) -> None:
    """Print environment entries as (name, value) rows, in order."""
    table: Table = create_table()
    table.add_column("#", justify="right", style="muted")
    table.add_column("Name", style="bold")
    table.add_column("Value")

    for index, (name, value) in enumerate(entries, start=1):
        table.add_row(str(index), name, value)

    console.print(table)


def setup_logging(verbose: bool) -> None:
    """Route the pgspec library logs to stderr through rich."""
    logger = logging.getLogger("pgspec")
    if not verbose:
        logger.setLevel(logging.WARNING)
        return

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(logging.DEBUG)
