"""pgspec CLI - render PostgreSQL instance Pods from a cluster description."""

from __future__ import annotations

import rich_click as click

from pgspec import __version__
from pgspec.commands import config, env, render
from pgspec.console import setup_logging

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = (
    "Try running the '--help' flag for more information."
)
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_ARGUMENT = "green"
click.rich_click.STYLE_COMMAND = "bold yellow"
click.rich_click.MAX_WIDTH = 100

CLI_HELP = """Render the Pods of PostgreSQL cluster instances.

\b
[bold cyan]Quick Start:[/bold cyan]
  [bold yellow]pgspec render cluster.yaml -s 1[/bold yellow]   Render instance 1
  [bold yellow]pgspec env cluster.yaml[/bold yellow]           Show the instance environment
  [bold yellow]pgspec config init[/bold yellow]                Write a default .pgspec.yaml
"""


@click.group(help=CLI_HELP)
@click.version_option(__version__, prog_name="pgspec")
@click.option("--verbose", "-v", is_flag=True, help="Log each synthesis step to stderr.")
def cli(verbose: bool) -> None:
    """pgspec CLI entry point."""
    setup_logging(verbose)


cli.add_command(config)
cli.add_command(env)
cli.add_command(render)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
