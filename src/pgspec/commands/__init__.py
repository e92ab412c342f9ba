"""CLI command groups for pgspec."""

from pgspec.commands.config_cmd import config
from pgspec.commands.render import env, render

__all__ = [
    "config",
    "env",
    "render",
]
