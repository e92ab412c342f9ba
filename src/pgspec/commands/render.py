"""Instance rendering commands."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import rich_click as click
import yaml
from pydantic import ValidationError

from pgspec import console as con
from pgspec.config import PgSpecConfig, load_config
from pgspec.errors import InstanceSpecError
from pgspec.kubernetes import Pod
from pgspec.models import Cluster
from pgspec.specs import create_pod_env_config, get_instance_name, new_instance
from pgspec.utils import to_document


def load_cluster(cluster_file: Path) -> Cluster:
    """Load a Cluster description from a YAML file, exiting on error."""
    try:
        with cluster_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        con.print_error(f"Invalid YAML in {con.format_path(str(cluster_file))}: {e}")
        raise SystemExit(1) from None

    if not isinstance(data, dict):
        con.print_error(f"{con.format_path(str(cluster_file))} is not a Cluster resource")
        raise SystemExit(1)

    try:
        return Cluster.model_validate(data)
    except ValidationError as e:
        con.print_error(f"Invalid cluster description in {cluster_file}:\n{e}")
        raise SystemExit(1) from None


def _load_settings(config_path: str | None) -> PgSpecConfig:
    return load_config(Path(config_path) if config_path else None)


@click.command()
@click.argument("cluster_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--serial", "-s", type=click.IntRange(min=1), default=1, show_default=True,
              help="Serial of the instance to render.")
@click.option("--tls/--no-tls", default=True, show_default=True,
              help="Serve the status endpoint over TLS.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to a .pgspec.yaml file (auto-discovered by default).")
@click.option("--output", "-o", type=click.Choice(["yaml", "json"]), default="yaml",
              show_default=True, help="Output format.")
def render(
    cluster_file: Path, serial: int, tls: bool, config_path: str | None, output: str
) -> None:
    """Render the Pod of one instance of a cluster.

    \b
    Examples:
      pgspec render cluster.yaml --serial 2
      pgspec render cluster.yaml -o json --no-tls
    """
    cluster: Cluster = load_cluster(cluster_file)
    settings: PgSpecConfig = _load_settings(config_path)

    try:
        pod: Pod = asyncio.run(
            new_instance(
                cluster,
                serial,
                tls,
                config=settings.operator,
                platform=settings.platform,
            )
        )
    except InstanceSpecError as e:
        con.print_error(f"Cannot render instance ({e.stage}): {e}")
        raise SystemExit(1) from None

    document = to_document(pod)
    if output == "json":
        click.echo(json.dumps(document, indent=2))
    else:
        click.echo(yaml.safe_dump(document, default_flow_style=False, sort_keys=False), nl=False)


@click.command()
@click.argument("cluster_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--serial", "-s", type=click.IntRange(min=1), default=1, show_default=True,
              help="Serial of the instance.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to a .pgspec.yaml file (auto-discovered by default).")
def env(cluster_file: Path, serial: int, config_path: str | None) -> None:
    """Show the environment of an instance and its hash."""
    cluster: Cluster = load_cluster(cluster_file)
    settings: PgSpecConfig = _load_settings(config_path)

    pod_name: str = get_instance_name(cluster.name, serial)
    env_config = create_pod_env_config(cluster, pod_name, settings.operator)

    con.print_header(f"Environment of {pod_name}")
    con.print_env_table(
        [
            (var.name, var.value if var.value is not None else json.dumps(var.valueFrom))
            for var in env_config.env_vars
        ]
    )
    for source in env_config.env_from:
        con.print_key_value("envFrom", json.dumps(to_document(source)), indent=1)
    con.print_key_value("Cluster", con.format_cluster(cluster.name))
    con.print_key_value("Instance", con.format_instance(pod_name))
    con.print_key_value("Hash", con.format_hash(env_config.hash))
