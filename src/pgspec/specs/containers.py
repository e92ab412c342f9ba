"""Containers of an instance: the bootstrap init container and PostgreSQL."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pgspec.kubernetes import Container, ContainerPort
from pgspec.specs.probes import (
    create_liveness_probe,
    create_readiness_probe,
    create_startup_probe,
    enable_metrics_tls,
    enable_status_tls,
    ensure_custom_probes_configuration,
    ensure_failure_thresholds,
)
from pgspec.specs.security import create_container_security_context
from pgspec.specs.volumes import create_postgres_volume_mounts
from pgspec.utils import METRICS_PORT, SERVER_PORT, STATUS_PORT

if TYPE_CHECKING:
    from pgspec.config import OperatorConfig
    from pgspec.kubernetes import ResourceRequirements
    from pgspec.models import Cluster
    from pgspec.specs.env import EnvConfig

POSTGRES_CONTAINER_NAME = "postgres"
BOOTSTRAP_CONTROLLER_CONTAINER_NAME = "bootstrap-controller"

INSTANCE_MANAGER_PATH = "/controller/manager"


def _copy_resources(cluster: Cluster) -> ResourceRequirements | None:
    if cluster.spec.resources is None:
        return None
    return cluster.spec.resources.model_copy(deep=True)


def create_bootstrap_container(cluster: Cluster, config: OperatorConfig) -> Container:
    """The init container copying the instance manager into the pod filesystem."""
    container = Container(
        name=BOOTSTRAP_CONTROLLER_CONTAINER_NAME,
        image=config.operator_image_name,
        imagePullPolicy=cluster.spec.imagePullPolicy,
        command=["/manager", "bootstrap", INSTANCE_MANAGER_PATH],
        volumeMounts=create_postgres_volume_mounts(cluster),
        resources=_copy_resources(cluster),
        securityContext=create_container_security_context(cluster.get_seccomp_profile()),
    )
    add_manager_logging_options(cluster, container)
    return container


def create_postgres_containers(
    cluster: Cluster,
    env_config: EnvConfig,
    config: OperatorConfig,
    enable_https: bool,
) -> list[Container]:
    """Create the containers running PostgreSQL; the first one is always postgres."""
    postgres = Container(
        name=POSTGRES_CONTAINER_NAME,
        image=cluster.get_image(config.default_postgres_image),
        imagePullPolicy=cluster.spec.imagePullPolicy,
        env=env_config.env_var_list(),
        envFrom=env_config.env_from_list(),
        volumeMounts=create_postgres_volume_mounts(cluster),
        # Defaults, possibly overridden by cluster.spec.probes
        startupProbe=create_startup_probe(),
        readinessProbe=create_readiness_probe(),
        livenessProbe=create_liveness_probe(),
        command=[INSTANCE_MANAGER_PATH, "instance", "run"],
        resources=_copy_resources(cluster),
        ports=[
            ContainerPort(name="postgresql", containerPort=SERVER_PORT, protocol="TCP"),
            ContainerPort(name="metrics", containerPort=METRICS_PORT, protocol="TCP"),
            ContainerPort(name="status", containerPort=STATUS_PORT, protocol="TCP"),
        ],
        securityContext=create_container_security_context(cluster.get_seccomp_profile()),
    )

    if enable_https:
        enable_status_tls(postgres)

    if cluster.is_metrics_tls_enabled():
        enable_metrics_tls(postgres)

    add_manager_logging_options(cluster, postgres)
    ensure_custom_probes_configuration(cluster, postgres)
    ensure_failure_thresholds(cluster, postgres)

    return [postgres]


def add_manager_logging_options(cluster: Cluster, container: Container) -> None:
    if cluster.spec.logLevel:
        container.command = [*(container.command or []), f"--log-level={cluster.spec.logLevel}"]
