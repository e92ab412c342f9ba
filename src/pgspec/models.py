"""Cluster description models.

The cluster description is the declarative, user-authored input from which
every instance is synthesized. Only the subset of the Cluster resource that
instance synthesis reads is modelled; unknown fields are kept so a full
resource can be loaded as-is. Admission validation happens elsewhere, these
models only parse and apply defaults.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pgspec.kubernetes import (
    EnvFromSource,
    EnvVar,
    NodeAffinity,
    NodeSelector,
    PodAffinity,
    PodAntiAffinity,
    Probe,
    PullPolicy,
    ResourceRequirements,
    SeccompProfile,
    Tolerations,
    TopologySpreadConstraints,
)
from pgspec.utils import POD_PATCH_ANNOTATION_NAME

DEFAULT_TOPOLOGY_KEY = "kubernetes.io/hostname"
DEFAULT_POSTGRES_UID = 26
DEFAULT_POSTGRES_GID = 26
DEFAULT_MAX_START_DELAY = 3600
DEFAULT_MAX_STOP_DELAY = 1800


class PodAntiAffinityType(StrEnum):
    """How strictly instances of the same cluster are kept apart."""

    REQUIRED = "required"
    PREFERRED = "preferred"


class AffinityConfiguration(BaseModel):
    """Scheduling configuration of the instances.

    Instances of a cluster are spread across topology domains through a
    generated pod anti-affinity term. User-supplied fragments are merged on
    top of the generated rules.
    """

    model_config = ConfigDict(extra="allow")

    enablePodAntiAffinity: bool | None = Field(
        default=None,
        description=(
            "Enable the generated pod anti-affinity rule. Unset means enabled; only an "
            "explicit 'false' disables it."
        ),
    )
    topologyKey: str = Field(
        default="",
        description=(
            "Node label the anti-affinity rule is evaluated against. Empty means "
            f"'{DEFAULT_TOPOLOGY_KEY}', i.e. one instance per node."
        ),
    )
    podAntiAffinityType: str | None = Field(
        default=PodAntiAffinityType.PREFERRED,
        description=(
            "'required': instances are never scheduled in the same topology domain. "
            "'preferred' (default): the scheduler tries to keep them apart with weight 100."
        ),
    )
    nodeSelector: NodeSelector = Field(default_factory=dict)
    tolerations: Tolerations = Field(default_factory=list)
    nodeAffinity: NodeAffinity | None = Field(
        default=None,
        description="Node affinity for the instances. Replaces any generated node affinity.",
    )
    additionalPodAffinity: PodAffinity | None = Field(
        default=None,
        description="Pod affinity for the instances. Used as-is.",
    )
    additionalPodAntiAffinity: PodAntiAffinity | None = Field(
        default=None,
        description=(
            "Extra pod anti-affinity terms. They are appended to the generated ones, "
            "never replacing them."
        ),
    )


class ProbeOverride(BaseModel):
    """User overrides for one of the instance health probes.

    Only the fields that are set replace the corresponding field of the
    default probe. Zero counts as not set.
    """

    model_config = ConfigDict(extra="forbid")

    initialDelaySeconds: int | None = Field(default=None, ge=0)
    timeoutSeconds: int | None = Field(default=None, ge=0)
    periodSeconds: int | None = Field(default=None, ge=0)
    successThreshold: int | None = Field(default=None, ge=0)
    failureThreshold: int | None = Field(default=None, ge=0)
    terminationGracePeriodSeconds: int | None = Field(default=None, ge=0)

    def apply_into(self, probe: Probe) -> None:
        """Copy the fields set in this override into ``probe``."""
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            if value:
                setattr(probe, field_name, value)


class ProbesConfiguration(BaseModel):
    """Overrides for the startup, readiness and liveness probes."""

    model_config = ConfigDict(extra="forbid")

    startup: ProbeOverride | None = None
    readiness: ProbeOverride | None = None
    liveness: ProbeOverride | None = None


class MonitoringTLSConfiguration(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: bool = False


class MonitoringConfiguration(BaseModel):
    """Metrics exporter configuration."""

    model_config = ConfigDict(extra="allow")

    tls: MonitoringTLSConfiguration | None = Field(
        default=None,
        description="Serve the metrics endpoint over TLS.",
    )


class StorageConfiguration(BaseModel):
    """Persistent storage of an instance (data or WAL)."""

    model_config = ConfigDict(extra="allow")

    size: str = "1Gi"
    storageClass: str | None = None


class PluginConfiguration(BaseModel):
    """A plugin declared on the cluster, possibly exposing lifecycle hooks."""

    model_config = ConfigDict(extra="allow")

    name: str
    enabled: bool = True
    parameters: dict[str, str] = Field(default_factory=dict)


class ClusterSpec(BaseModel):
    """Desired state of a PostgreSQL cluster, as far as instances are concerned."""

    model_config = ConfigDict(extra="allow")

    imageName: str | None = Field(
        default=None,
        description="PostgreSQL container image. The operator default is used when unset.",
    )
    imagePullPolicy: PullPolicy | None = None
    instances: int = Field(default=1, ge=1)
    env: list[EnvVar] = Field(
        default_factory=list,
        description="Extra environment variables, appended after the reserved ones in order.",
    )
    envFrom: list[EnvFromSource] = Field(default_factory=list)
    schedulerName: str | None = None
    affinity: AffinityConfiguration = Field(default_factory=AffinityConfiguration)
    topologySpreadConstraints: TopologySpreadConstraints = Field(default_factory=list)
    probes: ProbesConfiguration | None = None
    seccompProfile: SeccompProfile | None = Field(
        default=None,
        description="Seccomp profile of the instances. 'RuntimeDefault' when unset.",
    )
    postgresUID: int = Field(default=DEFAULT_POSTGRES_UID, ge=0)
    postgresGID: int = Field(default=DEFAULT_POSTGRES_GID, ge=0)
    priorityClassName: str | None = None
    resources: ResourceRequirements | None = None
    startDelay: int = Field(
        default=DEFAULT_MAX_START_DELAY,
        description="Seconds allowed for an instance to start before it is restarted.",
    )
    stopDelay: int = Field(
        default=DEFAULT_MAX_STOP_DELAY,
        description="Seconds allowed for a clean shutdown; the pod termination grace period.",
    )
    livenessProbeTimeout: int | None = Field(
        default=None,
        description=(
            "Seconds after which a non-responding instance is considered dead. Drives the "
            "liveness probe failure threshold when no override sets it."
        ),
    )
    logLevel: str | None = None
    monitoring: MonitoringConfiguration | None = None
    storage: StorageConfiguration = Field(default_factory=StorageConfiguration)
    walStorage: StorageConfiguration | None = Field(
        default=None,
        description="Separate volume for the write-ahead log. Shared with PGDATA when unset.",
    )
    plugins: list[PluginConfiguration] = Field(default_factory=list)


class ClusterMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    namespace: str = "default"
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class ClusterStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    image: str | None = Field(
        default=None,
        description="Image the cluster is currently running; wins over spec.imageName.",
    )


class Cluster(BaseModel):
    """A PostgreSQL cluster description."""

    model_config = ConfigDict(extra="allow")

    apiVersion: str = "postgresql.cnpg.io/v1"
    kind: str = "Cluster"
    metadata: ClusterMetadata
    spec: ClusterSpec = Field(default_factory=ClusterSpec)
    status: ClusterStatus = Field(default_factory=ClusterStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations

    def get_image(self, default: str) -> str:
        return self.status.image or self.spec.imageName or default

    def get_seccomp_profile(self) -> SeccompProfile:
        if self.spec.seccompProfile is not None:
            return self.spec.seccompProfile
        return SeccompProfile(type="RuntimeDefault")

    def get_postgres_uid(self) -> int:
        return self.spec.postgresUID

    def get_postgres_gid(self) -> int:
        return self.spec.postgresGID

    def get_max_start_delay(self) -> int:
        if self.spec.startDelay > 0:
            return self.spec.startDelay
        return DEFAULT_MAX_START_DELAY

    def get_max_stop_delay(self) -> int:
        if self.spec.stopDelay > 0:
            return self.spec.stopDelay
        return DEFAULT_MAX_STOP_DELAY

    def is_metrics_tls_enabled(self) -> bool:
        monitoring = self.spec.monitoring
        return monitoring is not None and monitoring.tls is not None and monitoring.tls.enabled

    def get_service_any_name(self) -> str:
        """Name of the headless service selecting every instance."""
        return f"{self.name}-any"

    def get_pod_patch(self) -> str | None:
        """The JSON patch document to overlay on instances, if any."""
        return self.annotations.get(POD_PATCH_ANNOTATION_NAME) or None

    def should_create_wal_volume(self) -> bool:
        return self.spec.walStorage is not None

    def get_enabled_plugin_names(self) -> list[str]:
        return [plugin.name for plugin in self.spec.plugins if plugin.enabled]

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
