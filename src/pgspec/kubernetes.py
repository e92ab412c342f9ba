"""Kubernetes object types produced by the instance synthesis.

These types model the subset of the core/v1 API that an instance Pod is made
of. Field names follow the Kubernetes JSON field names so that a model dumps
straight into the document a JSON patch or the API server expects. Every
model keeps unknown keys, so documents rewritten by a patch or a lifecycle
hook survive a round trip through these types.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PullPolicy(StrEnum):
    """Container image pull policy."""

    ALWAYS = "Always"
    IF_NOT_PRESENT = "IfNotPresent"
    NEVER = "Never"


class URIScheme(StrEnum):
    """Scheme used by an HTTP probe."""

    HTTP = "HTTP"
    HTTPS = "HTTPS"


class K8sObject(BaseModel):
    """Base for every Kubernetes type: unknown fields are preserved."""

    model_config = ConfigDict(extra="allow")


# Type aliases for common dict-based types
Labels = dict[str, str]
"""Kubernetes labels - identifying key-value pairs used by selectors."""

Annotations = dict[str, str]
"""Kubernetes annotations - non-identifying metadata, including the
serial, env-hash and resolved-spec snapshot of an instance."""

NodeSelector = dict[str, str]
"""Node selector - pods are only scheduled on nodes carrying ALL these labels."""

Tolerations = list[dict[str, Any]]
"""Pod tolerations, copied verbatim from the cluster description.

Example: [{'key': 'dedicated', 'operator': 'Equal', 'value': 'postgres', 'effect': 'NoSchedule'}]
"""

TopologySpreadConstraints = list[dict[str, Any]]
"""Topology spread constraints, copied verbatim from the cluster description."""


class EnvVar(K8sObject):
    """Environment variable configuration.

    Either a direct value or a reference to a Secret, ConfigMap or field.
    """

    name: str = Field(
        description=(
            "Name of the environment variable. By convention, use UPPER_SNAKE_CASE. "
            "Names reserved by the instance manager (PGDATA, POD_NAME, NAMESPACE, ...) "
            "are rejected upstream by admission validation."
        )
    )
    value: str | None = Field(
        default=None,
        description="Direct value for the environment variable.",
    )
    valueFrom: dict[str, Any] | None = Field(
        default=None,
        description=(
            "Reference to get the value from a Secret, ConfigMap, or field. Common patterns: "
            "{'secretKeyRef': {'name': 'my-secret', 'key': 'password'}}, "
            "{'fieldRef': {'fieldPath': 'metadata.name'}}."
        ),
    )


class EnvFromSource(K8sObject):
    """A ConfigMap or Secret whose keys are all exported as environment variables."""

    prefix: str | None = None
    configMapRef: dict[str, Any] | None = None
    secretRef: dict[str, Any] | None = None


class VolumeMount(K8sObject):
    """Volume mount configuration."""

    name: str
    mountPath: str
    readOnly: bool | None = None
    subPath: str | None = None


class Volume(K8sObject):
    """A pod volume. Only the sources used by instances are typed."""

    name: str
    persistentVolumeClaim: dict[str, Any] | None = None
    emptyDir: dict[str, Any] | None = None
    secret: dict[str, Any] | None = None


class ContainerPort(K8sObject):
    name: str
    containerPort: int
    protocol: str = "TCP"


class HTTPGetAction(K8sObject):
    path: str
    port: int | str
    scheme: URIScheme | None = None


class Probe(K8sObject):
    """A container health probe.

    A field left as None is omitted from the document and falls back to the
    Kubernetes default.
    """

    httpGet: HTTPGetAction | None = None
    initialDelaySeconds: int | None = None
    timeoutSeconds: int | None = None
    periodSeconds: int | None = None
    successThreshold: int | None = None
    failureThreshold: int | None = None
    terminationGracePeriodSeconds: int | None = None


class SeccompProfile(K8sObject):
    type: str = Field(
        default="RuntimeDefault",
        description="One of 'RuntimeDefault', 'Localhost' or 'Unconfined'.",
    )
    localhostProfile: str | None = None


class Capabilities(K8sObject):
    add: list[str] | None = None
    drop: list[str] | None = None


class SecurityContext(K8sObject):
    """Container-level security context."""

    capabilities: Capabilities | None = None
    privileged: bool | None = None
    runAsNonRoot: bool | None = None
    runAsUser: int | None = None
    runAsGroup: int | None = None
    readOnlyRootFilesystem: bool | None = None
    allowPrivilegeEscalation: bool | None = None
    seccompProfile: SeccompProfile | None = None


class PodSecurityContext(K8sObject):
    """Pod-level security context."""

    runAsNonRoot: bool | None = None
    runAsUser: int | None = None
    runAsGroup: int | None = None
    fsGroup: int | None = None
    seccompProfile: SeccompProfile | None = None


class ResourceRequirements(K8sObject):
    """Kubernetes resource requirements (requests/limits).

    Quantities use the Kubernetes notation, e.g. {'cpu': '500m', 'memory': '1Gi'}.
    """

    requests: dict[str, str] | None = None
    limits: dict[str, str] | None = None


class Container(K8sObject):
    name: str
    image: str | None = None
    imagePullPolicy: PullPolicy | None = None
    command: list[str] | None = None
    args: list[str] | None = None
    env: list[EnvVar] | None = None
    envFrom: list[EnvFromSource] | None = None
    volumeMounts: list[VolumeMount] | None = None
    ports: list[ContainerPort] | None = None
    resources: ResourceRequirements | None = None
    startupProbe: Probe | None = None
    readinessProbe: Probe | None = None
    livenessProbe: Probe | None = None
    securityContext: SecurityContext | None = None


class LabelSelectorRequirement(K8sObject):
    key: str
    operator: str
    values: list[str] | None = None


class LabelSelector(K8sObject):
    matchLabels: dict[str, str] | None = None
    matchExpressions: list[LabelSelectorRequirement] | None = None


class PodAffinityTerm(K8sObject):
    labelSelector: LabelSelector | None = None
    topologyKey: str
    namespaces: list[str] | None = None


class WeightedPodAffinityTerm(K8sObject):
    weight: int
    podAffinityTerm: PodAffinityTerm


class PodAffinity(K8sObject):
    requiredDuringSchedulingIgnoredDuringExecution: list[PodAffinityTerm] | None = None
    preferredDuringSchedulingIgnoredDuringExecution: list[WeightedPodAffinityTerm] | None = None


class PodAntiAffinity(K8sObject):
    requiredDuringSchedulingIgnoredDuringExecution: list[PodAffinityTerm] | None = None
    preferredDuringSchedulingIgnoredDuringExecution: list[WeightedPodAffinityTerm] | None = None


class NodeAffinity(K8sObject):
    """Node affinity. The selector terms are passed through untouched."""

    requiredDuringSchedulingIgnoredDuringExecution: dict[str, Any] | None = None
    preferredDuringSchedulingIgnoredDuringExecution: list[dict[str, Any]] | None = None


class Affinity(K8sObject):
    """Pod affinity/anti-affinity rules.

    - nodeAffinity: select nodes based on labels
    - podAffinity: co-locate with other pods
    - podAntiAffinity: spread instances of a cluster apart
    """

    nodeAffinity: NodeAffinity | None = None
    podAffinity: PodAffinity | None = None
    podAntiAffinity: PodAntiAffinity | None = None


class PodSpec(K8sObject):
    hostname: str | None = None
    subdomain: str | None = None
    initContainers: list[Container] | None = None
    containers: list[Container] = Field(default_factory=list)
    volumes: list[Volume] | None = None
    securityContext: PodSecurityContext | None = None
    affinity: Affinity | None = None
    tolerations: Tolerations | None = None
    nodeSelector: NodeSelector | None = None
    schedulerName: str | None = None
    serviceAccountName: str | None = None
    terminationGracePeriodSeconds: int | None = None
    topologySpreadConstraints: TopologySpreadConstraints | None = None
    priorityClassName: str | None = None


class ObjectMeta(K8sObject):
    name: str | None = None
    namespace: str | None = None
    labels: Labels | None = None
    annotations: Annotations | None = None


class Pod(K8sObject):
    """A Kubernetes Pod: the synthesized representation of one instance."""

    apiVersion: str = "v1"
    kind: str = "Pod"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)
