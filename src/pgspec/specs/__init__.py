"""Specifications of the Kubernetes resources generated for a cluster."""

from pgspec.specs.env import EnvConfig, create_pod_env_config
from pgspec.specs.pods import build_instance, get_instance_name, new_instance

__all__ = [
    "EnvConfig",
    "build_instance",
    "create_pod_env_config",
    "get_instance_name",
    "new_instance",
]
