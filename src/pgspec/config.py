"""Operator configuration for pgspec.

The configuration is an immutable snapshot handed to every synthesis call.
It is loaded from a YAML file (auto-discovered like ``.pgspec.yaml`` in the
directory tree) or from the operator environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from collections.abc import Mapping

CONFIG_FILE_NAME = ".pgspec.yaml"

DEFAULT_OPERATOR_IMAGE = "ghcr.io/cloudnative-pg/cloudnative-pg:1.25.0"
DEFAULT_POSTGRES_IMAGE = "ghcr.io/cloudnative-pg/postgresql:17.2"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class OperatorConfig:
    """Process-wide operator settings that influence instance synthesis."""

    standby_tcp_user_timeout: int = 0
    """TCP user timeout (ms) for standby connections; 0 leaves it unset."""

    create_any_service: bool = False
    """Give every instance a subdomain under the cluster '-any' service."""

    operator_image_name: str = DEFAULT_OPERATOR_IMAGE
    """Image providing the instance manager, copied by the bootstrap container."""

    default_postgres_image: str = DEFAULT_POSTGRES_IMAGE
    """PostgreSQL image used when the cluster does not declare one."""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OperatorConfig:
        """Create config from a dictionary."""
        return cls(
            standby_tcp_user_timeout=int(data.get("standby_tcp_user_timeout", 0)),
            create_any_service=bool(data.get("create_any_service", False)),
            operator_image_name=data.get("operator_image_name", DEFAULT_OPERATOR_IMAGE),
            default_postgres_image=data.get("default_postgres_image", DEFAULT_POSTGRES_IMAGE),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> OperatorConfig:
        """Create config from the operator environment variables.

        Reads STANDBY_TCP_USER_TIMEOUT, CREATE_ANY_SERVICE, OPERATOR_IMAGE_NAME
        and POSTGRES_IMAGE_NAME; unset variables keep their defaults.
        """
        if environ is None:
            environ = os.environ

        timeout: str = environ.get("STANDBY_TCP_USER_TIMEOUT", "").strip()
        return cls(
            standby_tcp_user_timeout=int(timeout) if timeout else 0,
            create_any_service=environ.get("CREATE_ANY_SERVICE", "").strip().lower()
            in _TRUE_VALUES,
            operator_image_name=environ.get("OPERATOR_IMAGE_NAME") or DEFAULT_OPERATOR_IMAGE,
            default_postgres_image=environ.get("POSTGRES_IMAGE_NAME") or DEFAULT_POSTGRES_IMAGE,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "standby_tcp_user_timeout": self.standby_tcp_user_timeout,
            "create_any_service": self.create_any_service,
            "operator_image_name": self.operator_image_name,
            "default_postgres_image": self.default_postgres_image,
        }


@dataclass(frozen=True)
class PlatformInfo:
    """Facts about the Kubernetes platform, detected once by the caller."""

    security_context_constraints: bool = False
    """The platform imposes its own restricted security policy (e.g. OpenShift SCC)."""

    apparmor_supported: bool = True
    """The nodes honour AppArmor profile annotations."""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlatformInfo:
        return cls(
            security_context_constraints=bool(data.get("security_context_constraints", False)),
            apparmor_supported=bool(data.get("apparmor_supported", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "security_context_constraints": self.security_context_constraints,
            "apparmor_supported": self.apparmor_supported,
        }


@dataclass(frozen=True)
class PgSpecConfig:
    """Main configuration for pgspec."""

    operator: OperatorConfig = field(default_factory=OperatorConfig)
    """Operator settings."""

    platform: PlatformInfo = field(default_factory=PlatformInfo)
    """Platform facts."""

    @classmethod
    def get_default(cls) -> PgSpecConfig:
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PgSpecConfig:
        """Create config from a dictionary."""
        return cls(
            operator=OperatorConfig.from_dict(data.get("operator") or {}),
            platform=PlatformInfo.from_dict(data.get("platform") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "operator": self.operator.to_dict(),
            "platform": self.platform.to_dict(),
        }


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find the config file by walking up the directory tree.

    Starts from start_path (or cwd) and walks up looking for .pgspec.yaml.
    """
    if start_path is None:
        start_path = Path.cwd()

    current: Path = start_path
    while current != current.parent:
        config_path: Path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path
        current = current.parent

    return None


def load_config(config_path: Path | None = None) -> PgSpecConfig:
    """Load configuration from file or return defaults.

    If config_path is None, searches for .pgspec.yaml in the directory tree.
    If no config file is found, returns default configuration.
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        return PgSpecConfig.get_default()

    with config_path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return PgSpecConfig.from_dict(data)


def save_config(config: PgSpecConfig, config_path: Path) -> None:
    """Save configuration to a file."""
    with config_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def generate_default_config() -> str:
    """Generate default configuration as YAML string."""
    config: PgSpecConfig = PgSpecConfig.get_default()
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
