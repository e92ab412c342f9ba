"""Lifecycle hook interface exposed by plugins.

The transport behind a hook client is not part of this package: callers
resolve a client for the cluster (or none) and hand it to the synthesis.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pgspec.models import Cluster


class OperationVerb(StrEnum):
    """Verb describing why a lifecycle hook is invoked."""

    EVALUATE = "evaluate"
    CREATE = "create"
    PATCH = "patch"
    DELETE = "delete"


@runtime_checkable
class LifecycleHookClient(Protocol):
    """A client able to run the lifecycle hooks of the plugins of a cluster."""

    async def lifecycle_hook(self, verb: OperationVerb, cluster: Cluster, obj: Any) -> Any:
        """Run the hooks for ``verb`` on ``obj`` and return the resulting object.

        Implementations return an object of the same type they received.
        """
        ...
