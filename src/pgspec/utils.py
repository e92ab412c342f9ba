"""Well-known names, filesystem layout and hashing helpers.

The label and annotation names below are read back by the control loop that
owns the instances, so they are part of the wire format and must not change.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import BaseModel

# Labels
CLUSTER_LABEL_NAME = "cnpg.io/cluster"
INSTANCE_NAME_LABEL_NAME = "cnpg.io/instanceName"
POD_ROLE_LABEL_NAME = "cnpg.io/podRole"
POD_ROLE_INSTANCE = "instance"

# Annotations
CLUSTER_SERIAL_ANNOTATION_NAME = "cnpg.io/nodeSerial"
POD_ENV_HASH_ANNOTATION_NAME = "cnpg.io/podEnvHash"
POD_SPEC_ANNOTATION_NAME = "cnpg.io/podSpec"
POD_PATCH_ANNOTATION_NAME = "cnpg.io/podPatch"
APPARMOR_ANNOTATION_PREFIX = "container.apparmor.security.beta.kubernetes.io/"

# Ports and HTTP endpoints served by the instance manager
SERVER_PORT = 5432
METRICS_PORT = 9187
STATUS_PORT = 8000
PATH_HEALTH = "/healthz"
PATH_READY = "/readyz"
PATH_STARTUP = "/startupz"

# Filesystem layout inside the instance
PGDATA_PATH = "/var/lib/postgresql/data/pgdata"
PGDATA_VOLUME_PATH = "/var/lib/postgresql/data"
PGWAL_VOLUME_PATH = "/var/lib/postgresql/wal"
SCRATCH_DATA_VOLUME_PATH = "/run"
CONTROLLER_PATH = "/controller"
SOCKET_DIRECTORY = "/controller/run"
TEMPORARY_DIRECTORY = "/controller/tmp"
SHARED_MEMORY_PATH = "/dev/shm"

HASH_LENGTH = 16


def to_document(model: BaseModel) -> dict[str, Any]:
    """Dump a model to its JSON document form, omitting unset (None) fields."""
    return model.model_dump(mode="json", exclude_none=True)


def canonical_json(document: Any) -> str:
    """Serialize a document to compact JSON with sorted object keys.

    List order is preserved, so two documents differing only in the order
    of a list serialize differently.
    """
    return json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_hash(document: Any) -> str:
    """Compute a short, stable content hash of a JSON-compatible document."""
    digest: str = hashlib.sha256(canonical_json(document).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]
