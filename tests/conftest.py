from __future__ import annotations

from typing import Any

import pytest

from pgspec.models import Cluster


def build_cluster(
    name: str = "cluster-example",
    namespace: str = "default",
    annotations: dict[str, str] | None = None,
    **spec: Any,
) -> Cluster:
    return Cluster.model_validate(
        {
            "metadata": {
                "name": name,
                "namespace": namespace,
                "annotations": annotations or {},
            },
            "spec": spec,
        }
    )


@pytest.fixture
def cluster() -> Cluster:
    return build_cluster()


@pytest.fixture
def make_cluster():
    return build_cluster
