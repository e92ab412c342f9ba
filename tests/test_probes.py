from __future__ import annotations

import pytest

from pgspec.config import OperatorConfig
from pgspec.kubernetes import URIScheme
from pgspec.specs.containers import create_postgres_containers
from pgspec.specs.env import create_pod_env_config
from pgspec.specs.probes import (
    METRICS_PORT_TLS_FLAG,
    STATUS_PORT_TLS_FLAG,
    get_failure_threshold,
)


def postgres_container(cluster, enable_https: bool = False):
    config = OperatorConfig()
    env_config = create_pod_env_config(cluster, f"{cluster.name}-1", config)
    return create_postgres_containers(cluster, env_config, config, enable_https)[0]


class TestGetFailureThreshold:
    @pytest.mark.parametrize(
        ("delay", "period", "expected"),
        [
            (30, 10, 3),
            (20, 10, 2),
            (5, 10, 1),
            (10, 10, 1),
            (31, 10, 4),
            (3600, 10, 360),
            (0, 10, 1),
        ],
    )
    def test_threshold(self, delay: int, period: int, expected: int) -> None:
        assert get_failure_threshold(delay, period) == expected

    def test_total_wait_covers_delay(self) -> None:
        for delay in range(1, 200):
            threshold = get_failure_threshold(delay, 7)
            assert threshold >= 1
            assert threshold * 7 >= delay
            assert (threshold - 1) * 7 < delay or threshold == 1


class TestDefaultProbes:
    def test_endpoints_and_timings(self, cluster):
        container = postgres_container(cluster)

        probes = {
            "startup": container.startupProbe,
            "readiness": container.readinessProbe,
            "liveness": container.livenessProbe,
        }
        paths = {kind: probe.httpGet.path for kind, probe in probes.items()}
        assert paths == {"startup": "/startupz", "readiness": "/readyz", "liveness": "/healthz"}
        for probe in probes.values():
            assert probe.periodSeconds == 10
            assert probe.timeoutSeconds == 5
            assert probe.httpGet.port == 8000
            assert probe.httpGet.scheme is None

    def test_startup_threshold_from_start_delay(self, make_cluster):
        container = postgres_container(make_cluster(startDelay=30))

        assert container.startupProbe.failureThreshold == 3

    def test_startup_threshold_default_start_delay(self, cluster):
        container = postgres_container(cluster)

        assert container.startupProbe.failureThreshold == 360

    def test_readiness_and_liveness_thresholds_unset(self, cluster):
        container = postgres_container(cluster)

        assert container.readinessProbe.failureThreshold is None
        assert container.livenessProbe.failureThreshold is None

    def test_liveness_threshold_from_timeout(self, make_cluster):
        container = postgres_container(make_cluster(livenessProbeTimeout=31))

        assert container.livenessProbe.failureThreshold == 4


class TestSecureTransport:
    def test_tls_switches_all_probes(self, cluster):
        container = postgres_container(cluster, enable_https=True)

        assert container.startupProbe.httpGet.scheme == URIScheme.HTTPS
        assert container.readinessProbe.httpGet.scheme == URIScheme.HTTPS
        assert container.livenessProbe.httpGet.scheme == URIScheme.HTTPS
        assert container.command.count(STATUS_PORT_TLS_FLAG) == 1
        assert METRICS_PORT_TLS_FLAG not in container.command

    def test_metrics_tls_is_independent(self, make_cluster):
        cluster = make_cluster(monitoring={"tls": {"enabled": True}})
        container = postgres_container(cluster, enable_https=False)

        assert container.command.count(METRICS_PORT_TLS_FLAG) == 1
        assert STATUS_PORT_TLS_FLAG not in container.command
        assert container.startupProbe.httpGet.scheme is None

    def test_both_flags(self, make_cluster):
        cluster = make_cluster(monitoring={"tls": {"enabled": True}})
        container = postgres_container(cluster, enable_https=True)

        assert container.command[:3] == ["/controller/manager", "instance", "run"]
        assert container.command.count(STATUS_PORT_TLS_FLAG) == 1
        assert container.command.count(METRICS_PORT_TLS_FLAG) == 1


class TestProbeOverrides:
    def test_partial_liveness_override(self, make_cluster):
        cluster = make_cluster(probes={"liveness": {"periodSeconds": 3}})
        container = postgres_container(cluster)

        assert container.livenessProbe.periodSeconds == 3
        assert container.livenessProbe.timeoutSeconds == 5
        assert container.livenessProbe.failureThreshold is None
        assert container.livenessProbe.httpGet.path == "/healthz"

    def test_override_does_not_touch_other_probes(self, make_cluster):
        cluster = make_cluster(probes={"readiness": {"timeoutSeconds": 9}})
        container = postgres_container(cluster)

        assert container.readinessProbe.timeoutSeconds == 9
        assert container.livenessProbe.timeoutSeconds == 5
        assert container.startupProbe.timeoutSeconds == 5

    def test_zero_threshold_override_is_resolved(self, make_cluster):
        cluster = make_cluster(startDelay=30, probes={"startup": {"failureThreshold": 0}})
        container = postgres_container(cluster)

        assert container.startupProbe.failureThreshold == 3

    def test_startup_period_override_feeds_threshold(self, make_cluster):
        cluster = make_cluster(startDelay=60, probes={"startup": {"periodSeconds": 20}})
        container = postgres_container(cluster)

        assert container.startupProbe.periodSeconds == 20
        assert container.startupProbe.failureThreshold == 3

    def test_explicit_threshold_wins(self, make_cluster):
        cluster = make_cluster(
            startDelay=600,
            livenessProbeTimeout=100,
            probes={
                "startup": {"failureThreshold": 7},
                "liveness": {"failureThreshold": 2},
            },
        )
        container = postgres_container(cluster)

        assert container.startupProbe.failureThreshold == 7
        assert container.livenessProbe.failureThreshold == 2

    def test_liveness_timeout_uses_overridden_period(self, make_cluster):
        cluster = make_cluster(livenessProbeTimeout=30, probes={"liveness": {"periodSeconds": 5}})
        container = postgres_container(cluster)

        assert container.livenessProbe.failureThreshold == 6

    def test_log_level_flag(self, make_cluster):
        container = postgres_container(make_cluster(logLevel="debug"))

        assert container.command[-1] == "--log-level=debug"
