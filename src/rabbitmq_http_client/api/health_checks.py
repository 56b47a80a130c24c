"""
Health checks.

The broker answers a failing check with 503 and a body describing the
failure; the clients turn that into :class:`HealthCheckFailed` carrying the
decoded details. A passing check returns None.
"""

from ..commons import SupportedProtocol
from ..paths import path
from .base import ApiBase


class HealthChecksApi(ApiBase):

    def health_check_cluster_wide_alarms(self):
        return self._health_check(path("health", "checks", "alarms"))

    def health_check_local_alarms(self):
        return self._health_check(path("health", "checks", "local-alarms"))

    def health_check_if_node_is_quorum_critical(self):
        return self._health_check(path("health", "checks", "node-is-quorum-critical"))

    def health_check_port_listener(self, port: int):
        return self._health_check(path("health", "checks", "port-listener", port))

    def health_check_protocol_listener(self, protocol: SupportedProtocol):
        return self._health_check(path("health", "checks", "protocol-listener",
                                       SupportedProtocol(protocol).value))
