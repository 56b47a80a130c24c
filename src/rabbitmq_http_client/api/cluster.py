"""Overview, cluster identity, cluster tags and nodes."""

from typing import Any, Dict, Mapping

from ..paths import path
from ..responses.cluster import ClusterIdentity, ClusterNode, NodeMemoryFootprint, Overview
from ..responses.parameters import GlobalRuntimeParameter
from .base import ApiBase, model, model_list, then

CLUSTER_TAGS_PARAMETER = "cluster_tags"


def _tags_of(parameter: GlobalRuntimeParameter) -> Dict[str, Any]:
    return dict(parameter.value) if isinstance(parameter.value, dict) else {}


class ClusterApi(ApiBase):

    def overview(self):
        return self._get("overview", model(Overview))

    def server_version(self):
        """Broker version as reported by ``GET overview``."""
        return self._get("overview", then(model(Overview), lambda o: o.server_version))

    def get_cluster_name(self):
        return self._get("cluster-name", model(ClusterIdentity))

    def set_cluster_name(self, name: str):
        return self._put("cluster-name", {"name": name})

    def get_cluster_tags(self):
        """
        Cluster tags are stored in the ``cluster_tags`` global runtime
        parameter; returns its value as a dict.
        """
        return self._get(path("global-parameters", CLUSTER_TAGS_PARAMETER),
                         then(model(GlobalRuntimeParameter), _tags_of))

    def set_cluster_tags(self, tags: Mapping[str, Any]):
        return self._put(path("global-parameters", CLUSTER_TAGS_PARAMETER),
                         {"name": CLUSTER_TAGS_PARAMETER, "value": dict(tags)})

    def clear_cluster_tags(self):
        return self._delete(path("global-parameters", CLUSTER_TAGS_PARAMETER), idempotently=True)

    def list_nodes(self):
        return self._get("nodes", model_list(ClusterNode))

    def get_node_info(self, name: str):
        return self._get(path("nodes", name), model(ClusterNode))

    def get_node_memory_footprint(self, name: str):
        return self._get(path("nodes", name, "memory"), model(NodeMemoryFootprint))
