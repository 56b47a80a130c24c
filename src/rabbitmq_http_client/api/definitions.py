"""Definition export and import."""

from typing import Any, Dict, Union

from ..paths import path
from ..responses.definitions import ClusterDefinitionSet, VirtualHostDefinitionSet
from .base import ApiBase, model

DefinitionsBody = Union[Dict[str, Any], ClusterDefinitionSet, VirtualHostDefinitionSet]


def _document(definitions: DefinitionsBody) -> Dict[str, Any]:
    if isinstance(definitions, (ClusterDefinitionSet, VirtualHostDefinitionSet)):
        return definitions.to_dict()
    return dict(definitions)


class DefinitionsApi(ApiBase):

    def export_cluster_wide_definitions(self):
        """The cluster-wide definitions document, as JSON text."""
        return self.export_cluster_wide_definitions_as_string()

    def export_cluster_wide_definitions_as_string(self):
        return self._get("definitions", raw=True)

    def export_cluster_wide_definitions_as_data(self):
        return self._get("definitions", model(ClusterDefinitionSet))

    def export_vhost_definitions(self, vhost: str):
        return self.export_vhost_definitions_as_string(vhost)

    def export_vhost_definitions_as_string(self, vhost: str):
        return self._get(path("definitions", vhost), raw=True)

    def export_vhost_definitions_as_data(self, vhost: str):
        return self._get(path("definitions", vhost), model(VirtualHostDefinitionSet))

    def import_definitions(self, definitions: DefinitionsBody):
        return self.import_cluster_wide_definitions(definitions)

    def import_cluster_wide_definitions(self, definitions: DefinitionsBody):
        return self._post("definitions", _document(definitions))

    def import_vhost_definitions(self, vhost: str, definitions: DefinitionsBody):
        return self._post(path("definitions", vhost), _document(definitions))
