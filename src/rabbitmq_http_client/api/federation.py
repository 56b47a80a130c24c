"""Federation upstreams and links."""

from typing import List

from ..params.federation import FEDERATION_UPSTREAM_COMPONENT, FederationUpstreamParams
from ..paths import path
from ..responses.federation import FederationLink, FederationUpstream
from ..responses.parameters import RuntimeParameter
from .base import ApiBase, model, model_list, then


def _upstreams(params: List[RuntimeParameter]) -> List[FederationUpstream]:
    return [FederationUpstream.from_runtime_parameter(p) for p in params]


class FederationApi(ApiBase):

    def list_federation_upstreams(self):
        """
        Upstreams are runtime parameters of the ``federation-upstream``
        component; each one is converted to a :class:`FederationUpstream`.

        Raises:
            ConversionError: a parameter value has no ``uri``
        """
        return self._get(path("parameters", FEDERATION_UPSTREAM_COMPONENT),
                         then(model_list(RuntimeParameter), _upstreams))

    def get_federation_upstream(self, vhost: str, name: str):
        return self._get(path("parameters", FEDERATION_UPSTREAM_COMPONENT, vhost, name),
                         then(model(RuntimeParameter), FederationUpstream.from_runtime_parameter))

    def declare_federation_upstream(self, params: FederationUpstreamParams):
        return self.upsert_runtime_parameter(params.to_runtime_parameter())

    def delete_federation_upstream(self, vhost: str, name: str, idempotently: bool = False):
        return self.clear_runtime_parameter(FEDERATION_UPSTREAM_COMPONENT, vhost, name, idempotently)

    def list_federation_links(self):
        return self._get("federation-links", model_list(FederationLink))
