"""
Policies and operator policies.

Both kinds share the payload format and differ only in the path prefix,
so every operation exists twice: ``list_policies`` / ``list_operator_policies``
and so on. The bulk variants (``declare_policies``, ``delete_policies_in``)
are implemented by the clients since they issue several requests.
"""

from typing import List

from ..commons import PolicyTarget
from ..params.policies import PolicyParams
from ..paths import path
from ..responses.policies import Policy
from .base import ApiBase, model, model_list, then

POLICIES = "policies"
OPERATOR_POLICIES = "operator-policies"


def _for_target(target: PolicyTarget):
    target = PolicyTarget(target)

    def select(policies: List[Policy]) -> List[Policy]:
        return [p for p in policies if target.does_apply_to(p.apply_to)]
    return select


def _matching(vhost: str, name: str, target: PolicyTarget):
    target = PolicyTarget(target)

    def select(policies: List[Policy]) -> List[Policy]:
        matched = [p for p in policies if p.does_match_name(vhost, name, target)]
        # the broker applies the highest priority policy
        return sorted(matched, key=lambda p: p.priority, reverse=True)
    return select


class PoliciesApi(ApiBase):

    def _list_policies_under(self, prefix: str, vhost=None, decorate=None):
        decode = model_list(Policy)
        if decorate is not None:
            decode = then(decode, decorate)
        return self._get(prefix if vhost is None else path(prefix, vhost), decode)

    # Policies

    def list_policies(self):
        return self._list_policies_under(POLICIES)

    def list_policies_in(self, vhost: str):
        return self._list_policies_under(POLICIES, vhost)

    def list_policies_for_target(self, vhost: str, target: PolicyTarget):
        """
        Policies of ``vhost`` whose ``apply-to`` falls within ``target``:
        ``all`` returns every policy, ``queues`` the policies for any queue
        kind, other targets only the policies declared for exactly that target.
        """
        return self._list_policies_under(POLICIES, vhost, _for_target(target))

    def list_matching_policies(self, vhost: str, name: str, target: PolicyTarget):
        """Policies of ``vhost`` that match an object, highest priority first."""
        return self._list_policies_under(POLICIES, vhost, _matching(vhost, name, target))

    def get_policy(self, vhost: str, name: str):
        return self._get(path(POLICIES, vhost, name), model(Policy))

    def declare_policy(self, params: PolicyParams):
        return self._put(path(POLICIES, params.vhost, params.name), params.to_body())

    def delete_policy(self, vhost: str, name: str, idempotently: bool = False):
        return self._delete(path(POLICIES, vhost, name), idempotently)

    # Operator policies

    def list_operator_policies(self):
        return self._list_policies_under(OPERATOR_POLICIES)

    def list_operator_policies_in(self, vhost: str):
        return self._list_policies_under(OPERATOR_POLICIES, vhost)

    def list_operator_policies_for_target(self, vhost: str, target: PolicyTarget):
        return self._list_policies_under(OPERATOR_POLICIES, vhost, _for_target(target))

    def list_matching_operator_policies(self, vhost: str, name: str, target: PolicyTarget):
        return self._list_policies_under(OPERATOR_POLICIES, vhost, _matching(vhost, name, target))

    def get_operator_policy(self, vhost: str, name: str):
        return self._get(path(OPERATOR_POLICIES, vhost, name), model(Policy))

    def declare_operator_policy(self, params: PolicyParams):
        return self._put(path(OPERATOR_POLICIES, params.vhost, params.name), params.to_body())

    def delete_operator_policy(self, vhost: str, name: str, idempotently: bool = False):
        return self._delete(path(OPERATOR_POLICIES, vhost, name), idempotently)
