"""
Transformations of exported definition sets.

A transformer mutates a :class:`ClusterDefinitionSet` in place and returns
it. :class:`TransformationChain` applies transformers left to right, so the
order matters: ``DropEmptyPolicies`` only drops what earlier steps emptied.

Example:
    >>> chain = TransformationChain.from_names(["strip_cmq_keys_from_policies", "drop_empty_policies"])
    >>> defs = chain.apply(client.export_cluster_wide_definitions())
    >>> client.import_cluster_wide_definitions(defs)
"""

import logging
import secrets
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Type

from .commons import QueueType
from .password_hashing import HashingAlgorithm, hash_password
from .responses.definitions import ClusterDefinitionSet

logger = logging.getLogger(__name__)

OBFUSCATED_USERNAME_PREFIX = "obfuscated-user-"


class DefinitionSetTransformer(ABC):
    """
    Base class for transformers.

    Attributes:
        name: Snake-case name used by :meth:`TransformationChain.from_names`
    """

    name: str = ""

    @abstractmethod
    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        """Mutate ``defs`` and return it."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NoOp(DefinitionSetTransformer):
    name = "no_op"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        return defs


class StripCmqKeysFromPolicies(DefinitionSetTransformer):
    """
    Removes classic mirrored queue keys (``ha-mode``, ``ha-params``...) from
    every policy, then declares every queue matched by a policy as a quorum
    queue.
    """

    name = "strip_cmq_keys_from_policies"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        policies = defs.update_policies(lambda p: p.without_cmq_keys())
        for policy in policies:
            defs.update_queue_type_of_matching(policy, QueueType.QUORUM)
        return defs


class DropEmptyPolicies(DefinitionSetTransformer):
    name = "drop_empty_policies"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        defs.policies = [p for p in defs.policies if not p.definition.is_empty()]
        return defs


class ObfuscateUsernames(DefinitionSetTransformer):
    """
    Renames users to ``obfuscated-user-1``, ``obfuscated-user-2``... in list
    order and gives each one a fresh random password. Permissions follow
    the renames.
    """

    name = "obfuscate_usernames"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        renames: Dict[str, str] = {}
        users = []
        for index, user in enumerate(defs.users, start=1):
            new_name = f"{OBFUSCATED_USERNAME_PREFIX}{index}"
            renames[user.name] = new_name
            password_hash = hash_password(secrets.token_urlsafe(24), HashingAlgorithm.SHA256)
            users.append(user.model_copy(update={
                "name": new_name,
                "password_hash": password_hash,
                "hashing_algorithm": HashingAlgorithm.SHA256.value,
            }))
        defs.users = users
        defs.permissions = [
            p.with_username(renames[p.user]) if p.user in renames else p
            for p in defs.permissions
        ]
        logger.debug("Obfuscated usernames", extra={"user_count": len(users)})
        return defs


class ExcludeUsers(DefinitionSetTransformer):
    name = "exclude_users"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        defs.users = []
        return defs


class ExcludePermissions(DefinitionSetTransformer):
    name = "exclude_permissions"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        defs.permissions = []
        return defs


class ExcludeRuntimeParameters(DefinitionSetTransformer):
    name = "exclude_runtime_parameters"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        defs.parameters = []
        return defs


class ExcludePolicies(DefinitionSetTransformer):
    name = "exclude_policies"

    def transform(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        defs.policies = []
        return defs


_TRANSFORMERS: List[Type[DefinitionSetTransformer]] = [
    NoOp,
    StripCmqKeysFromPolicies,
    DropEmptyPolicies,
    ObfuscateUsernames,
    ExcludeUsers,
    ExcludePermissions,
    ExcludeRuntimeParameters,
    ExcludePolicies,
]

# Both "strip_cmq_keys_from_policies" and "StripCmqKeysFromPolicies" resolve
_REGISTRY: Dict[str, Type[DefinitionSetTransformer]] = {}
for _cls in _TRANSFORMERS:
    _REGISTRY[_cls.name] = _cls
    _REGISTRY[_cls.__name__] = _cls


def transformer_names() -> List[str]:
    """Snake-case names accepted by :meth:`TransformationChain.from_names`."""
    return [cls.name for cls in _TRANSFORMERS]


class TransformationChain:
    """Ordered list of transformers."""

    def __init__(self, transformers: Iterable[DefinitionSetTransformer] = ()):
        self.chain: List[DefinitionSetTransformer] = list(transformers)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "TransformationChain":
        """
        Build a chain from transformer names.

        Raises:
            ValueError: a name is not a known transformer
        """
        transformers = []
        for name in names:
            transformer_cls = _REGISTRY.get(name.strip())
            if transformer_cls is None:
                raise ValueError(
                    f"Unknown transformer: {name!r}. Known transformers: {', '.join(transformer_names())}"
                )
            transformers.append(transformer_cls())
        return cls(transformers)

    def apply(self, defs: ClusterDefinitionSet) -> ClusterDefinitionSet:
        for transformer in self.chain:
            logger.debug("Applying transformer", extra={"transformer": transformer.name})
            defs = transformer.transform(defs)
        return defs

    def __len__(self) -> int:
        return len(self.chain)

    def __repr__(self) -> str:
        return f"TransformationChain({self.chain!r})"
