"""
Policy responses and policy matching.

A policy applies to an object when its ``apply-to`` covers the object's
kind, both live in the same virtual host, and the pattern matches the
object name. Patterns use :func:`re.search` semantics, so they match
anywhere in the name unless anchored; an invalid pattern matches nothing.
"""

import re
from functools import lru_cache
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from pydantic import Field, RootModel

from ..commons import PolicyTarget, open_enum
from .base import ApiModel

CMQ_KEYS: Tuple[str, ...] = (
    "ha-mode",
    "ha-params",
    "ha-promote-on-shutdown",
    "ha-promote-on-failure",
    "ha-sync-mode",
    "ha-sync-batch-size",
)

QUORUM_QUEUE_INCOMPATIBLE_KEYS: Tuple[str, ...] = CMQ_KEYS + ("queue-mode",)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional["re.Pattern[str]"]:
    try:
        return re.compile(pattern)
    except re.error:
        return None


def pattern_matches(pattern: str, name: str) -> bool:
    compiled = _compile(pattern)
    return compiled is not None and compiled.search(name) is not None


class PolicyDefinition(RootModel[Optional[Dict[str, Any]]]):
    """Key-value map of a policy. An absent map and an empty one are both empty."""

    root: Optional[Dict[str, Any]] = None

    CMQ_KEYS: ClassVar[Tuple[str, ...]] = CMQ_KEYS
    QUORUM_QUEUE_INCOMPATIBLE_KEYS: ClassVar[Tuple[str, ...]] = QUORUM_QUEUE_INCOMPATIBLE_KEYS

    def __len__(self) -> int:
        return len(self.root or {})

    def __contains__(self, key: str) -> bool:
        return key in (self.root or {})

    def __getitem__(self, key: str) -> Any:
        return (self.root or {})[key]

    def is_empty(self) -> bool:
        return not self.root

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.root or {})

    def keys(self) -> List[str]:
        return list((self.root or {}).keys())

    def get(self, key: str, default: Any = None) -> Any:
        return (self.root or {}).get(key, default)

    def insert(self, key: str, value: Any) -> Optional[Any]:
        if self.root is None:
            self.root = {}
        previous = self.root.get(key)
        self.root[key] = value
        return previous

    def remove(self, key: str) -> Optional[Any]:
        if self.root is None:
            return None
        return self.root.pop(key, None)

    def merge(self, other: "PolicyDefinition") -> None:
        if other.root is None:
            return
        if self.root is None:
            self.root = dict(other.root)
        else:
            self.root.update(other.root)

    def contains_any_keys_of(self, keys: Iterable[str]) -> bool:
        current = self.root or {}
        return any(key in current for key in keys)

    def has_cmq_keys(self) -> bool:
        return self.contains_any_keys_of(CMQ_KEYS)

    def has_quorum_queue_incompatible_keys(self) -> bool:
        return self.contains_any_keys_of(QUORUM_QUEUE_INCOMPATIBLE_KEYS)

    def without_keys(self, keys: Iterable[str]) -> "PolicyDefinition":
        if self.root is None:
            return PolicyDefinition(None)
        excluded = set(keys)
        return PolicyDefinition({k: v for k, v in self.root.items() if k not in excluded})

    def without_cmq_keys(self) -> "PolicyDefinition":
        return self.without_keys(CMQ_KEYS)

    def without_quorum_queue_incompatible_keys(self) -> "PolicyDefinition":
        return self.without_keys(QUORUM_QUEUE_INCOMPATIBLE_KEYS)

    def compare_and_swap_string_argument(self, key: str, value: str, new_value: str) -> "PolicyDefinition":
        if self.get(key) == value:
            self.insert(key, new_value)
        return self


class _PolicyDefinitionOps:
    """Key lookups shared by both policy shapes; the host model declares ``definition``."""

    def contains_any_keys_of(self, keys: Iterable[str]) -> bool:
        return self.definition.contains_any_keys_of(keys)

    def has_cmq_keys(self) -> bool:
        return self.definition.has_cmq_keys()

    def has_quorum_queue_incompatible_keys(self) -> bool:
        return self.definition.has_quorum_queue_incompatible_keys()

    def is_empty(self) -> bool:
        return self.definition.is_empty()

    def definition_keys(self) -> List[str]:
        return self.definition.keys()

    def insert_definition_key(self, key: str, value: Any) -> Optional[Any]:
        return self.definition.insert(key, value)

    def without_keys(self, keys: Iterable[str]):
        return self.model_copy(update={"definition": self.definition.without_keys(keys)})

    def without_cmq_keys(self):
        return self.without_keys(CMQ_KEYS)

    def without_quorum_queue_incompatible_keys(self):
        return self.without_keys(QUORUM_QUEUE_INCOMPATIBLE_KEYS)


class Policy(_PolicyDefinitionOps, ApiModel):
    name: str
    vhost: str
    pattern: str
    apply_to: open_enum(PolicyTarget) = Field(default=PolicyTarget.ALL, alias="apply-to")
    priority: int = 0
    definition: PolicyDefinition = Field(default_factory=PolicyDefinition)

    @staticmethod
    def is_a_name_match(pattern: str, apply_to: PolicyTarget, name: str, target: PolicyTarget) -> bool:
        return PolicyTarget(apply_to).does_apply_to(target) and pattern_matches(pattern, name)

    @staticmethod
    def is_a_full_match(vhost_a: str, pattern: str, apply_to: PolicyTarget,
                        vhost_b: str, name: str, target: PolicyTarget) -> bool:
        return vhost_a == vhost_b and Policy.is_a_name_match(pattern, apply_to, name, target)

    def does_match_name(self, vhost: str, name: str, target: PolicyTarget) -> bool:
        return Policy.is_a_full_match(self.vhost, self.pattern, self.apply_to, vhost, name, target)

    def does_match_object(self, obj) -> bool:
        """``obj`` needs ``vhost``, ``name`` and ``policy_target``."""
        return self.does_match_name(obj.vhost, obj.name, obj.policy_target)

    def with_overrides(self, name: str, priority: int, overrides: PolicyDefinition) -> "Policy":
        definition = PolicyDefinition(self.definition.root and dict(self.definition.root))
        definition.merge(overrides)
        return self.model_copy(update={"name": name, "priority": priority, "definition": definition})


class PolicyWithoutVirtualHost(_PolicyDefinitionOps, ApiModel):
    name: str
    pattern: str
    apply_to: open_enum(PolicyTarget) = Field(default=PolicyTarget.ALL, alias="apply-to")
    priority: int = 0
    definition: PolicyDefinition = Field(default_factory=PolicyDefinition)

    def does_match(self, name: str, target: PolicyTarget) -> bool:
        return Policy.is_a_name_match(self.pattern, self.apply_to, name, target)
