"""Enforced limit payloads."""

from dataclasses import dataclass
from typing import Dict, Generic, TypeVar

K = TypeVar("K")


@dataclass(frozen=True)
class EnforcedLimitParams(Generic[K]):
    """``kind`` is a :class:`VirtualHostLimitTarget` or :class:`UserLimitTarget`; -1 lifts the limit."""
    kind: K
    value: int

    def to_body(self) -> Dict[str, int]:
        return {"value": self.value}
