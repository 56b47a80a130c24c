"""Policy payloads (user and operator policies share the format)."""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..commons import PolicyTarget


@dataclass(frozen=True)
class PolicyParams:
    vhost: str
    name: str
    pattern: str
    apply_to: PolicyTarget = PolicyTarget.ALL
    priority: int = 0
    definition: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_policy(cls, policy) -> "PolicyParams":
        return cls(
            vhost=policy.vhost,
            name=policy.name,
            pattern=policy.pattern,
            apply_to=policy.apply_to,
            priority=policy.priority,
            definition=dict(policy.definition.as_dict()),
        )

    def to_body(self) -> Dict[str, Any]:
        return {
            "vhost": self.vhost,
            "name": self.name,
            "pattern": self.pattern,
            "apply-to": PolicyTarget(self.apply_to).value,
            "priority": self.priority,
            "definition": self.definition,
        }
