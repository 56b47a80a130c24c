"""Runtime parameter payloads."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class RuntimeParameterDefinition:
    """A runtime parameter of a plugin component, e.g. ``federation-upstream`` or ``shovel``."""
    name: str
    vhost: str
    component: str
    value: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_runtime_parameter(cls, param) -> "RuntimeParameterDefinition":
        return cls(param.name, param.vhost, param.component, dict(param.value))

    def to_body(self) -> Dict[str, Any]:
        return {"name": self.name, "vhost": self.vhost, "component": self.component, "value": self.value}


@dataclass
class GlobalRuntimeParameterDefinition:
    name: str
    value: Any = None

    def to_body(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}
