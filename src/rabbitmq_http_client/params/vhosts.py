"""Virtual host payloads."""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..commons import QueueType


@dataclass(frozen=True)
class VirtualHostParams:
    name: str
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    default_queue_type: Optional[QueueType] = None
    tracing: bool = False

    @classmethod
    def named(cls, name: str) -> "VirtualHostParams":
        return cls(name=name)

    @classmethod
    def from_vhost(cls, vhost) -> "VirtualHostParams":
        return cls(
            name=vhost.name,
            description=vhost.description,
            tags=list(vhost.tags) if vhost.tags is not None else None,
            default_queue_type=QueueType(vhost.default_queue_type) if vhost.default_queue_type else None,
        )

    def with_description(self, description: str) -> "VirtualHostParams":
        return replace(self, description=description)

    def with_tags(self, tags: List[str]) -> "VirtualHostParams":
        return replace(self, tags=list(tags))

    def with_default_queue_type(self, queue_type: QueueType) -> "VirtualHostParams":
        return replace(self, default_queue_type=QueueType(queue_type))

    def with_tracing(self, enabled: bool = True) -> "VirtualHostParams":
        return replace(self, tracing=enabled)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"tracing": self.tracing}
        if self.description is not None:
            body["description"] = self.description
        if self.tags is not None:
            body["tags"] = self.tags
        if self.default_queue_type is not None:
            body["default_queue_type"] = self.default_queue_type.value
        return body
