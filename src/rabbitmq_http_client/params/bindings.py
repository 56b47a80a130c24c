"""Binding payloads."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..commons import BindingDestinationType


def binding_body(routing_key: Optional[str] = None,
                 arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Body of a binding POST; unset fields are omitted."""
    body: Dict[str, Any] = {}
    if routing_key is not None:
        body["routing_key"] = routing_key
    if arguments is not None:
        body["arguments"] = arguments
    return body


@dataclass(frozen=True)
class BindingDeletionParams:
    """
    Identifies a binding by its declared fields.

    The broker addresses bindings by an opaque properties key, so deletion
    lists the candidates and filters on ``source``, ``routing_key`` and
    ``arguments`` (None is the same as ``{}``).
    """
    virtual_host: str
    source: str
    destination: str
    destination_type: BindingDestinationType
    routing_key: str = ""
    arguments: Optional[Dict[str, Any]] = None

    def matches(self, binding) -> bool:
        return (
            binding.source == self.source
            and binding.routing_key == self.routing_key
            and _as_dict(binding.arguments) == _as_dict(self.arguments)
        )


def _as_dict(arguments: Any) -> Dict[str, Any]:
    # decoded bindings carry XArguments, a RootModel over the dict
    return dict(getattr(arguments, "root", arguments) or {})
