"""Runtime parameter responses."""

from typing import Annotated, Any, Dict

from pydantic import BeforeValidator

from .base import ApiModel


def _object_or_empty(value: Any) -> Any:
    # list-valued parameters (e.g. upstream sets) are not decoded into a map
    return value if isinstance(value, dict) else {}


RuntimeParameterValue = Annotated[Dict[str, Any], BeforeValidator(_object_or_empty)]


class RuntimeParameter(ApiModel):
    name: str
    vhost: str
    component: str
    value: RuntimeParameterValue = {}


class RuntimeParameterWithoutVirtualHost(ApiModel):
    name: str
    component: str
    value: RuntimeParameterValue = {}


class GlobalRuntimeParameter(ApiModel):
    name: str
    value: Any = None
