"""
Failure details returned by the ``health/checks/...`` endpoints.

An unhealthy node answers with 503 and a JSON body whose shape depends on
the check. The shapes are not tagged, so :func:`decode_failure_details`
tries them in order and keeps the first that validates. Every variant
exposes ``reason``.
"""

import logging
from typing import Any, List, Union

from pydantic import Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from .base import ApiModel

logger = logging.getLogger(__name__)


class ResourceAlarm(ApiModel):
    node: str
    resource: str


class ClusterAlarmCheckDetails(ApiModel):
    reason: str
    alarms: List[ResourceAlarm]


class QuorumEndangeredQueue(ApiModel):
    name: str
    readable_name: str = ""
    vhost: str = Field(alias="virtual_host")
    queue_type: str = Field(default="quorum", alias="type")


class QuorumCriticalityCheckDetails(ApiModel):
    reason: str
    queues: List[QuorumEndangeredQueue]


class NoActivePortListenerDetails(ApiModel):
    status: str
    reason: str
    inactive_port: StrictInt = Field(alias="missing")


class NoActiveProtocolListenerDetailsPre41(ApiModel):
    """Pre-4.1 nodes report a single missing protocol as a string."""
    status: str
    reason: str
    active_protocols: List[str] = Field(default_factory=list, alias="protocols")
    inactive_protocol: StrictStr = Field(alias="missing")


class NoActiveProtocolListenerDetails41AndLater(ApiModel):
    status: str
    reason: str
    active_protocols: List[str] = Field(default_factory=list, alias="protocols")
    inactive_protocols: List[str] = Field(alias="missing")


class GenericCheckFailureDetails(ApiModel):
    status: str = "failed"
    reason: str = ""


HealthCheckFailureDetails = Union[
    ClusterAlarmCheckDetails,
    QuorumCriticalityCheckDetails,
    NoActivePortListenerDetails,
    NoActiveProtocolListenerDetailsPre41,
    NoActiveProtocolListenerDetails41AndLater,
    GenericCheckFailureDetails,
]

_VARIANTS = HealthCheckFailureDetails.__args__


def decode_failure_details(body: Any):
    """
    Decode a parsed 503 body into the first variant that validates.

    Bodies that match none of the known shapes (including non-objects)
    become :class:`GenericCheckFailureDetails`.
    """
    if isinstance(body, dict):
        for variant in _VARIANTS:
            try:
                return TypeAdapter(variant).validate_python(body)
            except ValidationError:
                continue
    logger.debug("Unrecognised health check failure body", extra={"body": body})
    return GenericCheckFailureDetails(reason=str(body) if body is not None else "")
