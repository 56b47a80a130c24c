"""Shovel status responses."""

from typing import Optional

from ..commons import OpenEnum, open_enum
from .base import ApiModel


class ShovelType(OpenEnum):
    DYNAMIC = "dynamic"
    STATIC = "static"


class ShovelState(OpenEnum):
    STARTING = "starting"
    RUNNING = "running"
    TERMINATED = "terminated"
    UNKNOWN_STATE = "unknown"


class Shovel(ApiModel):
    node: str
    name: str
    vhost: Optional[str] = None
    type: open_enum(ShovelType) = ShovelType.DYNAMIC
    state: open_enum(ShovelState) = ShovelState.UNKNOWN_STATE
    src_uri: Optional[str] = None
    dest_uri: Optional[str] = None
    src_queue: Optional[str] = None
    dest_queue: Optional[str] = None
    src_address: Optional[str] = None
    dest_address: Optional[str] = None
    src_protocol: Optional[str] = None
    dest_protocol: Optional[str] = None
