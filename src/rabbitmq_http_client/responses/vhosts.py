"""Virtual host responses."""

from typing import Any, Dict, Optional

from pydantic import Field

from .base import ApiModel, TagList


class VirtualHostMetadata(ApiModel):
    tags: Optional[TagList] = None
    description: Optional[str] = None
    default_queue_type: Optional[str] = None


class VirtualHost(ApiModel):
    name: str
    tags: Optional[TagList] = None
    description: Optional[str] = None
    default_queue_type: Optional[str] = None
    metadata: Optional[VirtualHostMetadata] = None
    protected_from_deletion: Optional[bool] = None


class VirtualHostLimits(ApiModel):
    vhost: str
    limits: Dict[str, Any] = Field(default_factory=dict, alias="value")
