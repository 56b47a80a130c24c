"""Shared pieces of the response models."""

from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict

T = TypeVar("T")


class ApiModel(BaseModel):
    """
    Base for API responses.

    Unknown keys are kept (``extra="allow"``): the broker adds fields across
    releases and plugins. Fields can be populated by their Python name or
    by the wire alias.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)


def _empty_object_as_none(value: Any) -> Any:
    if isinstance(value, dict) and not value:
        return None
    return value


def _comma_separated(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


# The broker serializes absent nested objects as ``{}``
PossiblyEmpty = Annotated[Optional[T], BeforeValidator(_empty_object_as_none)]

# Older releases serialize tags as "a,b", newer ones as ["a", "b"]
TagList = Annotated[List[str], BeforeValidator(_comma_separated)]


class PaginatedResponse(ApiModel, Generic[T]):
    filtered_count: int = 0
    item_count: int = 0
    items: List[T] = []
    page: int = 1
    page_count: int = 0
    page_size: int = 0
    total_count: int = 0
