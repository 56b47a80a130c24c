"""User responses."""

from typing import Any, Dict, Optional

from pydantic import Field

from .base import ApiModel, TagList


class User(ApiModel):
    name: str
    tags: TagList = []
    password_hash: str = ""
    hashing_algorithm: Optional[str] = None

    def with_name(self, name: str) -> "User":
        return self.model_copy(update={"name": name})

    def with_tags(self, tags) -> "User":
        return self.model_copy(update={"tags": list(tags)})

    def with_password_hash(self, password_hash: str) -> "User":
        return self.model_copy(update={"password_hash": password_hash})


class CurrentUser(ApiModel):
    name: str
    tags: TagList = []


class UserLimits(ApiModel):
    username: str = Field(alias="user")
    limits: Dict[str, Any] = Field(default_factory=dict, alias="value")
