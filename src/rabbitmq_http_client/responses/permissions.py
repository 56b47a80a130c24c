"""Permission responses."""

from .base import ApiModel


class Permissions(ApiModel):
    user: str
    vhost: str
    configure: str
    read: str
    write: str

    def with_username(self, username: str) -> "Permissions":
        return self.model_copy(update={"user": username})


class TopicPermission(ApiModel):
    user: str
    vhost: str
    exchange: str
    read: str
    write: str
