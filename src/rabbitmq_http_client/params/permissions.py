"""Permission payloads. Patterns are regular expressions matched against resource names."""

from dataclasses import dataclass
from typing import Dict

FULL_ACCESS = ".*"


@dataclass(frozen=True)
class Permissions:
    user: str
    vhost: str
    configure: str
    read: str
    write: str

    @classmethod
    def full(cls, user: str, vhost: str) -> "Permissions":
        return cls(user, vhost, FULL_ACCESS, FULL_ACCESS, FULL_ACCESS)

    def to_body(self) -> Dict[str, str]:
        return {"configure": self.configure, "read": self.read, "write": self.write}


@dataclass(frozen=True)
class TopicPermissions:
    user: str
    vhost: str
    exchange: str
    read: str
    write: str

    def to_body(self) -> Dict[str, str]:
        return {"exchange": self.exchange, "read": self.read, "write": self.write}
