"""User payloads."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..password_hashing import HashingAlgorithm


@dataclass(frozen=True)
class UserParams:
    """
    Body of ``PUT users/{name}``.

    ``tags`` is a comma-separated string, e.g. ``"administrator,monitoring"``.
    """
    name: str
    password_hash: str
    tags: Union[str, List[str]] = ""
    hashing_algorithm: Optional[HashingAlgorithm] = None

    def to_body(self) -> Dict[str, Any]:
        tags = self.tags if isinstance(self.tags, str) else ",".join(self.tags)
        body: Dict[str, Any] = {"password_hash": self.password_hash, "tags": tags}
        if self.hashing_algorithm is not None:
            body["hashing_algorithm"] = HashingAlgorithm(self.hashing_algorithm).value
        return body


@dataclass(frozen=True)
class BulkUserDelete:
    usernames: List[str] = field(default_factory=list)

    def to_body(self) -> Dict[str, Any]:
        return {"users": list(self.usernames)}
