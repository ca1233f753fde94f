"""User and permission models."""

from dataclasses import dataclass, field
from typing import Any

from ..versions import Capability, supports


def split_tags(value: Any) -> list[str]:
    """Normalise tags given as a comma-separated string or a list."""
    if not value:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return [str(t) for t in value]


@dataclass(slots=True)
class UserInfo:
    """A user account.

    Attributes:
        name: User name.
        password_hash: Base64 password hash; empty for passwordless users.
        hashing_algorithm: Hash function name. Only reported by 3.6+
            brokers; None otherwise.
        tags: Management tags, e.g. ``["administrator"]``.
    """

    name: str
    password_hash: str = ""
    hashing_algorithm: str | None = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], server_version: str | None = None) -> "UserInfo":
        user = cls(
            name=data["name"],
            password_hash=data.get("password_hash", ""),
            tags=split_tags(data.get("tags")),
        )
        if supports(server_version, Capability.PASSWORD_HASHING_ALGORITHM):
            user.hashing_algorithm = data.get("hashing_algorithm")
        return user


@dataclass(slots=True)
class CurrentUserDetails:
    """The authenticated user, from GET /api/whoami."""

    name: str
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurrentUserDetails":
        return cls(name=data["name"], tags=split_tags(data.get("tags")))


@dataclass(slots=True)
class UserPermissions:
    """Configure/write/read regexes for a user in a vhost."""

    user: str | None = None
    vhost: str | None = None
    configure: str = ""
    write: str = ""
    read: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserPermissions":
        return cls(
            user=data.get("user"),
            vhost=data.get("vhost"),
            configure=data.get("configure", ""),
            write=data.get("write", ""),
            read=data.get("read", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"configure": self.configure, "write": self.write, "read": self.read}


@dataclass(slots=True)
class TopicPermissions:
    """Topic authorisation regexes for a user on one exchange."""

    exchange: str
    user: str | None = None
    vhost: str | None = None
    write: str = ""
    read: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TopicPermissions":
        return cls(
            exchange=data.get("exchange", ""),
            user=data.get("user"),
            vhost=data.get("vhost"),
            write=data.get("write", ""),
            read=data.get("read", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"exchange": self.exchange, "write": self.write, "read": self.read}
