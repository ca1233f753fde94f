"""Virtual host and vhost limit models."""

from dataclasses import dataclass
from typing import Any

from ..versions import Capability, supports
from .stats import MessageStats
from .users import split_tags


@dataclass(slots=True)
class VhostInfo:
    """A virtual host.

    ``cluster_state`` needs a 3.7+ broker; ``description``, ``tags`` and
    ``default_queue_type`` need 3.8+. They stay None on older brokers even
    if the body happens to carry them.
    """

    name: str
    tracing: bool = False
    messages: int = 0
    messages_ready: int = 0
    messages_unacknowledged: int = 0
    message_stats: MessageStats | None = None
    cluster_state: dict[str, str] | None = None
    description: str | None = None
    tags: list[str] | None = None
    default_queue_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], server_version: str | None = None) -> "VhostInfo":
        vhost = cls(
            name=data["name"],
            tracing=bool(data.get("tracing", False)),
            messages=int(data.get("messages") or 0),
            messages_ready=int(data.get("messages_ready") or 0),
            messages_unacknowledged=int(data.get("messages_unacknowledged") or 0),
            message_stats=MessageStats.from_dict(data.get("message_stats")),
        )
        if supports(server_version, Capability.VHOST_CLUSTER_STATE):
            vhost.cluster_state = dict(data.get("cluster_state") or {})
        if supports(server_version, Capability.VHOST_METADATA):
            metadata = data.get("metadata") or {}
            vhost.description = data.get("description", metadata.get("description", ""))
            vhost.tags = split_tags(data.get("tags", metadata.get("tags")))
            vhost.default_queue_type = data.get(
                "default_queue_type", metadata.get("default_queue_type")
            )
        return vhost


@dataclass(slots=True)
class VhostLimits:
    """Limits set on a vhost. ``-1`` means unlimited."""

    vhost: str
    max_queues: int = -1
    max_connections: int = -1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VhostLimits":
        value = data.get("value") or {}
        return cls(
            vhost=data["vhost"],
            max_queues=int(value.get("max-queues", -1)),
            max_connections=int(value.get("max-connections", -1)),
        )
