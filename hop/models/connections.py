"""Connection, channel and consumer models.

These views are populated asynchronously by the broker's statistics
collector; see ``hop.polling`` for waiting until they appear.
"""

from dataclasses import dataclass, field
from typing import Any

from .stats import MessageStats


@dataclass(slots=True)
class ClientProperties:
    """Properties a client announced when connecting."""

    connection_name: str | None = None
    product: str | None = None
    platform: str | None = None
    version: str | None = None
    information: str | None = None
    capabilities: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ClientProperties":
        data = data or {}
        return cls(
            connection_name=data.get("connection_name"),
            product=data.get("product"),
            platform=data.get("platform"),
            version=data.get("version"),
            information=data.get("information"),
            capabilities=dict(data.get("capabilities") or {}),
        )


@dataclass(slots=True)
class ConnectionInfo:
    """A client connection."""

    name: str
    node: str | None = None
    vhost: str | None = None
    user: str | None = None
    state: str | None = None
    type: str | None = None
    protocol: str | None = None
    auth_mechanism: str | None = None
    host: str | None = None
    port: int = 0
    peer_host: str | None = None
    peer_port: int = 0
    uses_tls: bool = False
    channels: int = 0
    channel_max: int | None = None
    frame_max: int | None = None
    timeout: int | None = None
    connected_at: int | None = None
    client_properties: ClientProperties = field(default_factory=ClientProperties)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectionInfo":
        return cls(
            name=data["name"],
            node=data.get("node"),
            vhost=data.get("vhost"),
            user=data.get("user"),
            state=data.get("state"),
            type=data.get("type"),
            protocol=data.get("protocol"),
            auth_mechanism=data.get("auth_mechanism"),
            host=data.get("host"),
            port=int(data.get("port") or 0),
            peer_host=data.get("peer_host"),
            peer_port=int(data.get("peer_port") or 0),
            uses_tls=bool(data.get("ssl", False)),
            channels=int(data.get("channels") or 0),
            channel_max=data.get("channel_max"),
            frame_max=data.get("frame_max"),
            timeout=data.get("timeout"),
            connected_at=data.get("connected_at"),
            client_properties=ClientProperties.from_dict(data.get("client_properties")),
        )


@dataclass(slots=True)
class UserConnectionInfo:
    """A connection as listed under GET /api/connections/username/{name}."""

    name: str
    username: str
    node: str | None = None
    vhost: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserConnectionInfo":
        return cls(
            name=data["name"],
            username=data.get("user", ""),
            node=data.get("node"),
            vhost=data.get("vhost"),
        )


@dataclass(slots=True)
class ConnectionDetails:
    """Short connection reference embedded in a channel."""

    name: str | None = None
    peer_host: str | None = None
    peer_port: int = 0


@dataclass(slots=True)
class ChannelInfo:
    """A channel on a connection."""

    name: str
    number: int = 0
    node: str | None = None
    vhost: str | None = None
    user: str | None = None
    state: str | None = None
    consumer_count: int = 0
    prefetch_count: int = 0
    global_prefetch_count: int = 0
    messages_unacknowledged: int = 0
    messages_unconfirmed: int = 0
    uses_publisher_confirms: bool = False
    transactional: bool = False
    connection_details: ConnectionDetails | None = None
    message_stats: MessageStats | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChannelInfo":
        details = data.get("connection_details")
        return cls(
            name=data["name"],
            number=int(data.get("number", 0)),
            node=data.get("node"),
            vhost=data.get("vhost"),
            user=data.get("user"),
            state=data.get("state"),
            consumer_count=int(data.get("consumer_count", 0)),
            prefetch_count=int(data.get("prefetch_count", 0)),
            global_prefetch_count=int(data.get("global_prefetch_count", 0)),
            messages_unacknowledged=int(data.get("messages_unacknowledged", 0)),
            messages_unconfirmed=int(data.get("messages_unconfirmed", 0)),
            uses_publisher_confirms=bool(data.get("confirm", False)),
            transactional=bool(data.get("transactional", False)),
            connection_details=ConnectionDetails(
                name=details.get("name"),
                peer_host=details.get("peer_host"),
                peer_port=int(details.get("peer_port") or 0),
            ) if isinstance(details, dict) else None,
            message_stats=MessageStats.from_dict(data.get("message_stats")),
        )


@dataclass(slots=True)
class ChannelDetails:
    """Channel reference embedded in a consumer."""

    name: str | None = None
    connection_name: str | None = None
    node: str | None = None
    number: int = 0
    peer_host: str | None = None
    peer_port: int = 0
    user: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChannelDetails":
        return cls(
            name=data.get("name"),
            connection_name=data.get("connection_name"),
            node=data.get("node"),
            number=int(data.get("number") or 0),
            peer_host=data.get("peer_host"),
            peer_port=int(data.get("peer_port") or 0),
            user=data.get("user"),
        )


@dataclass(slots=True)
class QueueDetails:
    """Queue reference embedded in a consumer."""

    name: str
    vhost: str | None = None


@dataclass(slots=True)
class ConsumerDetails:
    """A consumer registered on a queue."""

    consumer_tag: str
    prefetch_count: int = 0
    exclusive: bool = False
    ack_required: bool = False
    active: bool = True
    activity_status: str | None = None
    consumer_timeout: int | None = None
    arguments: dict[str, Any] = field(default_factory=dict)
    channel_details: ChannelDetails | None = None
    queue: QueueDetails | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConsumerDetails":
        """Create ConsumerDetails from API response dict.

        ``active`` defaults to True for brokers that predate the field.
        """
        queue = data.get("queue")
        channel = data.get("channel_details")
        return cls(
            consumer_tag=data["consumer_tag"],
            prefetch_count=int(data.get("prefetch_count", 0)),
            exclusive=bool(data.get("exclusive", False)),
            ack_required=bool(data.get("ack_required", False)),
            active=bool(data.get("active", True)),
            activity_status=data.get("activity_status"),
            consumer_timeout=data.get("consumer_timeout"),
            arguments=dict(data.get("arguments") or {}),
            channel_details=ChannelDetails.from_dict(channel) if isinstance(channel, dict) else None,
            queue=QueueDetails(
                name=queue.get("name", ""), vhost=queue.get("vhost")
            ) if isinstance(queue, dict) else None,
        )
