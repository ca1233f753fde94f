"""Queue and message models."""

import enum
from dataclasses import dataclass, field
from typing import Any

from .stats import MessageStats, RateDetails


@dataclass(slots=True)
class QueueInfo:
    """A queue.

    Only ``durable``, ``auto_delete`` and ``arguments`` are sent when
    declaring; the rest is read-only state. ``exclusive`` must stay False
    for declares, since the HTTP API has no owning connection.
    """

    name: str = ""
    vhost: str | None = None
    durable: bool = True
    exclusive: bool = False
    auto_delete: bool = False
    arguments: dict[str, Any] = field(default_factory=dict)
    node: str | None = None
    type: str | None = None
    state: str | None = None
    policy: str | None = None
    consumers: int = 0
    messages: int = 0
    messages_ready: int = 0
    messages_unacknowledged: int = 0
    memory: int = 0
    messages_details: RateDetails | None = None
    messages_ready_details: RateDetails | None = None
    messages_unacknowledged_details: RateDetails | None = None
    message_stats: MessageStats | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QueueInfo":
        """Create QueueInfo from API response dict.

        ``*_details`` are only present when the request carried a sampling
        window or the broker collects rates.
        """
        return cls(
            name=data["name"],
            vhost=data.get("vhost"),
            durable=bool(data.get("durable", True)),
            exclusive=bool(data.get("exclusive", False)),
            auto_delete=bool(data.get("auto_delete", False)),
            arguments=dict(data.get("arguments") or {}),
            node=data.get("node"),
            type=data.get("type"),
            state=data.get("state"),
            policy=data.get("policy"),
            consumers=int(data.get("consumers") or 0),
            messages=int(data.get("messages") or 0),
            messages_ready=int(data.get("messages_ready") or 0),
            messages_unacknowledged=int(data.get("messages_unacknowledged") or 0),
            memory=int(data.get("memory") or 0),
            messages_details=RateDetails.from_dict(data.get("messages_details")),
            messages_ready_details=RateDetails.from_dict(data.get("messages_ready_details")),
            messages_unacknowledged_details=RateDetails.from_dict(
                data.get("messages_unacknowledged_details")
            ),
            message_stats=MessageStats.from_dict(data.get("message_stats")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a declare (PUT) body."""
        result: dict[str, Any] = {
            "durable": self.durable,
            "auto_delete": self.auto_delete,
            "arguments": dict(self.arguments),
        }
        if self.node:
            result["node"] = self.node
        return result


class GetAckMode(enum.Enum):
    """What to do with messages fetched through the management API."""

    ACK_REQUEUE_FALSE = "ack_requeue_false"
    NACK_REQUEUE_TRUE = "ack_requeue_true"
    REJECT_REQUEUE_TRUE = "reject_requeue_true"
    REJECT_REQUEUE_FALSE = "reject_requeue_false"


class GetEncoding(enum.Enum):
    """Payload encoding for fetched messages."""

    AUTO = "auto"
    BASE64 = "base64"


@dataclass(slots=True)
class InboundMessage:
    """A message fetched with POST /api/queues/{vhost}/{name}/get."""

    payload: str
    payload_bytes: int = 0
    payload_encoding: str = "string"
    redelivered: bool = False
    exchange: str | None = None
    routing_key: str | None = None
    message_count: int = 0
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InboundMessage":
        return cls(
            payload=data.get("payload", ""),
            payload_bytes=int(data.get("payload_bytes", 0)),
            payload_encoding=data.get("payload_encoding", "string"),
            redelivered=bool(data.get("redelivered", False)),
            exchange=data.get("exchange"),
            routing_key=data.get("routing_key"),
            message_count=int(data.get("message_count", 0)),
            properties=dict(data.get("properties") or {}),
        )


@dataclass(slots=True)
class OutboundMessage:
    """A message to publish through the management API.

    Attributes:
        payload: Message body, UTF-8 text or base64 depending on encoding.
        properties: Message properties (delivery_mode, headers, ...).
        payload_encoding: ``"string"`` or ``"base64"``.
    """

    payload: str
    properties: dict[str, Any] = field(default_factory=dict)
    payload_encoding: str = "string"

    def to_dict(self, routing_key: str) -> dict[str, Any]:
        return {
            "routing_key": routing_key,
            "properties": dict(self.properties),
            "payload": self.payload,
            "payload_encoding": self.payload_encoding,
        }
