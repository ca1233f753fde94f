"""Exchange and binding models."""

import enum
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ExchangeInfo:
    """An exchange."""

    type: str = "direct"
    durable: bool = True
    auto_delete: bool = False
    internal: bool = False
    arguments: dict[str, Any] = field(default_factory=dict)
    name: str = ""
    vhost: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExchangeInfo":
        return cls(
            name=data["name"],
            vhost=data.get("vhost"),
            type=data.get("type", "direct"),
            durable=bool(data.get("durable", True)),
            auto_delete=bool(data.get("auto_delete", False)),
            internal=bool(data.get("internal", False)),
            arguments=dict(data.get("arguments") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a declare (PUT) body."""
        return {
            "type": self.type,
            "durable": self.durable,
            "auto_delete": self.auto_delete,
            "internal": self.internal,
            "arguments": dict(self.arguments),
        }


class DestinationType(enum.Enum):
    """What a binding routes to."""

    QUEUE = "queue"
    EXCHANGE = "exchange"

    @property
    def path_segment(self) -> str:
        """Single-letter segment used in binding URLs (``q`` or ``e``)."""
        return "q" if self is DestinationType.QUEUE else "e"


@dataclass(slots=True)
class BindingInfo:
    """A binding from an exchange to a queue or another exchange.

    ``properties_key`` identifies the binding when deleting it.
    """

    source: str
    destination: str
    destination_type: DestinationType
    vhost: str | None = None
    routing_key: str = ""
    arguments: dict[str, Any] = field(default_factory=dict)
    properties_key: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BindingInfo":
        return cls(
            source=data.get("source", ""),
            destination=data["destination"],
            destination_type=DestinationType(data.get("destination_type", "queue")),
            vhost=data.get("vhost"),
            routing_key=data.get("routing_key", ""),
            arguments=dict(data.get("arguments") or {}),
            properties_key=data.get("properties_key"),
        )
