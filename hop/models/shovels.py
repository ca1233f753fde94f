"""Shovel runtime status."""

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class ShovelStatus:
    """Status of a running shovel, from GET /api/shovels.

    ``state`` is ``starting``, ``running`` or ``terminated``; ``reason``
    explains a terminated shovel.
    """

    name: str
    vhost: str | None = None
    type: str | None = None
    state: str | None = None
    src_uri: str | None = None
    dest_uri: str | None = None
    node: str | None = None
    timestamp: str | None = None
    reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShovelStatus":
        return cls(
            name=data["name"],
            vhost=data.get("vhost"),
            type=data.get("type"),
            state=data.get("state"),
            src_uri=data.get("src_uri"),
            dest_uri=data.get("dest_uri"),
            node=data.get("node"),
            timestamp=data.get("timestamp"),
            reason=data.get("reason"),
        )
