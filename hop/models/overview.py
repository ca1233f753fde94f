"""Cluster-wide overview and node models."""

from dataclasses import dataclass, field
from typing import Any

from .stats import MessageStats, RateDetails


@dataclass(slots=True)
class QueueTotals:
    """Message totals across all queues."""

    messages: int = 0
    messages_ready: int = 0
    messages_unacknowledged: int = 0
    messages_details: RateDetails | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QueueTotals":
        return cls(
            messages=int(data.get("messages", 0)),
            messages_ready=int(data.get("messages_ready", 0)),
            messages_unacknowledged=int(data.get("messages_unacknowledged", 0)),
            messages_details=RateDetails.from_dict(data.get("messages_details")),
        )


@dataclass(slots=True)
class ObjectTotals:
    """Object counts across the cluster."""

    connections: int = 0
    channels: int = 0
    exchanges: int = 0
    queues: int = 0
    consumers: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ObjectTotals":
        return cls(
            connections=int(data.get("connections", 0)),
            channels=int(data.get("channels", 0)),
            exchanges=int(data.get("exchanges", 0)),
            queues=int(data.get("queues", 0)),
            consumers=int(data.get("consumers", 0)),
        )


@dataclass(slots=True)
class ExchangeType:
    """An exchange type available on the broker."""

    name: str
    description: str = ""
    enabled: bool = True


@dataclass(slots=True)
class OverviewResponse:
    """Response of GET /api/overview.

    ``server_version`` is what capability negotiation keys on.
    """

    server_version: str
    management_version: str | None = None
    erlang_version: str | None = None
    node: str | None = None
    cluster_name: str | None = None
    statistics_level: str | None = None
    message_stats: MessageStats | None = None
    queue_totals: QueueTotals = field(default_factory=QueueTotals)
    object_totals: ObjectTotals = field(default_factory=ObjectTotals)
    exchange_types: list[ExchangeType] = field(default_factory=list)
    listeners: list[dict[str, Any]] = field(default_factory=list)
    contexts: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OverviewResponse":
        """Create OverviewResponse from API response dict.

        Args:
            data: Dictionary from GET /api/overview.

        Returns:
            OverviewResponse instance.
        """
        return cls(
            server_version=data.get("rabbitmq_version") or data.get("server_version", ""),
            management_version=data.get("management_version"),
            erlang_version=data.get("erlang_version"),
            node=data.get("node"),
            cluster_name=data.get("cluster_name"),
            statistics_level=data.get("statistics_level"),
            message_stats=MessageStats.from_dict(data.get("message_stats")),
            queue_totals=QueueTotals.from_dict(data.get("queue_totals") or {}),
            object_totals=ObjectTotals.from_dict(data.get("object_totals") or {}),
            exchange_types=[
                ExchangeType(
                    name=xt["name"],
                    description=xt.get("description", ""),
                    enabled=bool(xt.get("enabled", True)),
                )
                for xt in data.get("exchange_types", [])
            ],
            listeners=list(data.get("listeners", [])),
            contexts=list(data.get("contexts", [])),
        )


@dataclass(slots=True)
class NodeInfo:
    """A cluster node and its resource usage."""

    name: str
    type: str | None = None
    running: bool = False
    fd_used: int = 0
    fd_total: int = 0
    sockets_used: int = 0
    sockets_total: int = 0
    memory_used: int = 0
    memory_limit: int = 0
    memory_alarm: bool = False
    disk_free: int = 0
    disk_free_limit: int = 0
    disk_free_alarm: bool = False
    erlang_processes_used: int = 0
    erlang_processes_total: int = 0
    erlang_run_queue_length: int = 0
    uptime: int = 0
    partitions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeInfo":
        return cls(
            name=data["name"],
            type=data.get("type"),
            running=bool(data.get("running", False)),
            fd_used=int(data.get("fd_used", 0)),
            fd_total=int(data.get("fd_total", 0)),
            sockets_used=int(data.get("sockets_used", 0)),
            sockets_total=int(data.get("sockets_total", 0)),
            memory_used=int(data.get("mem_used", 0)),
            memory_limit=int(data.get("mem_limit", 0)),
            memory_alarm=bool(data.get("mem_alarm", False)),
            disk_free=int(data.get("disk_free", 0)),
            disk_free_limit=int(data.get("disk_free_limit", 0)),
            disk_free_alarm=bool(data.get("disk_free_alarm", False)),
            erlang_processes_used=int(data.get("proc_used", 0)),
            erlang_processes_total=int(data.get("proc_total", 0)),
            erlang_run_queue_length=int(data.get("run_queue", 0)),
            uptime=int(data.get("uptime", 0)),
            partitions=list(data.get("partitions", [])),
        )


@dataclass(frozen=True, slots=True)
class ClusterId:
    """Cluster name, as returned by GET /api/cluster-name."""

    name: str
