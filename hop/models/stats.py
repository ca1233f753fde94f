"""Rate and sample structures shared by several responses."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Sample:
    """One time-series sample."""

    sample: float
    timestamp: int


@dataclass(slots=True)
class RateDetails:
    """Rate of change of a counter, with samples when a window was requested.

    Attributes:
        rate: Current rate per second.
        average: Average value over the sampling window.
        average_rate: Average rate over the sampling window.
        samples: Samples, newest first. Empty unless sampling was requested.
    """

    rate: float = 0.0
    average: float | None = None
    average_rate: float | None = None
    samples: list[Sample] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "RateDetails | None":
        if not data:
            return None
        return cls(
            rate=float(data.get("rate", 0.0)),
            average=data.get("avg"),
            average_rate=data.get("avg_rate"),
            samples=[
                Sample(sample=s.get("sample", 0), timestamp=int(s.get("timestamp", 0)))
                for s in data.get("samples", [])
                if isinstance(s, dict)
            ],
        )


@dataclass(slots=True)
class MessageStats:
    """Message counters and their rates."""

    publish: int = 0
    publish_details: RateDetails | None = None
    confirm: int = 0
    deliver: int = 0
    deliver_get: int = 0
    deliver_get_details: RateDetails | None = None
    redeliver: int = 0
    get: int = 0
    ack: int = 0
    ack_details: RateDetails | None = None
    return_unroutable: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MessageStats | None":
        """Create MessageStats from API response dict.

        Returns None if the server sent no stats (e.g. an idle queue).
        """
        if not isinstance(data, dict) or not data:
            return None
        return cls(
            publish=int(data.get("publish", 0)),
            publish_details=RateDetails.from_dict(data.get("publish_details")),
            confirm=int(data.get("confirm", 0)),
            deliver=int(data.get("deliver", 0)),
            deliver_get=int(data.get("deliver_get", 0)),
            deliver_get_details=RateDetails.from_dict(data.get("deliver_get_details")),
            redeliver=int(data.get("redeliver", 0)),
            get=int(data.get("get", 0)),
            ack=int(data.get("ack", 0)),
            ack_details=RateDetails.from_dict(data.get("ack_details")),
            return_unroutable=int(data.get("return_unroutable", 0)),
        )
