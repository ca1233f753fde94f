"""Policy models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class PolicyInfo:
    """A user or operator policy.

    Attributes:
        pattern: Regex matched against queue/exchange names.
        definition: Policy keys, e.g. ``{"max-length": 10}``.
        priority: Higher wins when several policies match.
        apply_to: ``"queues"``, ``"exchanges"`` or ``"all"``.
    """

    pattern: str
    definition: dict[str, Any] = field(default_factory=dict)
    priority: int = 0
    apply_to: str = "all"
    name: str | None = None
    vhost: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolicyInfo":
        return cls(
            name=data.get("name"),
            vhost=data.get("vhost"),
            pattern=data.get("pattern", ""),
            definition=dict(data.get("definition") or {}),
            priority=int(data.get("priority") or 0),
            apply_to=data.get("apply-to") or "all",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a declare (PUT) body."""
        return {
            "pattern": self.pattern,
            "definition": dict(self.definition),
            "priority": self.priority,
            "apply-to": self.apply_to,
        }
