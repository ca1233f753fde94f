"""Exported broker definitions."""

from dataclasses import dataclass, field
from typing import Any

from .exchanges import BindingInfo, ExchangeInfo
from .policies import PolicyInfo
from .queues import QueueInfo
from .users import UserInfo, UserPermissions


@dataclass(slots=True)
class Definitions:
    """Response of GET /api/definitions.

    Parameters are kept as raw objects; decode them with
    ``hop.parameters.decode_runtime_parameter`` when needed.
    """

    server_version: str | None = None
    vhosts: list[str] = field(default_factory=list)
    users: list[UserInfo] = field(default_factory=list)
    permissions: list[UserPermissions] = field(default_factory=list)
    queues: list[QueueInfo] = field(default_factory=list)
    exchanges: list[ExchangeInfo] = field(default_factory=list)
    bindings: list[BindingInfo] = field(default_factory=list)
    policies: list[PolicyInfo] = field(default_factory=list)
    parameters: list[dict[str, Any]] = field(default_factory=list)
    global_parameters: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Definitions":
        version = data.get("rabbitmq_version") or data.get("rabbit_version")
        return cls(
            server_version=version,
            vhosts=[v["name"] for v in data.get("vhosts", [])],
            users=[UserInfo.from_dict(u, version) for u in data.get("users", [])],
            permissions=[UserPermissions.from_dict(p) for p in data.get("permissions", [])],
            queues=[QueueInfo.from_dict(q) for q in data.get("queues", [])],
            exchanges=[ExchangeInfo.from_dict(e) for e in data.get("exchanges", [])],
            bindings=[BindingInfo.from_dict(b) for b in data.get("bindings", [])],
            policies=[PolicyInfo.from_dict(p) for p in data.get("policies", [])],
            parameters=list(data.get("parameters", [])),
            global_parameters=list(data.get("global_parameters", [])),
        )
