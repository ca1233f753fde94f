"""Runtime parameters and their component-specific values.

A runtime parameter is ``{name, vhost, component, value}``. The shape of
``value`` depends on ``component``:

    shovel                   -> ShovelDetails
    federation-upstream      -> UpstreamDetails
    federation-upstream-set  -> list[UpstreamSetDetails]
    anything else            -> dict[str, Any] (open mapping)

Global parameters (``internal_cluster_id``, ``cluster_name``) and other
non-object values are passed through unchanged.

Reading is lenient: unknown keys are kept in ``extra`` and written back
out by ``to_dict``. Writing is strict: ``validate_*`` reject definitions
the broker would refuse, before any request is sent.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .errors import DecodeError, ValidationError

SHOVEL = "shovel"
FEDERATION_UPSTREAM = "federation-upstream"
FEDERATION_UPSTREAM_SET = "federation-upstream-set"

V = TypeVar("V")


class AckMode(enum.Enum):
    """Acknowledgement mode for shovels and federation links."""

    ON_CONFIRM = "on-confirm"
    ON_PUBLISH = "on-publish"
    NO_ACK = "no-ack"


def _ack_mode(value: Any) -> AckMode | str | None:
    if value is None:
        return None
    try:
        return AckMode(value)
    except ValueError:
        # Newer brokers may add modes; keep the raw string
        return str(value)


def _ack_mode_value(value: AckMode | str | None) -> str | None:
    if isinstance(value, AckMode):
        return value.value
    return value


def _uri_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(u) for u in value]
    raise DecodeError(f"Expected a URI or list of URIs, got {type(value).__name__}")


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# ---------------------------------------------------------------------------
# Shovels
# ---------------------------------------------------------------------------

_SHOVEL_KEYS = frozenset({
    "src-uri", "src-queue", "src-exchange", "src-exchange-key",
    "src-prefetch-count", "prefetch-count", "src-delete-after", "delete-after",
    "src-protocol", "dest-uri", "dest-queue", "dest-exchange",
    "dest-exchange-key", "dest-add-timestamp-header", "dest-protocol",
    "reconnect-delay", "add-forward-headers", "dest-add-forward-headers",
    "publish-properties", "dest-publish-properties", "ack-mode",
})


@dataclass(slots=True)
class ShovelDetails:
    """Definition of a dynamic shovel.

    Attributes:
        source_uris: Source broker URIs; at least one is required.
        destination_uris: Destination broker URIs; at least one is required.
        reconnect_delay: Seconds to wait before reconnecting.
        add_forward_headers: Add forwarding headers to shovelled messages.
        publish_properties: Properties to overwrite on publish. Must be None
            or non-empty.
        source_delete_after: ``"never"``, ``"queue-length"`` or a count.
        extra: Keys this client does not model, kept verbatim.
    """

    source_uris: list[str] = field(default_factory=list)
    destination_uris: list[str] = field(default_factory=list)
    reconnect_delay: int | None = None
    add_forward_headers: bool | None = None
    publish_properties: dict[str, Any] | None = None
    source_queue: str | None = None
    source_exchange: str | None = None
    source_exchange_key: str | None = None
    source_prefetch_count: int | None = None
    source_delete_after: str | int | None = None
    source_protocol: str | None = None
    destination_queue: str | None = None
    destination_exchange: str | None = None
    destination_exchange_key: str | None = None
    destination_add_timestamp_header: bool | None = None
    destination_protocol: str | None = None
    ack_mode: AckMode | str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShovelDetails":
        """Create ShovelDetails from a parameter value."""
        publish_properties = data.get("publish-properties", data.get("dest-publish-properties"))
        add_forward_headers = data.get("add-forward-headers", data.get("dest-add-forward-headers"))
        return cls(
            source_uris=_uri_list(data.get("src-uri")),
            destination_uris=_uri_list(data.get("dest-uri")),
            reconnect_delay=_optional_int(data.get("reconnect-delay")),
            add_forward_headers=add_forward_headers,
            publish_properties=publish_properties,
            source_queue=data.get("src-queue"),
            source_exchange=data.get("src-exchange"),
            source_exchange_key=data.get("src-exchange-key"),
            source_prefetch_count=_optional_int(
                data.get("src-prefetch-count", data.get("prefetch-count"))
            ),
            source_delete_after=data.get("src-delete-after", data.get("delete-after")),
            source_protocol=data.get("src-protocol"),
            destination_queue=data.get("dest-queue"),
            destination_exchange=data.get("dest-exchange"),
            destination_exchange_key=data.get("dest-exchange-key"),
            destination_add_timestamp_header=data.get("dest-add-timestamp-header"),
            destination_protocol=data.get("dest-protocol"),
            ack_mode=_ack_mode(data.get("ack-mode")),
            extra={k: v for k, v in data.items() if k not in _SHOVEL_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the parameter value sent to the broker."""
        result = dict(self.extra)
        result.update(_drop_none({
            "src-uri": list(self.source_uris),
            "src-queue": self.source_queue,
            "src-exchange": self.source_exchange,
            "src-exchange-key": self.source_exchange_key,
            "src-prefetch-count": self.source_prefetch_count,
            "src-delete-after": self.source_delete_after,
            "src-protocol": self.source_protocol,
            "dest-uri": list(self.destination_uris),
            "dest-queue": self.destination_queue,
            "dest-exchange": self.destination_exchange,
            "dest-exchange-key": self.destination_exchange_key,
            "dest-add-timestamp-header": self.destination_add_timestamp_header,
            "dest-protocol": self.destination_protocol,
            "reconnect-delay": self.reconnect_delay,
            "add-forward-headers": self.add_forward_headers,
            "publish-properties": self.publish_properties,
            "ack-mode": _ack_mode_value(self.ack_mode),
        }))
        return result


def validate_shovel(details: ShovelDetails) -> None:
    """Reject a shovel definition the broker would not accept.

    Raises:
        ValidationError: If a source or destination URI is missing, or
            publish properties is an empty map.
    """
    if not [u for u in details.source_uris if u and u.strip()]:
        raise ValidationError("Shovel needs at least one source URI")
    if not [u for u in details.destination_uris if u and u.strip()]:
        raise ValidationError("Shovel needs at least one destination URI")
    if details.publish_properties is not None and not details.publish_properties:
        raise ValidationError(
            "Shovel publish properties must not be an empty map; omit them instead"
        )


# ---------------------------------------------------------------------------
# Federation
# ---------------------------------------------------------------------------

_UPSTREAM_KEYS = frozenset({
    "uri", "exchange", "max-hops", "expires", "message-ttl", "prefetch-count",
    "reconnect-delay", "ack-mode", "trust-user-id", "queue", "consumer-tag",
})


@dataclass(slots=True)
class UpstreamDetails:
    """Definition of a federation upstream.

    Attributes:
        uri: Upstream broker URI (or several, tried in turn). Required.
        exchange: Upstream exchange name, defaults to the federated one.
        max_hops: Maximum federation links a message may traverse.
        expires: Upstream queue expiry, in milliseconds.
        message_ttl: Upstream queue message TTL, in milliseconds.
        ack_mode: When to acknowledge messages received from upstream.
        extra: Keys this client does not model, kept verbatim.
    """

    uri: str | list[str] | None = None
    exchange: str | None = None
    max_hops: int | None = None
    expires: int | None = None
    message_ttl: int | None = None
    prefetch_count: int | None = None
    reconnect_delay: int | None = None
    ack_mode: AckMode | str | None = None
    trust_user_id: bool | None = None
    queue: str | None = None
    consumer_tag: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpstreamDetails":
        """Create UpstreamDetails from a parameter value."""
        return cls(
            uri=data.get("uri"),
            exchange=data.get("exchange"),
            max_hops=_optional_int(data.get("max-hops")),
            expires=_optional_int(data.get("expires")),
            message_ttl=_optional_int(data.get("message-ttl")),
            prefetch_count=_optional_int(data.get("prefetch-count")),
            reconnect_delay=_optional_int(data.get("reconnect-delay")),
            ack_mode=_ack_mode(data.get("ack-mode")),
            trust_user_id=data.get("trust-user-id"),
            queue=data.get("queue"),
            consumer_tag=data.get("consumer-tag"),
            extra={k: v for k, v in data.items() if k not in _UPSTREAM_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extra)
        result.update(_drop_none({
            "uri": self.uri,
            "exchange": self.exchange,
            "max-hops": self.max_hops,
            "expires": self.expires,
            "message-ttl": self.message_ttl,
            "prefetch-count": self.prefetch_count,
            "reconnect-delay": self.reconnect_delay,
            "ack-mode": _ack_mode_value(self.ack_mode),
            "trust-user-id": self.trust_user_id,
            "queue": self.queue,
            "consumer-tag": self.consumer_tag,
        }))
        return result


def validate_upstream(details: UpstreamDetails) -> None:
    """Reject an upstream without a URI.

    Raises:
        ValidationError: If no usable URI is set.
    """
    uris = _uri_list(details.uri) if details.uri is not None else []
    if not [u for u in uris if u.strip()]:
        raise ValidationError("Federation upstream needs a URI")


_UPSTREAM_SET_KEYS = frozenset({
    "upstream", "exchange", "max-hops", "expires", "message-ttl",
    "prefetch-count", "reconnect-delay", "ack-mode", "trust-user-id", "queue",
})


@dataclass(slots=True)
class UpstreamSetDetails:
    """One member of a federation upstream set.

    Attributes:
        upstream: Name of a declared upstream. Required.
        exchange: Overrides the upstream's exchange for this member.
        extra: Keys this client does not model, kept verbatim.
    """

    upstream: str | None = None
    exchange: str | None = None
    max_hops: int | None = None
    expires: int | None = None
    message_ttl: int | None = None
    prefetch_count: int | None = None
    reconnect_delay: int | None = None
    ack_mode: AckMode | str | None = None
    trust_user_id: bool | None = None
    queue: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpstreamSetDetails":
        return cls(
            upstream=data.get("upstream"),
            exchange=data.get("exchange"),
            max_hops=_optional_int(data.get("max-hops")),
            expires=_optional_int(data.get("expires")),
            message_ttl=_optional_int(data.get("message-ttl")),
            prefetch_count=_optional_int(data.get("prefetch-count")),
            reconnect_delay=_optional_int(data.get("reconnect-delay")),
            ack_mode=_ack_mode(data.get("ack-mode")),
            trust_user_id=data.get("trust-user-id"),
            queue=data.get("queue"),
            extra={k: v for k, v in data.items() if k not in _UPSTREAM_SET_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extra)
        result.update(_drop_none({
            "upstream": self.upstream,
            "exchange": self.exchange,
            "max-hops": self.max_hops,
            "expires": self.expires,
            "message-ttl": self.message_ttl,
            "prefetch-count": self.prefetch_count,
            "reconnect-delay": self.reconnect_delay,
            "ack-mode": _ack_mode_value(self.ack_mode),
            "trust-user-id": self.trust_user_id,
            "queue": self.queue,
        }))
        return result


def validate_upstream_set(members: list[UpstreamSetDetails]) -> None:
    """Reject an empty upstream set or a member without an upstream name.

    Raises:
        ValidationError: On the first invalid member.
    """
    if not members:
        raise ValidationError("Federation upstream set needs at least one upstream")
    for member in members:
        if not member.upstream or not member.upstream.strip():
            raise ValidationError("Each federation upstream set member needs an upstream name")


# ---------------------------------------------------------------------------
# Envelope and dispatch
# ---------------------------------------------------------------------------

ParameterValue = (
    ShovelDetails
    | UpstreamDetails
    | list[UpstreamSetDetails]
    | dict[str, Any]
    | list[Any]
    | str
    | int
    | float
    | bool
    | None
)


@dataclass(slots=True)
class RuntimeParameter(Generic[V]):
    """A named, component-scoped parameter.

    Attributes:
        name: Parameter name.
        vhost: Owning virtual host; None for global parameters.
        component: Discriminator, e.g. ``"shovel"``; None for global
            parameters.
        value: Decoded value, shaped by ``component``.
    """

    name: str
    value: V
    vhost: str | None = None
    component: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeParameter[Any]":
        return decode_runtime_parameter(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a PUT body."""
        result: dict[str, Any] = {
            "name": self.name,
            "value": encode_parameter_value(self.value),
        }
        if self.vhost is not None:
            result["vhost"] = self.vhost
        if self.component is not None:
            result["component"] = self.component
        return result


ShovelInfo = RuntimeParameter[ShovelDetails]
UpstreamInfo = RuntimeParameter[UpstreamDetails]
UpstreamSetInfo = RuntimeParameter[list[UpstreamSetDetails]]


def _decode_shovel(raw: Any) -> ShovelDetails:
    if not isinstance(raw, dict):
        raise DecodeError(f"Shovel value must be an object, got {type(raw).__name__}")
    return ShovelDetails.from_dict(raw)


def _decode_upstream(raw: Any) -> UpstreamDetails:
    if not isinstance(raw, dict):
        raise DecodeError(f"Upstream value must be an object, got {type(raw).__name__}")
    return UpstreamDetails.from_dict(raw)


def _decode_upstream_set(raw: Any) -> list[UpstreamSetDetails]:
    if not isinstance(raw, list):
        raise DecodeError(f"Upstream set value must be an array, got {type(raw).__name__}")
    members: list[UpstreamSetDetails] = []
    for member in raw:
        if not isinstance(member, dict):
            raise DecodeError("Upstream set members must be objects")
        members.append(UpstreamSetDetails.from_dict(member))
    return members


_VALUE_DECODERS = {
    SHOVEL: _decode_shovel,
    FEDERATION_UPSTREAM: _decode_upstream,
    FEDERATION_UPSTREAM_SET: _decode_upstream_set,
}


def decode_parameter_value(component: str | None, raw: Any) -> ParameterValue:
    """Decode a parameter value according to its component.

    Args:
        component: Parameter component, or None for global parameters.
        raw: Parsed JSON value.

    Returns:
        A typed value for known components, an open mapping for other
        objects, or the raw scalar.

    Raises:
        DecodeError: If a known component's value has the wrong JSON type.
    """
    decoder = _VALUE_DECODERS.get(component) if component else None
    if decoder is not None:
        try:
            return decoder(raw)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Malformed {component} value: {e}") from e
    if isinstance(raw, dict):
        return dict(raw)
    return raw


def encode_parameter_value(value: Any) -> Any:
    """Convert a decoded value back to JSON-compatible data."""
    if isinstance(value, (ShovelDetails, UpstreamDetails, UpstreamSetDetails)):
        return value.to_dict()
    if isinstance(value, list):
        return [encode_parameter_value(v) for v in value]
    return value


def decode_runtime_parameter(data: dict[str, Any]) -> RuntimeParameter[Any]:
    """Decode a ``{name, vhost, component, value}`` object.

    Raises:
        DecodeError: If ``name`` is missing or the value does not fit the
            component.
    """
    if not isinstance(data, dict) or "name" not in data:
        raise DecodeError("Runtime parameter must be an object with a name")
    component = data.get("component")
    return RuntimeParameter(
        name=data["name"],
        vhost=data.get("vhost"),
        component=component,
        value=decode_parameter_value(component, data.get("value")),
    )


def validate_mqtt_port_mapping(mapping: dict[int, str]) -> None:
    """Reject a port-to-vhost mapping with a blank vhost.

    Raises:
        ValidationError: If any vhost is blank.
    """
    for port, vhost in mapping.items():
        if not isinstance(vhost, str) or not vhost.strip():
            raise ValidationError(f"MQTT port {port} maps to a blank vhost")
