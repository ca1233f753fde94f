"""Server version comparison and capability gating.

Some endpoints and response fields only exist on newer brokers. Callers ask
``is_at_least`` (or ``ManagementClient.supports``) before relying on them
instead of getting an error from an old broker.
"""

import enum
import logging

logger = logging.getLogger(__name__)

# Reported by brokers that do not know their own version (and by some test
# doubles). Treated as compatible with everything.
UNKNOWN_VERSION = "0.0.0"


class Capability(enum.Enum):
    """Broker features gated on a minimum server version."""

    PASSWORD_HASHING_ALGORITHM = "password_hashing_algorithm"
    TOPIC_PERMISSIONS = "topic_permissions"
    VHOST_CLUSTER_STATE = "vhost_cluster_state"
    VHOST_METADATA = "vhost_metadata"
    USER_CONNECTIONS = "user_connections"

    @property
    def minimum_version(self) -> str:
        """Oldest server version that supports this capability."""
        return _MINIMUM_VERSIONS[self]


_MINIMUM_VERSIONS: dict[Capability, str] = {
    Capability.PASSWORD_HASHING_ALGORITHM: "3.6.0",
    Capability.TOPIC_PERMISSIONS: "3.7.0",
    Capability.VHOST_CLUSTER_STATE: "3.7.0",
    Capability.VHOST_METADATA: "3.8.0",
    Capability.USER_CONNECTIONS: "3.10.0",
}


def compare_versions(a: str, b: str) -> int:
    """Compare two dotted version strings.

    Build metadata after ``+`` is ignored. Components are compared left
    to right. At the first component that differs, anything from a ``-``
    onwards is dropped before comparing as integers, so
    ``"3.7.0-beta.1"`` and ``"3.7.0"`` compare equal. If one version is a
    dotted prefix of the other, the longer one is greater.

    Args:
        a: First version, e.g. ``"3.8.9"``.
        b: Second version.

    Returns:
        -1, 0 or 1.

    Raises:
        ValueError: If the first differing component is not an integer.
    """
    left = a.split("+", 1)[0].split(".")
    right = b.split("+", 1)[0].split(".")

    i = 0
    while i < len(left) and i < len(right) and left[i] == right[i]:
        i += 1

    if i < len(left) and i < len(right):
        x = int(left[i].split("-", 1)[0])
        y = int(right[i].split("-", 1)[0])
        return (x > y) - (x < y)

    diff = len(left) - len(right)
    return (diff > 0) - (diff < 0)


def is_at_least(current: str | None, minimum: str) -> bool:
    """Check whether ``current`` is ``minimum`` or newer.

    Build metadata after ``+`` is ignored. The ``"0.0.0"`` sentinel is
    always compatible. A version that cannot be compared returns False
    rather than raising.
    """
    if not current:
        return False
    version = current.split("+", 1)[0]
    if version == UNKNOWN_VERSION:
        return True
    try:
        return compare_versions(version, minimum) >= 0
    except ValueError:
        logger.warning("Cannot compare server version %r with %s", current, minimum)
        return False


def supports(current: str | None, capability: Capability) -> bool:
    """Check whether a server at ``current`` provides ``capability``."""
    return is_at_least(current, capability.minimum_version)
