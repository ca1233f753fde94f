"""Client for the broker management HTTP API."""

from .client import ManagementClient
from .config import ClientConfig
from .errors import (
    ApiError,
    AuthenticationError,
    AwaitTimeoutError,
    BadRequestError,
    DecodeError,
    HopError,
    TransportError,
    ValidationError,
)
from .paging import Page
from .parameters import (
    AckMode,
    RuntimeParameter,
    ShovelDetails,
    UpstreamDetails,
    UpstreamSetDetails,
)
from .query import DeleteQueueParameters, DetailsParameters, Pagination, QueryParameters
from .versions import Capability

__version__ = "0.1.0"

__all__ = [
    "AckMode",
    "ApiError",
    "AuthenticationError",
    "AwaitTimeoutError",
    "BadRequestError",
    "Capability",
    "ClientConfig",
    "DecodeError",
    "DeleteQueueParameters",
    "DetailsParameters",
    "HopError",
    "ManagementClient",
    "Page",
    "Pagination",
    "QueryParameters",
    "RuntimeParameter",
    "ShovelDetails",
    "TransportError",
    "UpstreamDetails",
    "UpstreamSetDetails",
    "ValidationError",
]
