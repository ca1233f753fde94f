"""HTTP transport for the management API.

One request/response cycle per call over a shared ``httpx.Client`` for
connection pooling and keep-alive. Status codes are not interpreted here;
the client maps them to results and errors.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)


def encode_segment(segment: str) -> str:
    """Percent-encode one path segment, including ``/`` (so vhost ``/`` is ``%2F``)."""
    return quote(segment, safe="")


def build_path(*segments: str) -> str:
    """Join encoded path segments, e.g. ``("queues", "/", "q1")`` -> ``queues/%2F/q1``."""
    return "/".join(encode_segment(s) for s in segments)


class HttpTransport:
    """Sync transport over httpx.

    Example:
        transport = HttpTransport("http://localhost:15672/api", "guest", "guest")
        response = transport.request("GET", "overview")
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        verify: bool = True,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: API root, e.g. ``http://localhost:15672/api``.
            username: Basic auth user.
            password: Basic auth password.
            timeout: Per-request timeout in seconds.
            verify: Verify TLS certificates.
            http_client: Pre-built client to use instead of creating one
                (e.g. one backed by ``httpx.MockTransport``).
        """
        self.base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(username, password)
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=timeout,
            verify=verify,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._http_client.close()

    def request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform one request.

        Args:
            method: GET, PUT, POST or DELETE.
            path: Path below the API root, already percent-encoded.
            params: Ordered query-string pairs.
            json: JSON body for PUT/POST.
            headers: Extra request headers.

        Returns:
            The raw response, whatever its status.

        Raises:
            TransportError: If no response was received.
        """
        url = f"{self.base_url}/{path}"
        try:
            response = self._http_client.request(
                method,
                url,
                params=params or None,
                json=json,
                headers=headers,
                auth=self._auth,
            )
        except httpx.TransportError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response
