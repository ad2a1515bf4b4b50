"""HTTP transport for the Voyage API client."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

import httpx

from voyagekit.errors import ExecutionError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Raw result of a single HTTP POST."""

    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


class HttpTransport:
    """
    Sends one JSON POST per call over a pooled ``httpx.Client``.

    The response body is always read fully and the response closed before
    returning, including when reading fails.
    """

    def __init__(self, timeout: Optional[float] = None, http_client: Optional[httpx.Client] = None):
        """
        Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds, None for no timeout
            http_client: Optional pre-built client; it is not closed by close()
        """
        self._timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None
        self._client_lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        with self._client_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.Client(timeout=self._timeout)
                self._owns_client = True
            return self._client

    def close(self) -> None:
        """Close the owned HTTP client and release connections."""
        with self._client_lock:
            if self._owns_client and self._client is not None and not self._client.is_closed:
                self._client.close()
                self._client = None

    def post(self, url: str, body: bytes, api_key: str) -> TransportResponse:
        """
        Perform a single POST.

        Args:
            url: Target URL
            body: JSON-encoded request body
            api_key: Bearer token

        Returns:
            Status code, headers and body of the response

        Raises:
            ExecutionError: If the request could not be sent or the
                response could not be read
        """
        headers = {
            "Authorization": f"BEARER {api_key}",
            "Content-Type": "application/json",
        }
        timeout = self._timeout if self._timeout is not None else httpx.USE_CLIENT_DEFAULT

        client = self._get_client()
        try:
            with client.stream("POST", url, content=body, headers=headers, timeout=timeout) as response:
                payload = response.read()
                return TransportResponse(
                    status_code=response.status_code,
                    body=payload,
                    headers=dict(response.headers),
                )
        except httpx.TimeoutException as e:
            raise ExecutionError(f"execute request: timeout: {e}") from e
        except httpx.ConnectError as e:
            raise ExecutionError(f"execute request: connection error: {e}") from e
        except httpx.RequestError as e:
            raise ExecutionError(f"execute request: {e}") from e
