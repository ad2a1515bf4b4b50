"""Single-attempt request execution."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol, TypeVar

from voyagekit.errors import APIError, DecodingError, EncodingError, ExecutionError, VoyageError

from .transport import HttpTransport

logger = logging.getLogger(__name__)


class SerializableRequest(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


ResponseT = TypeVar("ResponseT")


class AttemptKind(str, Enum):
    """Outcome of one attempt."""

    SUCCESS = "success"
    ENCODING = "encoding"
    TRANSPORT = "transport"
    API_STATUS = "api_status"
    DECODING = "decoding"


@dataclass
class Attempt:
    """
    Tagged result of one request/response cycle.

    ``response`` is set only for SUCCESS, ``error`` for every other kind.
    ``headers`` carries the response headers whenever a status line was
    received.
    """

    kind: AttemptKind
    response: Any = None
    error: Optional[VoyageError] = None
    headers: dict[str, str] = field(default_factory=dict)


class RequestExecutor:
    """Marshals a request, sends it once and unmarshals the response."""

    def __init__(self, transport: HttpTransport, api_key: str):
        self._transport = transport
        self._api_key = api_key

    def execute(self, request: SerializableRequest, response_type: type[ResponseT], url: str) -> Attempt:
        """
        Perform exactly one attempt.

        Args:
            request: Request object with a ``to_dict`` method
            response_type: Response class with a ``from_dict`` classmethod
            url: Full endpoint URL

        Returns:
            Attempt describing the outcome; this method does not raise for
            any of the failure kinds it reports
        """
        try:
            body = json.dumps(request.to_dict(), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            error = EncodingError(f"marshal request: {e}")
            error.__cause__ = e
            return Attempt(kind=AttemptKind.ENCODING, error=error)

        logger.debug(f"POST {url} ({len(body)} bytes)")
        try:
            raw = self._transport.post(url, body, self._api_key)
        except ExecutionError as e:
            return Attempt(kind=AttemptKind.TRANSPORT, error=e)

        if raw.status_code >= 400:
            logger.debug(f"POST {url} returned status {raw.status_code}")
            return Attempt(
                kind=AttemptKind.API_STATUS,
                error=APIError(raw.status_code, body=raw.body),
                headers=raw.headers,
            )

        try:
            response = response_type.from_dict(json.loads(raw.body))  # type: ignore[attr-defined]
        except (ValueError, TypeError, KeyError, OverflowError, RecursionError) as e:
            error = DecodingError(f"unmarshal response: {e}")
            error.__cause__ = e
            return Attempt(kind=AttemptKind.DECODING, error=error, headers=raw.headers)

        return Attempt(kind=AttemptKind.SUCCESS, response=response, headers=raw.headers)
