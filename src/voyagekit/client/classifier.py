"""Classification of failed API responses."""

import json
import logging

from voyagekit.errors import (
    APIError,
    BadRequestError,
    MalformedRequestError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

# status code -> (error class, message prefix)
_STATUS_ERRORS: dict[int, tuple[type[APIError], str]] = {
    400: (BadRequestError, "bad request"),
    401: (UnauthorizedError, "unauthorized"),
    422: (MalformedRequestError, "malformed request"),
    429: (RateLimitError, "rate limit reached"),
}


def parse_error_detail(body: bytes) -> str:
    """
    Extract the ``detail`` string from an error response body.

    Args:
        body: Raw response body

    Returns:
        The detail message, or an empty string if the body is not a JSON
        object with a string ``detail`` field
    """
    try:
        parsed = json.loads(body)
    except (ValueError, TypeError):
        return ""

    if not isinstance(parsed, dict):
        return ""

    detail = parsed.get("detail")
    return detail if isinstance(detail, str) else ""


def classify_api_error(error: APIError) -> tuple[bool, APIError]:
    """
    Decide whether a failed response may be retried.

    Args:
        error: The raw API error built from the response status and body

    Returns:
        Tuple of (retryable, descriptive error to surface)
    """
    detail = parse_error_detail(error.body)
    status = error.status_code

    if status in _STATUS_ERRORS:
        error_cls, prefix = _STATUS_ERRORS[status]
        message = f"voyage: {prefix}, detail: {detail}"
    else:
        error_cls = ServerError
        message = f"voyage: server error (status {status})"

    classified = error_cls(status, body=error.body, detail=detail, message=message)
    logger.debug(f"Classified status {status} as {error_cls.__name__} (retryable={classified.retryable})")
    return classified.retryable, classified
