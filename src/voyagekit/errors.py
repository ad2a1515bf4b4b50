"""Exception types for voyagekit."""


class VoyageError(Exception):
    """Base exception for all voyagekit errors."""

    pass


class EncodingError(VoyageError):
    """The request payload could not be serialized to JSON."""

    pass


class ExecutionError(VoyageError):
    """The request could not be sent or the response could not be read."""

    pass


class DecodingError(VoyageError):
    """A successful response body did not match the expected shape."""

    pass


class ImageEncodingError(VoyageError):
    """An image could not be converted to a base64 data URL."""

    pass


class APIError(VoyageError):
    """The API answered with a status code of 400 or above.

    Attributes:
        status_code: HTTP status code returned by the API.
        body: Raw response body.
        detail: The ``detail`` field of the error body, or "" if the body
            could not be parsed.
        retryable: Whether another attempt may succeed.
    """

    retryable = False

    def __init__(self, status_code: int, body: bytes = b"", detail: str = "", message: str = ""):
        self.status_code = status_code
        self.body = body
        self.detail = detail
        super().__init__(message or f"api error: status {status_code}")


class BadRequestError(APIError):
    """400: the request was rejected by the API."""

    pass


class UnauthorizedError(APIError):
    """401: the API key is missing or invalid."""

    pass


class MalformedRequestError(APIError):
    """422: the request body could not be processed."""

    pass


class RateLimitError(APIError):
    """429: rate limit reached, retryable."""

    retryable = True


class ServerError(APIError):
    """Any other error status (5xx and unlisted 4xx), retryable."""

    retryable = True
