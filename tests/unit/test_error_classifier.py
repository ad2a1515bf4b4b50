import pytest

from voyagekit.client.classifier import classify_api_error, parse_error_detail
from voyagekit.errors import (
    APIError,
    BadRequestError,
    MalformedRequestError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "status, retryable, error_cls, message",
    [
        (400, False, BadRequestError, "voyage: bad request, detail: why"),
        (401, False, UnauthorizedError, "voyage: unauthorized, detail: why"),
        (422, False, MalformedRequestError, "voyage: malformed request, detail: why"),
        (429, True, RateLimitError, "voyage: rate limit reached, detail: why"),
        (500, True, ServerError, "voyage: server error (status 500)"),
        (503, True, ServerError, "voyage: server error (status 503)"),
        (404, True, ServerError, "voyage: server error (status 404)"),
        (418, True, ServerError, "voyage: server error (status 418)"),
    ],
)
def test_status_table(status, retryable, error_cls, message):
    raw = APIError(status, body=b'{"detail": "why"}')

    should_retry, error = classify_api_error(raw)

    assert should_retry is retryable
    assert type(error) is error_cls
    assert str(error) == message
    assert error.status_code == status
    assert error.body == raw.body
    assert error.retryable is retryable


@pytest.mark.parametrize(
    "body",
    [b"", b"not json", b"[1, 2]", b'{"detail": 5}', b'{"message": "x"}', b"\xff\xfe", b"null"],
)
def test_unparseable_detail_degrades_to_empty(body):
    assert parse_error_detail(body) == ""

    should_retry, error = classify_api_error(APIError(400, body=body))

    assert should_retry is False
    assert error.detail == ""
    assert str(error) == "voyage: bad request, detail: "


def test_detail_is_extracted():
    assert parse_error_detail(b'{"detail": "Input too long"}') == "Input too long"
