"""Retry logic for the Voyage API client."""

import logging
import time
from typing import Callable, Optional

from voyagekit.core.config import RetryConfig
from voyagekit.errors import APIError, VoyageError

from .classifier import classify_api_error
from .executor import Attempt, AttemptKind

logger = logging.getLogger(__name__)


def resolve_max_attempts(configured: Optional[int]) -> int:
    """Map an unset, zero or negative attempt count to a single attempt."""
    if not configured or configured < 1:
        return 1
    return configured


def parse_retry_after(headers: dict[str, str]) -> Optional[float]:
    """Read a Retry-After header given in seconds; HTTP dates are ignored."""
    value = headers.get("retry-after") or headers.get("Retry-After")
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def compute_delay(attempt: int, config: RetryConfig, retry_after: Optional[float] = None) -> float:
    """
    Delay before the next attempt.

    Args:
        attempt: Zero-based index of the attempt that just failed
        config: Retry configuration
        retry_after: Server-requested delay, if any

    Returns:
        Delay in seconds
    """
    delay = config.base_delay * (config.exponential_base**attempt)
    if config.respect_retry_after and retry_after is not None:
        delay = max(delay, retry_after)
    return min(delay, config.max_delay)


def run_with_retry(
    operation: Callable[[], Attempt],
    max_attempts: int,
    config: RetryConfig,
    sleep: Callable[[float], None] = time.sleep,
):
    """
    Run an operation until it succeeds, fails fatally or runs out of attempts.

    Only API status errors are eligible for retry, and only when the error
    classifier marks them retryable. Encoding, transport and decoding
    failures end the call on the first occurrence.

    Args:
        operation: Callable performing one attempt
        max_attempts: Resolved maximum attempt count (at least 1)
        config: Retry configuration
        sleep: Sleep function, replaceable in tests

    Returns:
        The response of the first successful attempt

    Raises:
        VoyageError: The first fatal error, or the last retryable error once
            all attempts are used
    """
    last_error: Optional[APIError] = None

    for attempt_index in range(max_attempts):
        attempt = operation()

        if attempt.kind is AttemptKind.SUCCESS:
            return attempt.response

        if attempt.kind is not AttemptKind.API_STATUS:
            logger.debug(f"Attempt {attempt_index + 1} failed with {attempt.kind.value} error, not retrying")
            raise attempt.error  # type: ignore[misc]

        retryable, error = classify_api_error(attempt.error)  # type: ignore[arg-type]
        if not retryable:
            raise error

        last_error = error
        if attempt_index == max_attempts - 1:
            break

        delay = compute_delay(attempt_index, config, parse_retry_after(attempt.headers))
        logger.warning(f"Attempt {attempt_index + 1} failed: {error}. Retrying in {delay:.1f}s...")
        if delay > 0:
            sleep(delay)

    if max_attempts > 1:
        logger.error(f"All {max_attempts} attempts failed. Last error: {last_error}")
    if last_error is None:
        raise VoyageError("retry loop exited without an attempt")
    raise last_error
