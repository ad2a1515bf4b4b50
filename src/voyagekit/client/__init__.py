"""
Voyage API client module.

Provides a synchronous HTTP client for the embeddings, multimodal embeddings
and rerank endpoints, with error classification and exponential backoff
retry.
"""

from voyagekit.core.config import RetryConfig

from .classifier import classify_api_error, parse_error_detail
from .client import VoyageClient, create_client
from .executor import Attempt, AttemptKind, RequestExecutor
from .retry import resolve_max_attempts, run_with_retry
from .transport import HttpTransport, TransportResponse

__all__ = [
    "VoyageClient",
    "create_client",
    "RetryConfig",
    "resolve_max_attempts",
    "run_with_retry",
    "classify_api_error",
    "parse_error_detail",
    "Attempt",
    "AttemptKind",
    "RequestExecutor",
    "HttpTransport",
    "TransportResponse",
]
