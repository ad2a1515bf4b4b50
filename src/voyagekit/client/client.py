"""Voyage AI API client implementation."""

import logging
import time
from typing import Callable, Optional

import httpx

from voyagekit.core.config import ClientConfig, RetryConfig, VoyageConfig
from voyagekit.multimodal import MultimodalContent
from voyagekit.types import (
    EmbeddingRequest,
    EmbeddingResponse,
    MultimodalRequest,
    RerankRequest,
    RerankResponse,
)

from .executor import RequestExecutor
from .retry import resolve_max_attempts, run_with_retry
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class VoyageClient:
    """
    Synchronous client for the Voyage AI embedding and reranking API.

    Each call blocks until it succeeds or fails. Calls are retried up to
    ``config.max_retries`` attempts when the API answers with a rate limit
    or server error; every other failure is raised on the first attempt.
    The configuration objects are never modified, so a client may be
    shared between threads.

    Usage:
        with VoyageClient(ClientConfig(api_key="...")) as client:
            response = client.embed(["hello"], Model.VOYAGE_3_LITE)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        retry_config: Optional[RetryConfig] = None,
        http_client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the client.

        Args:
            config: Connection settings; defaults are read from defaults.yaml
            retry_config: Backoff settings between attempts
            http_client: Optional pre-built httpx client, e.g. with a mock
                transport for testing
            sleep: Sleep function used between attempts
        """
        self._config = config or ClientConfig()
        self._retry_config = retry_config or RetryConfig()
        self._base_url = self._config.base_url.rstrip("/")
        self._sleep = sleep

        api_key = self._config.resolve_api_key()
        if not api_key:
            logger.warning("No API key configured and VOYAGE_API_KEY is not set")

        self._transport = HttpTransport(timeout=self._config.timeout, http_client=http_client)
        self._executor = RequestExecutor(self._transport, api_key)

    @classmethod
    def from_config(cls, config: VoyageConfig, **kwargs) -> "VoyageClient":
        """Create a client from a full VoyageConfig."""
        return cls(config=config.client, retry_config=config.retry, **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        """Close the HTTP client and release connections."""
        self._transport.close()

    def __enter__(self) -> "VoyageClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, request, response_type, path: str):
        url = f"{self._base_url}{path}"
        # Resolved per call; the shared config is never written to
        max_attempts = resolve_max_attempts(self._config.max_retries)
        return run_with_retry(
            lambda: self._executor.execute(request, response_type, url),
            max_attempts,
            self._retry_config,
            sleep=self._sleep,
        )

    def embed(
        self,
        texts: list[str],
        model: str,
        *,
        input_type: Optional[str] = None,
        truncation: Optional[bool] = None,
        output_dimension: Optional[int] = None,
        output_dtype: Optional[str] = None,
        encoding_format: Optional[str] = None,
    ) -> EmbeddingResponse:
        """
        Embed a list of texts.

        Args:
            texts: Texts to embed, such as ["I like cats", "I also like dogs"]
            model: Model name, e.g. voyage-3.5 or voyage-code-3
            input_type: None, "query" or "document"
            truncation: Whether to truncate texts over the context length
            output_dimension: Size of the returned vectors
            output_dtype: Data type of the returned embeddings
            encoding_format: None or "base64"

        Returns:
            EmbeddingResponse

        Raises:
            VoyageError: If the request fails after all attempts
        """
        request = EmbeddingRequest(
            input=texts,
            model=model,
            input_type=input_type,
            truncation=truncation,
            output_dimension=output_dimension,
            output_dtype=output_dtype,
            encoding_format=encoding_format,
        )
        return self._request(request, EmbeddingResponse, "/embeddings")

    def multimodal_embed(
        self,
        inputs: list[MultimodalContent],
        model: str,
        *,
        input_type: Optional[str] = None,
        truncation: Optional[bool] = None,
        output_encoding: Optional[str] = None,
    ) -> EmbeddingResponse:
        """
        Embed multimodal inputs (interleaved text and images).

        Args:
            inputs: Inputs to vectorize, each a list of content items
            model: Model name, currently voyage-multimodal-3
            input_type: None, "query" or "document"
            truncation: Whether to truncate inputs over the context length
            output_encoding: None or "base64"

        Returns:
            EmbeddingResponse

        Raises:
            VoyageError: If the request fails after all attempts
        """
        request = MultimodalRequest(
            inputs=inputs,
            model=model,
            input_type=input_type,
            truncation=truncation,
            output_encoding=output_encoding,
        )
        return self._request(request, EmbeddingResponse, "/multimodalembeddings")

    def rerank(
        self,
        query: str,
        documents: list[str],
        model: str,
        *,
        top_k: Optional[int] = None,
        return_documents: Optional[bool] = None,
        truncation: Optional[bool] = None,
    ) -> RerankResponse:
        """
        Rerank documents by relevance to a query.

        Args:
            query: The query
            documents: Documents to rerank
            model: Reranker model, e.g. rerank-2 or rerank-2-lite
            top_k: Number of most relevant documents to return
            return_documents: Include the documents in the response
            truncation: Whether to truncate query and documents

        Returns:
            RerankResponse sorted by descending relevance

        Raises:
            VoyageError: If the request fails after all attempts
        """
        request = RerankRequest(
            query=query,
            documents=documents,
            model=model,
            top_k=top_k,
            return_documents=return_documents,
            truncation=truncation,
        )
        return self._request(request, RerankResponse, "/rerank")


def create_client(
    api_key: str = "",
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    max_retries: int = 0,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
) -> VoyageClient:
    """
    Factory function to create a Voyage client.

    Args:
        api_key: API key; empty falls back to VOYAGE_API_KEY
        base_url: API root, defaults to the production endpoint
        timeout: Per-attempt timeout in seconds
        max_retries: Maximum attempts per call
        base_delay: Initial delay in seconds before a retry
        max_delay: Maximum delay in seconds between attempts

    Returns:
        Configured VoyageClient instance
    """
    config_kwargs = {"api_key": api_key, "timeout": timeout, "max_retries": max_retries}
    if base_url:
        config_kwargs["base_url"] = base_url

    return VoyageClient(
        config=ClientConfig(**config_kwargs),
        retry_config=RetryConfig(base_delay=base_delay, max_delay=max_delay),
    )
