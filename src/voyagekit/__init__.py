"""
voyagekit - typed client for the Voyage AI embedding and reranking API.
"""

from voyagekit.errors import (
    APIError,
    BadRequestError,
    DecodingError,
    EncodingError,
    ExecutionError,
    ImageEncodingError,
    MalformedRequestError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    VoyageError,
)
from voyagekit.multimodal import ContentType, MultimodalContent, MultimodalInput, encode_image_base64
from voyagekit.types import (
    EmbeddingObject,
    EmbeddingRequest,
    EmbeddingResponse,
    Model,
    MultimodalRequest,
    OutputDimension,
    RerankObject,
    RerankRequest,
    RerankResponse,
    UsageObject,
)
from voyagekit.core.config import ClientConfig, LoggingConfig, VoyageConfig, load_config
from voyagekit.client import RetryConfig, VoyageClient, create_client

__version__ = "0.1.0"

__all__ = [
    "VoyageClient",
    "create_client",
    "ClientConfig",
    "RetryConfig",
    "LoggingConfig",
    "VoyageConfig",
    "load_config",
    "Model",
    "OutputDimension",
    "EmbeddingRequest",
    "MultimodalRequest",
    "RerankRequest",
    "EmbeddingObject",
    "EmbeddingResponse",
    "RerankObject",
    "RerankResponse",
    "UsageObject",
    "ContentType",
    "MultimodalInput",
    "MultimodalContent",
    "encode_image_base64",
    "VoyageError",
    "EncodingError",
    "ExecutionError",
    "DecodingError",
    "ImageEncodingError",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "MalformedRequestError",
    "RateLimitError",
    "ServerError",
]
