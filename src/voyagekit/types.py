"""
Request and response types for the Voyage API.

Optional request fields default to None, which means "absent": they are left
out of the JSON body entirely. Any other value, including False, 0 and "",
is sent as given.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from voyagekit.multimodal import MultimodalContent


class Model:
    """Model names accepted by the API."""

    VOYAGE_3_LARGE = "voyage-3-large"
    VOYAGE_3 = "voyage-3"
    VOYAGE_3_LITE = "voyage-3-lite"
    VOYAGE_3_5 = "voyage-3.5"
    VOYAGE_3_5_LITE = "voyage-3.5-lite"
    VOYAGE_MULTIMODAL_3 = "voyage-multimodal-3"
    VOYAGE_CODE_3 = "voyage-code-3"
    VOYAGE_FINANCE_2 = "voyage-finance-2"
    VOYAGE_LAW_2 = "voyage-law-2"
    RERANK_2 = "rerank-2"
    RERANK_2_LITE = "rerank-2-lite"


class OutputDimension:
    """Supported sizes for ``output_dimension``."""

    DIM_256 = 256
    DIM_512 = 512
    DIM_1024 = 1024
    DIM_1536 = 1536
    DIM_2048 = 2048


def _present(request: Any) -> dict[str, Any]:
    """Collect the fields of a request dataclass that are not None."""
    return {f.name: getattr(request, f.name) for f in fields(request) if getattr(request, f.name) is not None}


def _pick(data: dict[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    return {name: data[name] for name in names if name in data}


@dataclass
class EmbeddingRequest:
    """
    Body of ``POST /embeddings``.

    Attributes:
        input: Texts to embed
        model: Model name, see :class:`Model`
        input_type: None, "query" or "document"
        truncation: Whether to truncate inputs over the context length
        output_dimension: Size of the returned vectors
        output_dtype: float, int8, uint8, binary or ubinary
        encoding_format: None or "base64"
    """

    input: list[str]
    model: str
    input_type: Optional[str] = None
    truncation: Optional[bool] = None
    output_dimension: Optional[int] = None
    output_dtype: Optional[str] = None
    encoding_format: Optional[str] = None

    _OPTIONAL = ("input_type", "truncation", "output_dimension", "output_dtype", "encoding_format")

    def to_dict(self) -> dict[str, Any]:
        result = _present(self)
        result["input"] = list(self.input)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmbeddingRequest":
        return cls(input=list(data["input"]), model=data["model"], **_pick(data, cls._OPTIONAL))


@dataclass
class MultimodalRequest:
    """Body of ``POST /multimodalembeddings``."""

    inputs: list[MultimodalContent]
    model: str
    input_type: Optional[str] = None
    truncation: Optional[bool] = None
    output_encoding: Optional[str] = None

    _OPTIONAL = ("input_type", "truncation", "output_encoding")

    def to_dict(self) -> dict[str, Any]:
        result = _present(self)
        result["inputs"] = [item.to_dict() for item in self.inputs]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MultimodalRequest":
        return cls(
            inputs=[MultimodalContent.from_dict(item) for item in data["inputs"]],
            model=data["model"],
            **_pick(data, cls._OPTIONAL),
        )


@dataclass
class RerankRequest:
    """
    Body of ``POST /rerank``.

    Attributes:
        query: The search query
        documents: Documents to rerank against the query
        model: Reranker model name
        top_k: Number of results to return, all documents if unset
        return_documents: Echo documents in the response
        truncation: Whether to truncate query and documents
    """

    query: str
    documents: list[str]
    model: str
    top_k: Optional[int] = None
    return_documents: Optional[bool] = None
    truncation: Optional[bool] = None

    _OPTIONAL = ("top_k", "return_documents", "truncation")

    def to_dict(self) -> dict[str, Any]:
        result = _present(self)
        result["documents"] = list(self.documents)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RerankRequest":
        return cls(
            query=data["query"],
            documents=list(data["documents"]),
            model=data["model"],
            **_pick(data, cls._OPTIONAL),
        )


def _as_object(data: Any, name: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected {name} object, got {type(data).__name__}")
    return data


def _as_list(data: Any, name: str) -> list[Any]:
    if not isinstance(data, list):
        raise TypeError(f"expected {name} array, got {type(data).__name__}")
    return data


@dataclass
class UsageObject:
    """Usage accounting returned with every response."""

    total_tokens: int = 0
    image_pixels: Optional[int] = None
    text_tokens: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "UsageObject":
        data = _as_object(data, "usage")
        image_pixels = data.get("image_pixels")
        text_tokens = data.get("text_tokens")
        return cls(
            total_tokens=int(data.get("total_tokens", 0)),
            image_pixels=int(image_pixels) if image_pixels is not None else None,
            text_tokens=int(text_tokens) if text_tokens is not None else None,
        )


@dataclass
class EmbeddingObject:
    """A single embedding in an embeddings response."""

    embedding: list[float]
    index: int
    object: str = "embedding"

    @classmethod
    def from_dict(cls, data: Any) -> "EmbeddingObject":
        data = _as_object(data, "embedding")
        return cls(
            embedding=[float(v) for v in _as_list(data.get("embedding", []), "embedding")],
            index=int(data.get("index", 0)),
            object=data.get("object", "embedding"),
        )


@dataclass
class EmbeddingResponse:
    """Response of the /embeddings and /multimodalembeddings endpoints."""

    data: list[EmbeddingObject] = field(default_factory=list)
    model: str = ""
    usage: UsageObject = field(default_factory=UsageObject)
    object: str = "list"

    @property
    def embeddings(self) -> list[list[float]]:
        """Embedding vectors ordered by input index."""
        return [item.embedding for item in sorted(self.data, key=lambda x: x.index)]

    @classmethod
    def from_dict(cls, data: Any) -> "EmbeddingResponse":
        data = _as_object(data, "response")
        return cls(
            data=[EmbeddingObject.from_dict(item) for item in _as_list(data.get("data", []), "data")],
            model=data.get("model", ""),
            usage=UsageObject.from_dict(data.get("usage", {})),
            object=data.get("object", "list"),
        )


@dataclass
class RerankObject:
    """A single reranking result."""

    index: int
    relevance_score: float
    document: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "RerankObject":
        data = _as_object(data, "rerank result")
        return cls(
            index=int(data["index"]),
            relevance_score=float(data["relevance_score"]),
            document=data.get("document"),
        )


@dataclass
class RerankResponse:
    """Response of the /rerank endpoint, sorted by descending relevance."""

    data: list[RerankObject] = field(default_factory=list)
    model: str = ""
    usage: UsageObject = field(default_factory=UsageObject)
    object: str = "list"

    @classmethod
    def from_dict(cls, data: Any) -> "RerankResponse":
        data = _as_object(data, "response")
        return cls(
            data=[RerankObject.from_dict(item) for item in _as_list(data.get("data", []), "data")],
            model=data.get("model", ""),
            usage=UsageObject.from_dict(data.get("usage", {})),
            object=data.get("object", "list"),
        )
