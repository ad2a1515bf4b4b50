"""
Property-based tests for request serialization.

Optional request fields must keep their presence through serialization:
unset fields are absent from the body, falsy-but-set fields are present.
"""

import json

from hypothesis import given, settings
from hypothesis import strategies as st

from voyagekit.multimodal import ContentType, MultimodalContent, MultimodalInput
from voyagekit.types import EmbeddingRequest, MultimodalRequest, RerankRequest

safe_text = st.text(max_size=30)

optional_str = st.none() | st.sampled_from(["", "query", "document", "base64", "float"])
optional_bool = st.none() | st.booleans()
optional_int = st.none() | st.integers(min_value=0, max_value=4096)


@st.composite
def embedding_request_strategy(draw):
    return EmbeddingRequest(
        input=draw(st.lists(safe_text, max_size=5)),
        model=draw(safe_text),
        input_type=draw(optional_str),
        truncation=draw(optional_bool),
        output_dimension=draw(optional_int),
        output_dtype=draw(optional_str),
        encoding_format=draw(optional_str),
    )


@st.composite
def rerank_request_strategy(draw):
    return RerankRequest(
        query=draw(safe_text),
        documents=draw(st.lists(safe_text, max_size=5)),
        model=draw(safe_text),
        top_k=draw(optional_int),
        return_documents=draw(optional_bool),
        truncation=draw(optional_bool),
    )


data_url = st.builds(
    lambda payload: f"data:image/png;base64,{payload}",
    st.from_regex(r"[A-Za-z0-9+/]{0,40}={0,2}", fullmatch=True),
)

multimodal_input_strategy = st.one_of(
    st.builds(MultimodalInput.from_text, safe_text),
    st.builds(MultimodalInput.from_image_url, st.from_regex(r"https://[a-z]{1,10}\.com/[a-z]{1,8}\.png", fullmatch=True)),
    st.builds(MultimodalInput.from_image_base64, data_url),
)


@st.composite
def multimodal_request_strategy(draw):
    inputs = draw(
        st.lists(
            st.builds(MultimodalContent, st.lists(multimodal_input_strategy, min_size=1, max_size=4)),
            max_size=3,
        )
    )
    return MultimodalRequest(
        inputs=inputs,
        model=draw(safe_text),
        input_type=draw(optional_str),
        truncation=draw(optional_bool),
        output_encoding=draw(optional_str),
    )


def _assert_presence(request, wire: dict, optional_names: tuple[str, ...]) -> None:
    for name in optional_names:
        value = getattr(request, name)
        if value is None:
            assert name not in wire, f"unset field {name} was serialized"
        else:
            assert name in wire, f"set field {name} was dropped"
            assert wire[name] == value
            assert type(wire[name]) is type(value)


@given(request=embedding_request_strategy())
@settings(max_examples=100)
def test_embedding_request_optional_presence(request: EmbeddingRequest):
    wire = json.loads(json.dumps(request.to_dict()))

    _assert_presence(request, wire, EmbeddingRequest._OPTIONAL)
    assert EmbeddingRequest.from_dict(wire) == request


@given(request=rerank_request_strategy())
@settings(max_examples=100)
def test_rerank_request_optional_presence(request: RerankRequest):
    wire = json.loads(json.dumps(request.to_dict()))

    _assert_presence(request, wire, RerankRequest._OPTIONAL)
    assert RerankRequest.from_dict(wire) == request


@given(request=multimodal_request_strategy())
@settings(max_examples=100)
def test_multimodal_request_round_trip(request: MultimodalRequest):
    wire = json.loads(json.dumps(request.to_dict()))

    _assert_presence(request, wire, MultimodalRequest._OPTIONAL)
    assert MultimodalRequest.from_dict(wire) == request


@given(url=data_url)
@settings(max_examples=50)
def test_inline_image_item_round_trip(url: str):
    item = MultimodalInput.from_image_base64(url)

    wire = json.loads(json.dumps(item.to_dict()))
    restored = MultimodalInput.from_dict(wire)

    assert wire == {"type": "image_base64", "image_base64": url}
    assert restored == item
    assert restored.type is ContentType.IMAGE_BASE64
    assert restored.image_base64 == url


def test_falsy_values_are_sent():
    request = EmbeddingRequest(input=[], model="m", input_type="", truncation=False, output_dimension=0)

    assert request.to_dict() == {
        "input": [],
        "model": "m",
        "input_type": "",
        "truncation": False,
        "output_dimension": 0,
    }


def test_unset_values_are_omitted():
    assert RerankRequest(query="q", documents=["d"], model="m").to_dict() == {
        "query": "q",
        "documents": ["d"],
        "model": "m",
    }
