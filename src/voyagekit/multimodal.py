"""
Multimodal inputs for the /multimodalembeddings endpoint.

Provides the content item union (text, image URL, inline base64 image) and
a helper that turns an image stream into a base64 data URL.
"""

import base64
import logging
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import Any, BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError

from voyagekit.errors import ImageEncodingError

logger = logging.getLogger(__name__)

# Pillow format name -> data URL media subtype
_SUPPORTED_FORMATS = {
    "PNG": "png",
    "JPEG": "jpeg",
    "GIF": "gif",
    "WEBP": "webp",
}


class ContentType(str, Enum):
    """Type discriminator of a multimodal content item."""

    TEXT = "text"
    IMAGE_URL = "image_url"
    IMAGE_BASE64 = "image_base64"


@dataclass(frozen=True)
class MultimodalInput:
    """
    A single piece of multimodal content.

    Exactly one of ``text``, ``image_url`` or ``image_base64`` is set,
    matching ``type``. Use the ``from_*`` constructors rather than building
    instances by hand.
    """

    type: ContentType
    text: Optional[str] = None
    image_url: Optional[str] = None
    image_base64: Optional[str] = None

    def __post_init__(self) -> None:
        payloads = {
            ContentType.TEXT: self.text,
            ContentType.IMAGE_URL: self.image_url,
            ContentType.IMAGE_BASE64: self.image_base64,
        }
        content_type = ContentType(self.type)
        object.__setattr__(self, "type", content_type)
        if payloads[content_type] is None:
            raise ValueError(f"{content_type.value} input requires a '{content_type.value}' value")
        extra = [k.value for k, v in payloads.items() if k is not content_type and v is not None]
        if extra:
            raise ValueError(f"{content_type.value} input cannot also set {', '.join(extra)}")

    @classmethod
    def from_text(cls, text: str) -> "MultimodalInput":
        return cls(type=ContentType.TEXT, text=text)

    @classmethod
    def from_image_url(cls, url: str) -> "MultimodalInput":
        return cls(type=ContentType.IMAGE_URL, image_url=url)

    @classmethod
    def from_image_base64(cls, data_url: str) -> "MultimodalInput":
        return cls(type=ContentType.IMAGE_BASE64, image_base64=data_url)

    @property
    def value(self) -> str:
        """The payload of whichever variant is set."""
        return getattr(self, self.type.value)

    def to_dict(self) -> dict[str, Any]:
        """Wire form: the type discriminator plus its payload field."""
        return {"type": self.type.value, self.type.value: self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MultimodalInput":
        """
        Create a MultimodalInput from its wire form.

        Raises:
            ValueError: If the type is unknown or its payload is missing
        """
        content_type = ContentType(data["type"])
        return cls(type=content_type, **{content_type.value: data.get(content_type.value)})


@dataclass(frozen=True)
class MultimodalContent:
    """One multimodal input: an ordered list of content items."""

    content: list[MultimodalInput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"content": [item.to_dict() for item in self.content]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MultimodalContent":
        return cls(content=[MultimodalInput.from_dict(item) for item in data.get("content", [])])


def encode_image_base64(image: Union[BinaryIO, bytes]) -> str:
    """
    Convert image data to a base64 data URL.

    The image is decoded and re-encoded in its original format so that
    corrupt or unsupported input is rejected locally instead of by the API.

    Args:
        image: Binary stream or raw bytes of a PNG, JPEG, GIF or WEBP image

    Returns:
        Data URL of the form ``data:image/<format>;base64,<payload>``

    Raises:
        ImageEncodingError: If the image cannot be decoded or its format is
            not supported
    """
    stream = BytesIO(image) if isinstance(image, (bytes, bytearray)) else image

    try:
        with Image.open(stream) as img:
            img.load()
            image_format = img.format or ""
            subtype = _SUPPORTED_FORMATS.get(image_format)
            if subtype is None:
                raise ImageEncodingError(f"cannot encode image of type: {image_format.lower() or 'unknown'}")

            buffer = BytesIO()
            img.save(buffer, format=image_format)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageEncodingError(f"cannot decode image: {e}") from e

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    logger.debug(f"Encoded {subtype} image as data URL ({len(encoded)} base64 chars)")
    return f"data:image/{subtype};base64,{encoded}"
