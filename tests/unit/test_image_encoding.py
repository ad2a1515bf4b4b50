import base64
from io import BytesIO

import pytest
from PIL import Image

from voyagekit.errors import ImageEncodingError
from voyagekit.multimodal import MultimodalInput, encode_image_base64


def _image_bytes(fmt: str, mode: str = "RGB") -> bytes:
    buffer = BytesIO()
    Image.new(mode, (4, 3), color=(200, 10, 10) if mode == "RGB" else 1).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.mark.parametrize("fmt, subtype", [("PNG", "png"), ("JPEG", "jpeg"), ("GIF", "gif")])
def test_encodes_supported_formats(fmt, subtype):
    data_url = encode_image_base64(BytesIO(_image_bytes(fmt)))

    prefix = f"data:image/{subtype};base64,"
    assert data_url.startswith(prefix)
    decoded = base64.b64decode(data_url[len(prefix):])
    with Image.open(BytesIO(decoded)) as img:
        assert img.format == fmt
        assert img.size == (4, 3)


def test_accepts_raw_bytes():
    assert encode_image_base64(_image_bytes("PNG")).startswith("data:image/png;base64,")


def test_rejects_non_image():
    with pytest.raises(ImageEncodingError):
        encode_image_base64(BytesIO(b"definitely not an image"))


def test_rejects_unsupported_format():
    with pytest.raises(ImageEncodingError, match="bmp"):
        encode_image_base64(BytesIO(_image_bytes("BMP")))


def test_data_url_builds_base64_input():
    data_url = encode_image_base64(_image_bytes("PNG"))

    item = MultimodalInput.from_image_base64(data_url)

    assert item.to_dict() == {"type": "image_base64", "image_base64": data_url}


def test_oversized_image_is_image_encoding_error(monkeypatch):
    data = _image_bytes("PNG")
    # 4x3 pixels is more than twice this limit, which Pillow treats as a bomb
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 5)

    with pytest.raises(ImageEncodingError):
        encode_image_base64(data)
