from io import BytesIO
from typing import Optional

import numpy as np
import pytest
from PIL import Image

from networkable_sdk.http.entities import ImageFormat
from networkable_sdk.http.errors import EncodingError
from networkable_sdk.http.utils.encoding import (
    bytes_to_opencv_image,
    bytes_to_pillow_image,
    decode_image,
)


@pytest.fixture(scope="function")
def example_jpeg_bytes() -> bytes:
    image = Image.new("RGB", (16, 8), color=(0, 0, 255))
    with BytesIO() as buffer:
        image.save(buffer, format="JPEG")
        return buffer.getvalue()


def test_bytes_to_pillow_image_when_payload_is_image(example_jpeg_bytes: bytes) -> None:
    # when
    result = bytes_to_pillow_image(payload=example_jpeg_bytes)

    # then
    assert isinstance(result, Image.Image)
    assert result.size == (16, 8)


def test_bytes_to_pillow_image_when_payload_is_not_image() -> None:
    # when
    with pytest.raises(EncodingError):
        _ = bytes_to_pillow_image(payload=b"For sure not an image :)")


def test_bytes_to_pillow_image_when_payload_is_truncated(
    example_jpeg_bytes: bytes,
) -> None:
    # when
    with pytest.raises(EncodingError):
        _ = bytes_to_pillow_image(payload=example_jpeg_bytes[:40])


def test_bytes_to_opencv_image_when_payload_is_image(example_jpeg_bytes: bytes) -> None:
    # when
    result = bytes_to_opencv_image(payload=example_jpeg_bytes)

    # then
    assert isinstance(result, np.ndarray)
    assert result.shape == (8, 16, 3)


def test_bytes_to_opencv_image_when_payload_is_not_image() -> None:
    # when
    with pytest.raises(EncodingError):
        _ = bytes_to_opencv_image(payload=b"For sure not an image :)")


def test_decode_image_returns_pillow_image_by_default(
    example_jpeg_bytes: bytes,
) -> None:
    # when
    result = decode_image(payload=example_jpeg_bytes)

    # then
    assert isinstance(result, Image.Image)


def test_decode_image_when_numpy_format_requested(example_jpeg_bytes: bytes) -> None:
    # when
    result = decode_image(payload=example_jpeg_bytes, image_format=ImageFormat.NUMPY)

    # then
    assert isinstance(result, np.ndarray)


@pytest.mark.parametrize("payload", [None, b""])
@pytest.mark.parametrize("image_format", [ImageFormat.PILLOW, ImageFormat.NUMPY])
def test_decode_image_when_payload_is_absent(
    payload: Optional[bytes], image_format: ImageFormat
) -> None:
    # when
    with pytest.raises(EncodingError):
        _ = decode_image(payload=payload, image_format=image_format)
