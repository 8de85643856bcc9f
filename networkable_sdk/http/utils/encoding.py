from io import BytesIO
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image

from networkable_sdk.http.entities import ImageFormat
from networkable_sdk.http.errors import EncodingError


def decode_image(
    payload: Optional[bytes],
    image_format: ImageFormat = ImageFormat.PILLOW,
) -> Union[Image.Image, np.ndarray]:
    """Decode an image payload into the requested format.

    Args:
        payload: The raw response payload.
        image_format: The format of the returned image.

    Returns:
        The decoded image.

    Raises:
        EncodingError: If the payload is absent or not an image.
    """
    if not payload:
        raise EncodingError("No image payload received.")
    if image_format is ImageFormat.NUMPY:
        return bytes_to_opencv_image(payload=payload)
    return bytes_to_pillow_image(payload=payload)


def bytes_to_opencv_image(
    payload: bytes, array_type: np.number = np.uint8
) -> np.ndarray:
    """Decode a bytes object to an OpenCV image.

    Args:
        payload: The bytes object to decode.
        array_type: The type of the array.

    Returns:
        The OpenCV image.
    """
    bytes_array = np.frombuffer(payload, dtype=array_type)
    decoding_result = cv2.imdecode(bytes_array, cv2.IMREAD_UNCHANGED)
    if decoding_result is None:
        raise EncodingError("Could not decode bytes to OpenCV image.")
    return decoding_result


def bytes_to_pillow_image(payload: bytes) -> Image.Image:
    """Decode a bytes object to a PIL image.

    The image is loaded eagerly, so truncated payloads fail here rather than
    on first pixel access.

    Args:
        payload: The bytes object to decode.

    Returns:
        The PIL image.
    """
    buffer = BytesIO(payload)
    try:
        image = Image.open(buffer)
        image.load()
    except OSError as error:
        raise EncodingError("Could not decode bytes to PIL image.") from error
    return image
