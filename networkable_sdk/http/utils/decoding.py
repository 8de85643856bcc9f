import json
from typing import List, Optional, Type, TypeVar

from networkable_sdk.http.entities import JSON, NetworkableObject
from networkable_sdk.http.errors import MalformedPayloadError

T = TypeVar("T", bound=NetworkableObject)


def decode_json_object(payload: Optional[bytes]) -> JSON:
    """Decode a payload holding a JSON object at the top level.

    Args:
        payload: The raw response payload.

    Returns:
        The decoded JSON object.

    Raises:
        MalformedPayloadError: If the payload is absent, not JSON or not an object.
    """
    if payload is None:
        raise MalformedPayloadError("No payload received.")
    try:
        decoded = json.loads(payload)
    except ValueError as error:
        raise MalformedPayloadError(f"Payload is not valid JSON: {error}") from error
    except RecursionError as error:
        raise MalformedPayloadError("Payload is nested too deeply.") from error
    if not isinstance(decoded, dict):
        raise MalformedPayloadError(
            f"Expected JSON object at the top level, got {type(decoded).__name__}."
        )
    return decoded


def build_object(object_type: Type[T], payload: Optional[bytes]) -> T:
    """Build a single model object from a payload.

    Args:
        object_type: The model type to build.
        payload: The raw response payload.

    Returns:
        The model object.

    Raises:
        MalformedPayloadError: If the payload cannot be decoded or the model rejects it.
    """
    json_object = decode_json_object(payload=payload)
    result = object_type.from_json(json_object)
    if result is None:
        raise MalformedPayloadError(f"Payload rejected by {object_type.__name__}.")
    return result


def build_objects(
    object_type: Type[T],
    payload: Optional[bytes],
    key: str,
) -> List[T]:
    """Build model objects from the list stored under `key` in a payload.

    Elements that are not JSON objects or that the model rejects are dropped.

    Args:
        object_type: The model type to build.
        payload: The raw response payload.
        key: The key under which the list of objects lives.

    Returns:
        The model objects built from the accepted elements.

    Raises:
        MalformedPayloadError: If the payload cannot be decoded or `key` holds no list.
    """
    json_object = decode_json_object(payload=payload)
    if key not in json_object:
        raise MalformedPayloadError(f"Key '{key}' not found in payload.")
    elements = json_object[key]
    if not isinstance(elements, list):
        raise MalformedPayloadError(
            f"Expected list under key '{key}', got {type(elements).__name__}."
        )
    results = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        built = object_type.from_json(element)
        if built is not None:
            results.append(built)
    return results
