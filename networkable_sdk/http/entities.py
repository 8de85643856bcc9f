import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from dataclasses_json import DataClassJsonMixin

Query = Dict[str, str]
JSON = Dict[str, Any]

T = TypeVar("T", bound="NetworkableObject")


class HTTPRequest(str, Enum):
    """Enum for the available HTTP request methods.

    Attributes:
        GET: Requests a representation of the specified resource.
        PUT: Replaces all current representations of the target resource with the payload.
        POST: Submits an entity to the specified resource, often changing server state.
        PATCH: Applies partial modifications to a resource.
        DELETE: Deletes the specified resource.
        TRACE: Performs a message loop-back test along the path to the target resource.
        HEAD: Asks for a response identical to GET, but without the response body.
        OPTIONS: Describes the communication options for the target resource.
        CONNECT: Establishes a tunnel to the server identified by the target resource.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    PATCH = "patch"
    DELETE = "delete"
    TRACE = "trace"
    HEAD = "head"
    OPTIONS = "options"
    CONNECT = "connect"

    def string_value(self) -> str:
        """The uppercase wire name of the method."""
        return self.value.upper()


class ImageFormat(str, Enum):
    """Enum for the format of images returned by `get_image`.

    Attributes:
        PILLOW: A `PIL.Image.Image`.
        NUMPY: An OpenCV (BGR) numpy array.
    """

    PILLOW = "pillow"
    NUMPY = "numpy"


class NetworkableObject(ABC):
    """Contract for model objects shared with a network API as JSON."""

    @property
    @abstractmethod
    def json_value(self) -> JSON:
        """JSON representation of the object."""
        pass

    @property
    @abstractmethod
    def endpoint(self) -> Optional[str]:
        """The URL to which the object is written."""
        pass

    @classmethod
    @abstractmethod
    def from_json(cls: Type[T], payload: JSON) -> Optional[T]:
        """Build an object from a decoded JSON object.

        Args:
            payload: Dictionary containing the object's properties.

        Returns:
            The object, or None if `payload` is malformed for this type.
        """
        pass

    @property
    def json_data(self) -> Optional[bytes]:
        """Pretty-printed UTF-8 JSON of `json_value`, None if it cannot be serialised."""
        try:
            return json.dumps(self.json_value, indent=2).encode("utf-8")
        except (TypeError, ValueError):
            return None


class NetworkableDataclass(NetworkableObject, DataClassJsonMixin):
    """`NetworkableObject` implementation for dataclass models.

    Subclasses are regular dataclasses; override `endpoint` to make instances
    writable with `Networkable.put_object` / `Networkable.post_object`.

    `from_json` takes an already decoded mapping, replacing the
    `DataClassJsonMixin.from_json(str)` of `dataclasses_json`. To build an
    instance from a JSON string use `Model.from_dict(json.loads(text))`;
    `to_json()` still serialises to a string.

    Field types are not validated: `dataclasses_json` passes through values it
    cannot convert, so `{"id": "x", ...}` still builds an instance.
    Only missing required fields and values the constructor rejects yield
    None. Validate in `__post_init__` when a model needs stricter checks.
    """

    @property
    def json_value(self) -> JSON:
        return self.to_dict(encode_json=True)

    @property
    def endpoint(self) -> Optional[str]:
        return None

    @classmethod
    def from_json(cls: Type[T], payload: JSON) -> Optional[T]:
        try:
            return cls.from_dict(payload)
        except (AttributeError, KeyError, TypeError, ValueError):
            return None
