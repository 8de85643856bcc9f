import json
from typing import Optional

import pytest

from networkable_sdk.http.entities import JSON, NetworkableObject
from networkable_sdk.http.errors import MalformedPayloadError
from networkable_sdk.http.utils.decoding import (
    build_object,
    build_objects,
    decode_json_object,
)


class Identified(NetworkableObject):
    def __init__(self, identifier: int):
        self.identifier = identifier

    @property
    def json_value(self) -> JSON:
        return {"id": self.identifier}

    @property
    def endpoint(self) -> Optional[str]:
        return None

    @classmethod
    def from_json(cls, payload: JSON) -> Optional["Identified"]:
        if "id" not in payload:
            return None
        return cls(identifier=payload["id"])


def test_decode_json_object_when_payload_is_valid() -> None:
    # when
    result = decode_json_object(payload=b'{"some": ["value", 1]}')

    # then
    assert result == {"some": ["value", 1]}


@pytest.mark.parametrize(
    "payload",
    [
        None,
        b"",
        b"not a json",
        b"\xff\xfe\x00",
        b'["top", "level", "list"]',
        b'"just a string"',
        b"null",
        b"[" * 200000,
    ],
)
def test_decode_json_object_when_payload_is_malformed(
    payload: Optional[bytes],
) -> None:
    # when
    with pytest.raises(MalformedPayloadError):
        _ = decode_json_object(payload=payload)


def test_build_object_when_payload_is_accepted() -> None:
    # when
    result = build_object(object_type=Identified, payload=b'{"id": 7}')

    # then
    assert isinstance(result, Identified)
    assert result.identifier == 7


def test_build_object_when_model_rejects_payload() -> None:
    # when
    with pytest.raises(MalformedPayloadError):
        _ = build_object(object_type=Identified, payload=b'{"bad": true}')


def test_build_objects_drops_rejected_elements() -> None:
    # given
    payload = json.dumps({"items": [{"id": 1}, {"bad": True}]}).encode("utf-8")

    # when
    result = build_objects(object_type=Identified, payload=payload, key="items")

    # then
    assert len(result) == 1
    assert result[0].identifier == 1


def test_build_objects_drops_elements_which_are_not_objects() -> None:
    # given
    payload = json.dumps({"items": [{"id": 1}, 2, "three", None, {"id": 4}]}).encode(
        "utf-8"
    )

    # when
    result = build_objects(object_type=Identified, payload=payload, key="items")

    # then
    assert [e.identifier for e in result] == [1, 4]


def test_build_objects_when_list_is_empty() -> None:
    # when
    result = build_objects(object_type=Identified, payload=b'{"items": []}', key="items")

    # then
    assert result == []


@pytest.mark.parametrize(
    "payload",
    [
        None,
        b"not a json",
        b'[{"id": 1}]',
        b'{"other": [{"id": 1}]}',
        b'{"items": {"id": 1}}',
        b'{"items": null}',
    ],
)
def test_build_objects_when_payload_is_malformed(payload: Optional[bytes]) -> None:
    # when
    with pytest.raises(MalformedPayloadError):
        _ = build_objects(object_type=Identified, payload=payload, key="items")
