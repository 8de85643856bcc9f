from dataclasses import dataclass
from io import BytesIO
from typing import Generator, Optional, Type

import pytest
from PIL import Image

from networkable_sdk import Networkable, NetworkableDataclass, NetworkableObject
from networkable_sdk.http.entities import JSON
from networkable_sdk.http.session import AsyncSessionManager, SessionManager

BASE_URL = "https://api.example.com/items"


@dataclass(frozen=True)
class ExampleItem(NetworkableDataclass):
    id: int
    name: str = ""

    @property
    def endpoint(self) -> Optional[str]:
        return f"{BASE_URL}/{self.id}"


class StrictItem(NetworkableObject):
    def __init__(self, identifier: int):
        self.identifier = identifier

    @property
    def json_value(self) -> JSON:
        return {"id": self.identifier}

    @property
    def endpoint(self) -> Optional[str]:
        return None

    @classmethod
    def from_json(cls, payload: JSON) -> Optional["StrictItem"]:
        if "id" not in payload:
            return None
        return cls(identifier=payload["id"])


@pytest.fixture(scope="function")
def example_item_type() -> Type[ExampleItem]:
    return ExampleItem


@pytest.fixture(scope="function")
def strict_item_type() -> Type[StrictItem]:
    return StrictItem


@pytest.fixture(scope="function")
def example_controller() -> Generator[Type[Networkable], None, None]:
    class ExampleController(Networkable):
        base_url = BASE_URL
        session_manager = SessionManager(max_workers=1)
        async_session_manager = AsyncSessionManager()

    yield ExampleController
    ExampleController.session_manager.invalidate_and_cancel()


@pytest.fixture(scope="function")
def example_png_bytes() -> bytes:
    image = Image.new("RGB", (4, 3), color=(255, 0, 0))
    with BytesIO() as buffer:
        image.save(buffer, format="PNG")
        return buffer.getvalue()
