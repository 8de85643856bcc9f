from networkable_sdk.http.client import Networkable
from networkable_sdk.http.entities import (
    HTTPRequest,
    ImageFormat,
    NetworkableDataclass,
    NetworkableObject,
)
from networkable_sdk.http.errors import (
    EncodingError,
    MalformedPayloadError,
    NetworkableError,
    RequestCancelledError,
)
from networkable_sdk.http.utils.url_building import with_query
from networkable_sdk.version import __version__
