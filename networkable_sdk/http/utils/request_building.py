from dataclasses import dataclass
from typing import Optional

from networkable_sdk.http.entities import HTTPRequest, Query
from networkable_sdk.http.utils.url_building import with_query


@dataclass(frozen=True)
class RequestData:
    """Data class for a single request.

    Attributes:
        url: The URL of the request, query items included.
        method: The HTTP method of the request.
        body: The raw payload of the request.
    """

    url: str
    method: HTTPRequest
    body: Optional[bytes] = None


def prepare_request_data(
    method: HTTPRequest,
    url: str,
    query: Optional[Query] = None,
    body: Optional[bytes] = None,
) -> Optional[RequestData]:
    """Prepare request data.

    Args:
        method: The HTTP method of the request.
        url: The target URL.
        query: Query items merged into the URL.
        body: The raw payload of the request.

    Returns:
        The request data, or None if the query cannot be composed with the URL.
    """
    request_url = with_query(url=url, query=query)
    if request_url is None:
        return None
    return RequestData(url=request_url, method=method, body=body)
