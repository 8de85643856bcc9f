import re
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from networkable_sdk.config import SENSITIVE_QUERY_KEYS
from networkable_sdk.http.entities import Query

QUERY_ITEM_PATTERN = re.compile(r"(?<=[?&])(?P<key>[^&=#]+)=(?P<value>[^&#]*)")
MIN_VALUE_LENGTH_TO_REVEAL_AFFIXES = 8


def with_query(url: str, query: Optional[Query] = None) -> Optional[str]:
    """Append query items to a URL.

    Query items already present in `url` are kept, new ones are appended after
    them. No ordering is guaranteed between the items of `query`.

    Args:
        url: Absolute base URL.
        query: Key/value pairs to append (ex: {"api_key": "qwertyu"}).

    Returns:
        The composed URL, `url` itself for an empty query, or None when `url`
        cannot be decomposed into components. Relative URLs (no scheme or no
        host) count as such a failure, since a request cannot be sent to them.
    """
    try:
        components = urlsplit(url)
        components.port  # raises ValueError for a malformed port
    except ValueError:
        return None
    if not components.scheme or not components.netloc:
        return None
    if not query:
        return url
    encoded_query = urlencode(list(query.items()))
    if components.query:
        encoded_query = f"{components.query}&{encoded_query}"
    return urlunsplit(components._replace(query=encoded_query))


def mask_query_values(url: str) -> str:
    """Hide the values of sensitive query items so the URL can be logged.

    Args:
        url: The URL to mask.

    Returns:
        The URL with sensitive values replaced.
    """
    return QUERY_ITEM_PATTERN.sub(_mask_query_item, url)


def _mask_query_item(match: re.Match) -> str:
    key = match.group("key")
    if key.lower() not in SENSITIVE_QUERY_KEYS:
        return match.group(0)
    value = match.group("value")
    if len(value) < MIN_VALUE_LENGTH_TO_REVEAL_AFFIXES:
        return f"{key}=***"
    return f"{key}={value[:2]}***{value[-2:]}"
