import asyncio
from typing import Optional, Tuple

import aiohttp
import requests

from networkable_sdk.config import LOG_RESPONSES
from networkable_sdk.http.utils.request_building import RequestData
from networkable_sdk.http.utils.url_building import mask_query_values
from networkable_sdk.utils.logging import get_logger

logger = get_logger("http.executors")

RequestResult = Tuple[Optional[bytes], Optional[Exception]]


def execute_request(
    session: requests.Session,
    request_data: RequestData,
) -> RequestResult:
    """Execute a single request.

    HTTP error statuses are not turned into errors: the payload of any response
    that arrived is returned as is.

    Args:
        session: The session to send the request with.
        request_data: The request to send.

    Returns:
        The response payload and None, or None and the transport error.
    """
    try:
        response = session.request(
            request_data.method.string_value(),
            request_data.url,
            data=request_data.body,
        )
    except requests.RequestException as error:
        logger.debug(
            "Request %s %s failed: %s",
            request_data.method.string_value(),
            mask_query_values(request_data.url),
            error,
        )
        return None, error
    if LOG_RESPONSES:
        log_response_metadata(
            request_data=request_data,
            status=response.status_code,
            content_type=response.headers.get("Content-Type"),
            content_length=len(response.content),
        )
    return response.content, None


async def execute_request_async(
    session: aiohttp.ClientSession,
    request_data: RequestData,
) -> RequestResult:
    """Execute a single request asynchronously.

    Args:
        session: The session to send the request with.
        request_data: The request to send.

    Returns:
        The response payload and None, or None and the transport error.
    """
    try:
        async with session.request(
            request_data.method.string_value(),
            request_data.url,
            data=request_data.body,
        ) as response:
            payload = await response.read()
            if LOG_RESPONSES:
                log_response_metadata(
                    request_data=request_data,
                    status=response.status,
                    content_type=response.headers.get("Content-Type"),
                    content_length=len(payload),
                )
    except (aiohttp.ClientError, asyncio.TimeoutError) as error:
        logger.debug(
            "Request %s %s failed: %s",
            request_data.method.string_value(),
            mask_query_values(request_data.url),
            error,
        )
        return None, error
    return payload, None


def log_response_metadata(
    request_data: RequestData,
    status: int,
    content_type: Optional[str],
    content_length: int,
) -> None:
    logger.debug(
        "Response: %s %s -> %s (%s, %d bytes)",
        request_data.method.string_value(),
        mask_query_values(request_data.url),
        status,
        content_type or "unknown content type",
        content_length,
    )
