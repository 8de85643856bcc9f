from concurrent.futures import Future
from functools import partial
from typing import Callable, ClassVar, List, Optional, Type, TypeVar, Union

import numpy as np
from PIL import Image

from networkable_sdk.http.entities import (
    HTTPRequest,
    ImageFormat,
    NetworkableObject,
    Query,
)
from networkable_sdk.http.errors import (
    EncodingError,
    MalformedPayloadError,
    RequestCancelledError,
)
from networkable_sdk.http.session import (
    DEFAULT_ASYNC_SESSION_MANAGER,
    DEFAULT_SESSION_MANAGER,
    AsyncSessionManager,
    SessionManager,
)
from networkable_sdk.http.utils.decoding import build_object, build_objects
from networkable_sdk.http.utils.encoding import decode_image
from networkable_sdk.http.utils.executors import (
    RequestResult,
    execute_request,
    execute_request_async,
)
from networkable_sdk.http.utils.request_building import (
    RequestData,
    prepare_request_data,
)
from networkable_sdk.http.utils.url_building import mask_query_values
from networkable_sdk.utils.logging import get_logger

logger = get_logger("http.client")

T = TypeVar("T", bound=NetworkableObject)
R = TypeVar("R")

NetHandler = Callable[[Optional[bytes], Optional[Exception]], None]
DecodedImage = Union[Image.Image, np.ndarray]


class Networkable:
    """Mixin giving controllers quick networking access.

    Subclasses declare `base_url`, the URL the helpers target unless told
    otherwise. All controllers share one session per session manager.

    Callback helpers return a `Future` resolving to the helper result, or None
    when the request URL cannot be composed. In that case nothing is sent and
    the completion is never invoked. Otherwise the completion is invoked
    exactly once, from a worker thread, before the future resolves.

    Every helper has an `_async` twin returning the result directly.
    """

    base_url: ClassVar[str]
    session_manager: ClassVar[SessionManager] = DEFAULT_SESSION_MANAGER
    async_session_manager: ClassVar[AsyncSessionManager] = (
        DEFAULT_ASYNC_SESSION_MANAGER
    )

    @classmethod
    def get_image(
        cls,
        url: str,
        query: Optional[Query] = None,
        completion: Optional[Callable[[Optional[DecodedImage]], None]] = None,
        image_format: ImageFormat = ImageFormat.PILLOW,
    ) -> Optional["Future[Optional[DecodedImage]]"]:
        """Retrieve an image from a URL.

        Args:
            url: The endpoint where the image data is stored.
            query: Specific parameters for the data at the endpoint.
            completion: Receives the image, or None if no image was retrieved.
            image_format: Whether to decode into a PIL image or a numpy array.
        """
        return cls._dispatch(
            request_data=cls._prepare(method=HTTPRequest.GET, url=url, query=query),
            transform=partial(_image_from_result, image_format=image_format),
            completion=completion,
        )

    @classmethod
    def get_object(
        cls,
        object_type: Type[T],
        url: Optional[str] = None,
        query: Optional[Query] = None,
        completion: Optional[Callable[[Optional[T]], None]] = None,
    ) -> Optional["Future[Optional[T]]"]:
        """Build an object of the given type from the data at a URL.

        The object's data must be the top-level JSON object at the URL.

        Args:
            object_type: The `NetworkableObject` type to build.
            url: The endpoint to gather data from, `base_url` by default.
            query: Specific parameters for the data at the endpoint.
            completion: Receives the object, or None if no object could be built.
        """
        return cls._dispatch(
            request_data=cls._prepare(method=HTTPRequest.GET, url=url, query=query),
            transform=partial(_object_from_result, object_type=object_type),
            completion=completion,
        )

    @classmethod
    def get_objects(
        cls,
        object_type: Type[T],
        key: str,
        url: Optional[str] = None,
        query: Optional[Query] = None,
        completion: Optional[Callable[[List[T]], None]] = None,
    ) -> Optional["Future[List[T]]"]:
        """Build a list of objects of the given type from the data at a URL.

        The list must live under `key` in the top-level JSON object at the URL.
        Elements the type rejects are dropped.

        Args:
            object_type: The `NetworkableObject` type to build.
            key: The key under which the list of objects lives.
            url: The endpoint to gather data from, `base_url` by default.
            query: Specific parameters for the data at the endpoint.
            completion: Receives the objects, or an empty list if none were retrieved.
        """
        return cls._dispatch(
            request_data=cls._prepare(method=HTTPRequest.GET, url=url, query=query),
            transform=partial(_objects_from_result, object_type=object_type, key=key),
            completion=completion,
        )

    @classmethod
    def get(
        cls,
        url: Optional[str] = None,
        query: Optional[Query] = None,
        completion: Optional[NetHandler] = None,
    ) -> Optional["Future[RequestResult]"]:
        return cls.perform(
            request=HTTPRequest.GET, url=url, query=query, completion=completion
        )

    @classmethod
    def put(
        cls,
        body: bytes,
        url: Optional[str] = None,
        query: Optional[Query] = None,
        completion: Optional[NetHandler] = None,
    ) -> Optional["Future[RequestResult]"]:
        return cls.perform(
            request=HTTPRequest.PUT,
            url=url,
            query=query,
            body=body,
            completion=completion,
        )

    @classmethod
    def post(
        cls,
        body: bytes,
        url: Optional[str] = None,
        query: Optional[Query] = None,
        completion: Optional[NetHandler] = None,
    ) -> Optional["Future[RequestResult]"]:
        return cls.perform(
            request=HTTPRequest.POST,
            url=url,
            query=query,
            body=body,
            completion=completion,
        )

    @classmethod
    def put_object(
        cls,
        networkable_object: NetworkableObject,
        query: Optional[Query] = None,
        completion: Optional[NetHandler] = None,
    ) -> Optional["Future[RequestResult]"]:
        """Write an object's JSON data to its endpoint with PUT.

        Objects without an endpoint, or whose JSON cannot be serialised, are
        not sent and the completion is never invoked.
        """
        return cls._write_object(
            method=HTTPRequest.PUT,
            networkable_object=networkable_object,
            query=query,
            completion=completion,
        )

    @classmethod
    def post_object(
        cls,
        networkable_object: NetworkableObject,
        query: Optional[Query] = None,
        completion: Optional[NetHandler] = None,
    ) -> Optional["Future[RequestResult]"]:
        """Write an object's JSON data to its endpoint with POST.

        Objects without an endpoint, or whose JSON cannot be serialised, are
        not sent and the completion is never invoked.
        """
        return cls._write_object(
            method=HTTPRequest.POST,
            networkable_object=networkable_object,
            query=query,
            completion=completion,
        )

    @classmethod
    def perform(
        cls,
        request: HTTPRequest,
        url: Optional[str] = None,
        query: Optional[Query] = None,
        body: Optional[bytes] = None,
        completion: Optional[NetHandler] = None,
    ) -> Optional["Future[RequestResult]"]:
        """Perform a network request on the shared session.

        Transport errors are handed to the completion as they were raised.
        HTTP error statuses are not errors: their payload is delivered as data.

        Args:
            request: The HTTP method.
            url: The target endpoint, `base_url` by default.
            query: Specific parameters for the data at the endpoint.
            body: The data sent on outbound request types (PUT, POST, etc).
            completion: Receives the data gathered or the transport error.

        Returns:
            Future resolving to `(data, error)`, or None if the URL cannot be composed.
        """
        return cls._dispatch(
            request_data=cls._prepare(method=request, url=url, query=query, body=body),
            transform=_pass_result,
            completion=_unpack_result(completion),
        )

    @classmethod
    def cancel_requests(cls) -> None:
        """Cancel all requests of the shared session.

        Requests that have not started yet, and requests whose response arrives
        after this call, complete with `RequestCancelledError`.
        The next request runs on a new session.
        """
        cls.session_manager.invalidate_and_cancel()

    @classmethod
    async def get_image_async(
        cls,
        url: str,
        query: Optional[Query] = None,
        image_format: ImageFormat = ImageFormat.PILLOW,
    ) -> Optional[DecodedImage]:
        result = await cls.perform_async(request=HTTPRequest.GET, url=url, query=query)
        if result is None:
            return None
        return _image_from_result(result=result, image_format=image_format)

    @classmethod
    async def get_object_async(
        cls,
        object_type: Type[T],
        url: Optional[str] = None,
        query: Optional[Query] = None,
    ) -> Optional[T]:
        result = await cls.perform_async(request=HTTPRequest.GET, url=url, query=query)
        if result is None:
            return None
        return _object_from_result(result=result, object_type=object_type)

    @classmethod
    async def get_objects_async(
        cls,
        object_type: Type[T],
        key: str,
        url: Optional[str] = None,
        query: Optional[Query] = None,
    ) -> List[T]:
        result = await cls.perform_async(request=HTTPRequest.GET, url=url, query=query)
        if result is None:
            return []
        return _objects_from_result(result=result, object_type=object_type, key=key)

    @classmethod
    async def get_async(
        cls,
        url: Optional[str] = None,
        query: Optional[Query] = None,
    ) -> Optional[RequestResult]:
        return await cls.perform_async(request=HTTPRequest.GET, url=url, query=query)

    @classmethod
    async def put_async(
        cls,
        body: bytes,
        url: Optional[str] = None,
        query: Optional[Query] = None,
    ) -> Optional[RequestResult]:
        return await cls.perform_async(
            request=HTTPRequest.PUT, url=url, query=query, body=body
        )

    @classmethod
    async def post_async(
        cls,
        body: bytes,
        url: Optional[str] = None,
        query: Optional[Query] = None,
    ) -> Optional[RequestResult]:
        return await cls.perform_async(
            request=HTTPRequest.POST, url=url, query=query, body=body
        )

    @classmethod
    async def put_object_async(
        cls,
        networkable_object: NetworkableObject,
        query: Optional[Query] = None,
    ) -> Optional[RequestResult]:
        request_data = cls._prepare_object_write(
            method=HTTPRequest.PUT, networkable_object=networkable_object, query=query
        )
        return await cls._dispatch_async(request_data=request_data)

    @classmethod
    async def post_object_async(
        cls,
        networkable_object: NetworkableObject,
        query: Optional[Query] = None,
    ) -> Optional[RequestResult]:
        request_data = cls._prepare_object_write(
            method=HTTPRequest.POST, networkable_object=networkable_object, query=query
        )
        return await cls._dispatch_async(request_data=request_data)

    @classmethod
    async def perform_async(
        cls,
        request: HTTPRequest,
        url: Optional[str] = None,
        query: Optional[Query] = None,
        body: Optional[bytes] = None,
    ) -> Optional[RequestResult]:
        """Perform a network request on the shared async session.

        Returns:
            `(data, error)`, or None if the URL cannot be composed.
        """
        request_data = cls._prepare(method=request, url=url, query=query, body=body)
        return await cls._dispatch_async(request_data=request_data)

    @classmethod
    async def cancel_requests_async(cls) -> None:
        """Close the shared async session; requests in flight fail with a transport error."""
        await cls.async_session_manager.invalidate_and_cancel()

    @classmethod
    def _prepare(
        cls,
        method: HTTPRequest,
        url: Optional[str],
        query: Optional[Query],
        body: Optional[bytes] = None,
    ) -> Optional[RequestData]:
        target_url = cls.base_url if url is None else url
        request_data = prepare_request_data(
            method=method, url=target_url, query=query, body=body
        )
        if request_data is None:
            logger.debug(
                "Could not compose URL from %s with query keys %s, request skipped.",
                mask_query_values(target_url),
                sorted(query or {}),
            )
        return request_data

    @classmethod
    def _prepare_object_write(
        cls,
        method: HTTPRequest,
        networkable_object: NetworkableObject,
        query: Optional[Query],
    ) -> Optional[RequestData]:
        endpoint = networkable_object.endpoint
        body = networkable_object.json_data
        if endpoint is None or body is None:
            logger.debug(
                "%s has no endpoint or no JSON data, write skipped.",
                type(networkable_object).__name__,
            )
            return None
        return cls._prepare(method=method, url=endpoint, query=query, body=body)

    @classmethod
    def _write_object(
        cls,
        method: HTTPRequest,
        networkable_object: NetworkableObject,
        query: Optional[Query],
        completion: Optional[NetHandler],
    ) -> Optional["Future[RequestResult]"]:
        return cls._dispatch(
            request_data=cls._prepare_object_write(
                method=method, networkable_object=networkable_object, query=query
            ),
            transform=_pass_result,
            completion=_unpack_result(completion),
        )

    @classmethod
    def _dispatch(
        cls,
        request_data: Optional[RequestData],
        transform: Callable[[RequestResult], R],
        completion: Optional[Callable[[R], None]],
    ) -> Optional["Future[R]"]:
        if request_data is None:
            return None

        session_manager = cls.session_manager

        def send(session, generation: int) -> R:
            raw_result = execute_request(session=session, request_data=request_data)
            if not session_manager.is_current(generation):
                raw_result = (None, _cancellation_error(request_data))
            result = transform(raw_result)
            if completion is not None:
                completion(result)
            return result

        future = session_manager.submit(send)
        if completion is not None:
            future.add_done_callback(
                partial(
                    _complete_cancelled,
                    request_data=request_data,
                    transform=transform,
                    completion=completion,
                )
            )
        return future

    @classmethod
    async def _dispatch_async(
        cls, request_data: Optional[RequestData]
    ) -> Optional[RequestResult]:
        if request_data is None:
            return None
        return await execute_request_async(
            session=cls.async_session_manager.get_session(),
            request_data=request_data,
        )


def _complete_cancelled(
    future: Future,
    request_data: RequestData,
    transform: Callable[[RequestResult], R],
    completion: Callable[[R], None],
) -> None:
    if not future.cancelled():
        return None
    completion(transform((None, _cancellation_error(request_data))))


def _cancellation_error(request_data: RequestData) -> RequestCancelledError:
    return RequestCancelledError(url=mask_query_values(request_data.url))


def _unpack_result(
    completion: Optional[NetHandler],
) -> Optional[Callable[[RequestResult], None]]:
    if completion is None:
        return None
    return lambda result: completion(*result)


def _pass_result(result: RequestResult) -> RequestResult:
    return result


def _image_from_result(
    result: RequestResult, image_format: ImageFormat
) -> Optional[DecodedImage]:
    data, _ = result
    try:
        return decode_image(payload=data, image_format=image_format)
    except EncodingError as error:
        logger.debug("No image retrieved: %s", error)
        return None


def _object_from_result(result: RequestResult, object_type: Type[T]) -> Optional[T]:
    data, _ = result
    try:
        return build_object(object_type=object_type, payload=data)
    except MalformedPayloadError as error:
        logger.debug("No %s retrieved: %s", object_type.__name__, error)
        return None


def _objects_from_result(
    result: RequestResult, object_type: Type[T], key: str
) -> List[T]:
    data, _ = result
    try:
        return build_objects(object_type=object_type, payload=data, key=key)
    except MalformedPayloadError as error:
        logger.debug("No %s objects retrieved: %s", object_type.__name__, error)
        return []
