class NetworkableError(Exception):
    """Base class for Networkable SDK errors."""

    pass


class RequestCancelledError(NetworkableError):
    """Error for requests cancelled by `cancel_requests()` before delivering a response.

    Attributes:
        url: The URL of the cancelled request.
    """

    def __init__(self, url: str):
        super().__init__(f"Request to {url} was cancelled.")
        self.__url = url

    @property
    def url(self) -> str:
        """The URL of the cancelled request."""
        return self.__url


class MalformedPayloadError(NetworkableError):
    """Error for response payloads that do not have the expected JSON shape."""

    pass


class EncodingError(NetworkableError):
    """Error for response payloads that cannot be decoded into an image."""

    pass
