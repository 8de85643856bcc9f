from networkable_sdk.http.entities import HTTPRequest
from networkable_sdk.http.utils.request_building import (
    RequestData,
    prepare_request_data,
)


def test_prepare_request_data_when_query_is_provided() -> None:
    # when
    result = prepare_request_data(
        method=HTTPRequest.POST,
        url="https://some.com/endpoint",
        query={"page": "2"},
        body=b'{"some": "value"}',
    )

    # then
    assert result == RequestData(
        url="https://some.com/endpoint?page=2",
        method=HTTPRequest.POST,
        body=b'{"some": "value"}',
    )


def test_prepare_request_data_when_no_query_nor_body_provided() -> None:
    # when
    result = prepare_request_data(
        method=HTTPRequest.GET,
        url="https://some.com/endpoint",
    )

    # then
    assert result == RequestData(
        url="https://some.com/endpoint",
        method=HTTPRequest.GET,
        body=None,
    )


def test_prepare_request_data_when_url_cannot_be_composed() -> None:
    # when
    result = prepare_request_data(
        method=HTTPRequest.GET,
        url="http://[::1",
        query={"page": "2"},
    )

    # then
    assert result is None
