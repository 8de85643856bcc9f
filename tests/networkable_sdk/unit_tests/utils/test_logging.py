import logging

from networkable_sdk.utils.logging import SDK_LOGGER_NAME, get_logger


def test_get_logger_returns_child_of_sdk_logger() -> None:
    # when
    result = get_logger("http.client")

    # then
    assert result.name == "networkable_sdk.http.client"
    assert result.parent is logging.getLogger(SDK_LOGGER_NAME)


def test_get_logger_configures_sdk_logger_once() -> None:
    # when
    get_logger("first")
    get_logger("second")

    # then
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    assert len(sdk_logger.handlers) == 1
    assert sdk_logger.propagate is False
