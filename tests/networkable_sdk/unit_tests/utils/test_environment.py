import pytest

from networkable_sdk.utils.environment import str2bool


@pytest.mark.parametrize("value", ["true", "True", "TRUE", True])
def test_str2bool_when_value_is_truthy(value) -> None:
    # when
    result = str2bool(value=value)

    # then
    assert result is True


@pytest.mark.parametrize("value", ["false", "False", "FALSE", False])
def test_str2bool_when_value_is_falsy(value) -> None:
    # when
    result = str2bool(value=value)

    # then
    assert result is False


@pytest.mark.parametrize("value", ["1", "yes", ""])
def test_str2bool_when_value_is_invalid(value: str) -> None:
    # when
    with pytest.raises(ValueError):
        _ = str2bool(value=value)
