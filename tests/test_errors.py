import pytest
from flightbrief.weather.errors import (
    WeatherAPIError,
    WeatherErrorKind,
    InvalidRequestError,
    NetworkError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ClientError,
    ServerError,
    ParseError,
)


def test_weather_api_error_str_and_flags() -> None:
    err = WeatherAPIError(code=404, message="Not Found")
    assert str(err) == "[404] Not Found"
    assert err.is_client_error is True
    assert err.is_server_error is False


@pytest.mark.parametrize(
    "code, expected_type",
    [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (400, ClientError),
        (500, ServerError),
        (503, ServerError),
        (302, WeatherAPIError),
    ],
)
def test_from_response_creates_expected_error(
    code: int, expected_type: type[WeatherAPIError]
) -> None:
    resp = {"message": "test error"}
    err = WeatherAPIError.from_response(resp, code)
    assert isinstance(err, expected_type)
    assert err.code == code
    assert err.kind is WeatherErrorKind.SERVER_ERROR
    assert "test error" in str(err)


def test_from_response_without_message_uses_default() -> None:
    err = WeatherAPIError.from_response({}, 502)
    assert isinstance(err, ServerError)
    assert err.message == "Server error"


def test_invalid_request_error_kind() -> None:
    err = InvalidRequestError("Coordinates out of range")
    assert err.kind is WeatherErrorKind.INVALID_REQUEST
    assert str(err) == "[0] Coordinates out of range"


def test_network_error_wraps_exception() -> None:
    try:
        raise ConnectionError("BOOM")
    except ConnectionError as e:
        err = NetworkError(message="Connection error", original_error=e)
        assert isinstance(err, NetworkError)
        assert err.kind is WeatherErrorKind.NETWORK_UNREACHABLE
        assert str(err) == "[0] Connection error"
        assert isinstance(err.original_error, Exception)


def test_parse_error_wraps_exception() -> None:
    try:
        raise ValueError("bad parse")
    except ValueError as e:
        err = ParseError(message="Parse error", original_error=e)
        assert isinstance(err, ParseError)
        assert err.kind is WeatherErrorKind.DECODE_ERROR
        assert str(err) == "[0] Parse error"
        assert isinstance(err.original_error, Exception)
