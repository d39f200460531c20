from typing import Any, Optional, Type, TypeVar

import requests

from .exceptions import APIStatusError, ResponseDecodeError
from .status import KNOWN_ERRORS, status_text

T = TypeVar("T")


def _error_message(response: requests.Response) -> Optional[str]:
    """Extracts the `message` field from a JSON error body, if there is one.

    A body that cannot be read or is not a JSON object yields None, so that a
    bad error body never hides the status error itself.
    """
    try:
        data = response.json()
    except (ValueError, requests.exceptions.RequestException):
        return None
    if isinstance(data, dict) and data.get("message") not in (None, ""):
        return str(data["message"])
    return None


def validate_response(response: requests.Response) -> None:
    """Checks the status code of a DeepL API response.

    Any status in [200, 300) is a success, and the body is left untouched so
    it can still be parsed. For every other status the body is read and, if
    it is a JSON object with a `message` field, that message is appended to
    the error text.

    Args:
        response: The raw response returned by the transport.

    Raises:
        APIStatusError: If the status code is outside [200, 300).
    """
    code = response.status_code
    if 200 <= code < 300:
        return
    raise APIStatusError(
        status_code=code,
        reason=status_text(code),
        description=KNOWN_ERRORS.get(code),
        message=_error_message(response),
    )


def parse_response(response: requests.Response, shape: Type[T]) -> T:
    """Reads the whole response body and decodes it into `shape`.

    Args:
        response: A response that already passed `validate_response`.
        shape: A result class exposing a `from_json` constructor, such as
            `TranslationResult` or `Usage`.

    Returns:
        An instance of `shape` built from the JSON body.

    Raises:
        ResponseDecodeError: If the body cannot be read, is not valid JSON,
            or does not match the structure of `shape`.
    """
    # requests' JSONDecodeError is both a ValueError and a RequestException,
    # so ValueError has to be caught first.
    try:
        data: Any = response.json()
    except ValueError as e:
        raise ResponseDecodeError(f"Invalid JSON in response body: {e}") from e
    except requests.exceptions.RequestException as e:
        raise ResponseDecodeError(f"Could not read response body: {e}") from e

    try:
        return shape.from_json(data)  # type: ignore[attr-defined]
    except (TypeError, ValueError) as e:
        raise ResponseDecodeError(f"Unexpected response structure for {shape.__name__}: {e}") from e


def decode(response: requests.Response, shape: Type[T]) -> T:
    """Validates the status of `response`, then parses its body into `shape`."""
    validate_response(response)
    return parse_response(response, shape)
