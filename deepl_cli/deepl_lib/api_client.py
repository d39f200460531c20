import sys
from typing import Mapping, Optional, Type, TypeVar
from urllib.parse import urlencode

import requests

from .decoder import decode
from .exceptions import APIConnectionError

# Base URLs for the two DeepL subscription tiers. Every operation appends its
# own path (see the *_PATH constants below).
FREE_API_BASE_URL: str = "https://api-free.deepl.com/v2"
PRO_API_BASE_URL: str = "https://api.deepl.com/v2"

TRANSLATE_PATH = "/translate"
USAGE_PATH = "/usage"
LANGUAGES_PATH = "/languages"
GLOSSARY_LANGUAGE_PAIRS_PATH = "/glossary-language-pairs"

T = TypeVar("T")


def get_endpoint(path: str, pro: bool = False) -> str:
    """Returns the fully-qualified URL of an operation for the given tier."""
    base_url = PRO_API_BASE_URL if pro else FREE_API_BASE_URL
    return f"{base_url}{path}"


def send(
    method: str,
    endpoint: str,
    auth_key: str,
    params: Mapping[str, str],
    session: Optional[requests.Session] = None,
    debug: int = 0
) -> requests.Response:
    """Sends one authenticated request to the DeepL API.

    This is the single point where the client talks to the network. POST
    requests carry `params` as an `application/x-www-form-urlencoded` body,
    GET requests carry them in the query string. The key is only ever sent
    in the `Authorization` header, never as a form field.

    The response is requested with `stream=True`, so its body is returned
    open and unread. Closing it is up to the caller.

    Args:
        method: The HTTP method, "GET" or "POST".
        endpoint: The fully-qualified URL of the operation.
        auth_key: The DeepL authentication key.
        params: The request parameters; only those meant to take effect.
        session: An optional `requests.Session` to send the request with.
        debug: Debug level; at 2 or more the request is printed to stderr.

    Returns:
        The raw response, whatever its status code.

    Raises:
        APIConnectionError: If the request could not be built or sent, e.g.
                            an invalid URL, a DNS or connection failure.
    """
    method = method.upper()
    if debug > 1:
        print(f"--- DEBUG: {method} request to endpoint: {endpoint} ---", file=sys.stderr)
        print(f"--- DEBUG: Request Parameters ---\n{urlencode(dict(params))}\n-------------------------------------", file=sys.stderr)

    headers = {"Authorization": f"DeepL-Auth-Key {auth_key}"}
    payload = {"params" if method == "GET" else "data": dict(params)}
    http = session if session is not None else requests
    try:
        return http.request(method, endpoint, headers=headers, stream=True, **payload)
    except requests.exceptions.RequestException as e:
        raise APIConnectionError(f"API request to {endpoint} failed: {e}") from e


def api_call(
    method: str,
    endpoint: str,
    auth_key: str,
    params: Mapping[str, str],
    shape: Type[T],
    session: Optional[requests.Session] = None,
    debug: int = 0
) -> T:
    """Sends a request and decodes its response into `shape`.

    The response is always closed before returning, whether decoding
    succeeded, the status was an error, or the body could not be parsed.

    Raises:
        APIConnectionError: On transport failures.
        APIStatusError: If the status code is outside [200, 300).
        ResponseDecodeError: If a successful body cannot be decoded.
    """
    response = send(method, endpoint, auth_key, params, session=session, debug=debug)
    try:
        if debug:
            print(f"--- DEBUG: Response status: {response.status_code} {response.reason} ---", file=sys.stderr)
        result = decode(response, shape)
    finally:
        response.close()

    if debug > 1:
        print(f"--- DEBUG: Decoded Response ---\n{result}\n--------------------------------", file=sys.stderr)
    return result
