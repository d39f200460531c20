from http import HTTPStatus
from typing import Dict, Optional

# DeepL-specific descriptions, supplementing the standard HTTP reason phrases.
# See https://developers.deepl.com/docs/best-practices/error-handling
KNOWN_ERRORS: Dict[int, str] = {
    400: "Bad request. Please check error message and your parameters.",
    403: "Authorization failed. Please supply a valid DeepL-Auth-Key.",
    404: "The requested resource could not be found.",
    413: "The request size exceeds the limit.",
    414: "The request URL is too long.",
    429: "Too many requests. Please wait and resend your request.",
    456: "Quota exceeded. The character limit has been reached.",
    503: "Resource currently unavailable. Try again later.",
    529: "Too many requests. Please wait and resend your request.",
}

UNKNOWN_STATUS_TEXT = "Unknown HTTP error"


def standard_phrase(status_code: int) -> Optional[str]:
    """Returns the standard HTTP reason phrase for a code, or None."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return None


def status_text(status_code: int) -> str:
    """Returns a human-readable status text for an HTTP status code.

    Standard codes use their reason phrase, followed by the DeepL description
    when one is known. Non-standard codes that DeepL documents (e.g. 456) use
    the description alone, and anything else is reported as unknown.

    Args:
        status_code: The HTTP status code of the response.

    Returns:
        The status text, never empty.
    """
    phrase = standard_phrase(status_code)
    description = KNOWN_ERRORS.get(status_code)
    if phrase and description:
        return f"{phrase}: {description}"
    return phrase or description or UNKNOWN_STATUS_TEXT
