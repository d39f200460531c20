"""
This module defines custom exceptions for the deepl_cli application.

Every failure the DeepL client can produce is one of these, so callers can
tell "the network failed" apart from "the service rejected the request" and
"the service's success response was unparseable".
"""
from typing import Optional


class DeepLError(Exception):
    """Base class for all custom exceptions in the deepl_cli application."""
    pass

class APIConnectionError(DeepLError):
    """Raised when the request could not be sent or no response came back.

    This could be due to a network issue, a DNS failure, or a malformed URL.
    """
    pass

class APIStatusError(DeepLError):
    """Raised when the DeepL API returns a status code outside [200, 300).

    Attributes:
        status_code (int): The HTTP status code returned by the server.
        reason (str): The status text for the code, including any known
            DeepL-specific description.
        description (Optional[str]): The DeepL-specific description of the
            code, if the code is a known one.
        message (Optional[str]): The `message` field of the JSON error body,
            if the body contained one.
    """
    def __init__(self, status_code: int, reason: str, description: Optional[str] = None, message: Optional[str] = None):
        text = f"Invalid response [{status_code} {reason}]"
        if message:
            text = f"{text}, {message}"
        super().__init__(text)
        self.status_code = status_code
        self.reason = reason
        self.description = description
        self.message = message

class ResponseDecodeError(DeepLError):
    """Raised when a response body cannot be read or decoded."""
    def __init__(self, detail: str):
        super().__init__(f"{detail} (occurred while parsing response)")
        self.detail = detail

class PreconditionError(DeepLError):
    """Raised when a call is rejected before any request is sent."""
    pass

class EmptyInputError(PreconditionError):
    """Raised when there is no text to translate."""
    pass

class SettingsError(DeepLError):
    """Raised when the credential or the settings file cannot be resolved."""
    pass
