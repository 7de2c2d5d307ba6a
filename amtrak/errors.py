from __future__ import annotations

from typing import Optional


class AmtrakError(Exception):
    """Base error for issues communicating with the Amtraker API."""


class AmtrakRequestError(AmtrakError):
    """Raised when the request could not be sent or no response was received."""


class AmtrakResponseError(AmtrakError):
    """Raised when the Amtraker API returns a payload that does not match the model."""


class AmtrakDebuggingResponseError(AmtrakResponseError):
    """Decode failure carrying the offending field path and the raw response text.

    Only produced by the ``*_with_debugging`` entry points.
    """

    def __init__(self, message: str, *, path: str, response: str) -> None:
        super().__init__(f"{message} at '{path}': {response}")
        self.path = path
        self.response = response


class AmtrakApiError(AmtrakError):
    """Raised when the Amtraker API reports an application-level error."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(f"API returned an error response: {message}")
        self.message = message
        self.status_code = status_code
