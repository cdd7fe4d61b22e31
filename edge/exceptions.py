"""Exceptions raised by the Apigee Edge client."""

import traceback
from typing import Any, Optional

import httpx


class ApiException(Exception):
    """Base exception for failed Apigee Edge API calls."""

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiException":
        """Build the matching exception from an error response.

        Edge reports failures as ``{"code": ..., "message": ...}``; fall back
        to the reason phrase when the body is not JSON.
        """
        code = None
        message = response.reason_phrase or f"HTTP {response.status_code}"
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            code = payload.get("code")
            message = payload.get("message") or message

        if 400 <= response.status_code < 500:
            exception_class = ClientErrorException
        elif response.status_code >= 500:
            exception_class = ServerErrorException
        else:
            exception_class = cls
        return exception_class(message, code=code, status_code=response.status_code)


class ClientErrorException(ApiException):
    """Edge rejected the request (4xx)."""


class ServerErrorException(ApiException):
    """Edge failed to process the request (5xx)."""


def decode_exception(exception: BaseException) -> dict[str, Any]:
    """Extract log context from an exception.

    Returns the exception class, its message, and the function, file and
    line where it was raised, plus the formatted backtrace.
    """
    frames = traceback.extract_tb(exception.__traceback__)
    origin = frames[-1] if frames else None
    return {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        "function": origin.name if origin else None,
        "file": origin.filename if origin else None,
        "line": origin.lineno if origin else None,
        "backtrace": "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        ),
    }
