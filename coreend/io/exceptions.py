"""
Error taxonomy shared by every CoreEnd component.

Only :class:`NotInitializedError` and :class:`AlreadyInitializedError` are
raised to the caller. Everything else is returned in the ``error`` field of a
result envelope.
"""

from __future__ import annotations

from typing import Optional

import httpx


class CoreEndError(Exception):
    """Base class for all CoreEnd SDK errors."""


class NotInitializedError(CoreEndError):
    """The SDK has not been initialized."""

    def __init__(self, message: str = "[COREEND] SDK has not been initialized"):
        super().__init__(message)


class AlreadyInitializedError(CoreEndError):
    """The SDK has already been initialized."""

    def __init__(self, message: str = "[COREEND] SDK has already been initialized"):
        super().__init__(message)


class PreconditionError(CoreEndError):
    """The session is in the wrong state for the requested transition."""


class AlreadySignedInError(PreconditionError):
    def __init__(self, message: str = "Already signed in"):
        super().__init__(message)


class NotSignedInError(PreconditionError):
    def __init__(self, message: str = "Not signed in"):
        super().__init__(message)


class RenewalFailedError(CoreEndError):
    """Access token could not be renewed; the session has been logged out."""

    def __init__(self, message: str = "Could not renew access token", cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class ValidationError(CoreEndError):
    """The server answered with incomplete or undecodable data."""


class EmptyCredentialsError(ValidationError):
    def __init__(self, message: str = "Could not sign in: server returned empty credentials"):
        super().__init__(message)


class TransportError(CoreEndError):
    """Network or HTTP-level failure."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
        self.cause = cause


def _decode_response_content(response: httpx.Response) -> str:
    try:
        return response.content.decode("utf-8")[:500]
    except Exception as e:
        if hasattr(response, "is_stream_consumed"):
            return f"Stream is consumed. {e}"
        return f"Can't decode response content: {e}"


def raise_for_status(response: httpx.Response) -> None:
    """
    Raise :class:`TransportError` with the error code and a short body excerpt
    if the response is not a 2xx.

    :param response: Response object
    :type response: httpx.Response
    """
    if response.is_success:
        return

    reason = getattr(response, "reason_phrase", None) or "Can't get reason"
    content = _decode_response_content(response)

    if 400 <= response.status_code < 500:
        kind = "Client Error"
    elif 500 <= response.status_code < 600:
        kind = "Server Error"
    else:
        kind = "Unexpected Status"

    message = "%s %s: %s for url: %s (%s)" % (
        response.status_code,
        kind,
        reason,
        response.url,
        content,
    )
    raise TransportError(message, status_code=response.status_code, response_text=content)


def transport_error_from(exc: Exception, method: str, url: str) -> TransportError:
    """Wrap an exception raised while building or sending ``method url``."""
    return TransportError(f"{method} {url} failed: {exc!r}", cause=exc)
