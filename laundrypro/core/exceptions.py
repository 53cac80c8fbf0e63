"""
Error taxonomy for the LaundryPro client.

Domain services let these propagate. Stores and flow controllers catch them at
the operation boundary and keep a user-facing message via ``user_message``.
"""
from typing import Any, Dict, Optional

TRANSPORT_MESSAGE = "Network error, please check your connection and try again"
UNEXPECTED_MESSAGE = "Something went wrong, please try again"


class LaundryProError(Exception):
    """Base exception for every client-side failure."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(self.message)


class ValidationError(LaundryProError):
    """Input rejected before any network call was issued."""


class TransportError(LaundryProError):
    """Timeout or connectivity failure; the server never answered."""


class OtpVerificationError(LaundryProError):
    """The phone identity provider rejected the challenge or the code."""


class ApiError(LaundryProError):
    """The API answered with an error status."""

    @property
    def server_message(self) -> Optional[str]:
        if isinstance(self.response_data, dict):
            message = self.response_data.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    @classmethod
    def from_response(cls, status: int, payload: Optional[Dict[str, Any]]) -> "ApiError":
        """Build the subclass matching an HTTP error status."""
        if status == 401:
            error_cls = UnauthenticatedError
        elif status == 403:
            error_cls = ForbiddenError
        elif status == 410:
            error_cls = SessionExpiredError
        elif 400 <= status < 500:
            error_cls = DomainError
        else:
            error_cls = ServerError

        message = None
        if isinstance(payload, dict):
            message = payload.get("message")
        return error_cls(
            message or f"API request failed: {status}",
            status_code=status,
            response_data=payload,
        )


class UnauthenticatedError(ApiError):
    """401: no credential or an invalid one. Route to login."""


class ForbiddenError(ApiError):
    """403: valid credential, insufficient role. Never log out on this."""


class SessionExpiredError(ApiError):
    """410: the credential lapsed and the silent refresh did not recover it."""


class DomainError(ApiError):
    """Any other 4xx carrying a server-supplied message."""


class ServerError(ApiError):
    """5xx or a response body that is not the expected envelope."""


def user_message(error: BaseException, default: str) -> str:
    """
    Extract the message shown to the user for a failed operation.

    Prefers the server message, then the transport message, then ``default``.
    """
    if isinstance(error, ApiError):
        return error.server_message or default
    if isinstance(error, TransportError):
        return error.message or TRANSPORT_MESSAGE
    if isinstance(error, (ValidationError, OtpVerificationError)):
        return error.message or default
    return default
