"""Session store: the authenticated identity and the login phase."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from laundrypro.models.user import CheckLoginResult, LoginMethod, User
from laundrypro.state.store import Store


class AuthPhase(str, Enum):
    """Steps of the login flow."""
    ANONYMOUS = "anonymous"
    PHONE_ENTERED = "phone_entered"  # check-login in flight
    METHOD_CHECKED = "method_checked"
    OTP_SENT = "otp_sent"
    EXCHANGED = "exchanged"  # session cookies set, profile not loaded yet
    NEEDS_PASSWORD = "needs_password"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class SessionState:
    identity: Optional[User] = None
    phase: AuthPhase = AuthPhase.ANONYMOUS
    phone: Optional[str] = None
    login_method: Optional[LoginMethod] = None
    check_result: Optional[CheckLoginResult] = None
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def needs_password(self) -> bool:
        return self.identity is not None and not self.identity.has_password

    @property
    def role(self):
        return self.identity.role if self.identity else None


def phase_for(identity: User) -> AuthPhase:
    return AuthPhase.AUTHENTICATED if identity.has_password else AuthPhase.NEEDS_PASSWORD


class SessionStore(Store[SessionState]):
    """
    Holds exactly one authenticated identity, or none.

    Written only by the auth and profile flow controllers.
    """

    name = "session"

    def __init__(self):
        super().__init__(SessionState)

    def start(self, **changes) -> SessionState:
        """Mark an operation in flight and clear the previous error."""
        return self._set(is_loading=True, error=None, **changes)

    def succeed(self, **changes) -> SessionState:
        return self._set(is_loading=False, **changes)

    def fail(self, message: str, **changes) -> SessionState:
        return self._set(is_loading=False, error=message, **changes)

    def set_identity(self, identity: User) -> SessionState:
        return self._set(identity=identity, phase=phase_for(identity), is_loading=False, error=None)

    def merge_identity(self, changes: Dict[str, Any]) -> SessionState:
        """Apply a server-confirmed partial update to the current identity."""
        if self._state.identity is None:
            return self._state
        identity = self._state.identity.merge(changes)
        return self._set(identity=identity, phase=phase_for(identity))

    def clear_error(self) -> SessionState:
        return self._set(error=None)
