"""
Login flow controller.

Drives the SessionStore through the login phases:

    ANONYMOUS -> PHONE_ENTERED -> METHOD_CHECKED -> OTP_SENT (otp only)
              -> EXCHANGED -> NEEDS_PASSWORD | AUTHENTICATED

Any phase returns to ANONYMOUS on logout. Every operation catches client
errors at its boundary and leaves a user-facing message in ``state.error``.
"""
from typing import Iterable, Optional

from laundrypro.config.settings import Settings, get_settings
from laundrypro.core.exceptions import (
    LaundryProError,
    SessionExpiredError,
    UnauthenticatedError,
    ValidationError,
    user_message,
)
from laundrypro.core.logging import get_service_logger, mask_phone
from laundrypro.models.user import CheckLoginResult, LoginMethod
from laundrypro.services.auth_service import AuthService
from laundrypro.services.phone.providers.base import BasePhoneVerifier, ConfirmationHandle
from laundrypro.state.session import AuthPhase, SessionStore
from laundrypro.state.store import Store
from laundrypro.utils.phone import normalize_phone
from laundrypro.utils.validation import require_text, validate_new_password, validate_otp_code

logger = get_service_logger("auth")

INVALID_PHONE_MESSAGE = "Invalid phone number"
CHECK_LOGIN_MESSAGE = "Could not check this phone number"
SEND_CODE_MESSAGE = "Could not send the verification code"
CONFIRM_CODE_MESSAGE = "Invalid verification code"
LOGIN_MESSAGE = "Login failed"
PROFILE_MESSAGE = "Could not load your profile"
SET_PASSWORD_MESSAGE = "Could not set the password"


class AuthFlowController:
    """
    The only writer of the login part of the SessionStore.

    ``stores`` are reset together with the session on logout.
    """

    def __init__(
        self,
        auth_service: AuthService,
        session: SessionStore,
        phone_verifier: Optional[BasePhoneVerifier] = None,
        stores: Iterable[Store] = (),
        settings: Optional[Settings] = None,
    ):
        self.auth_service = auth_service
        self.session = session
        self.phone_verifier = phone_verifier
        self.stores = list(stores)
        self.settings = settings or get_settings()
        self._confirmation: Optional[ConfirmationHandle] = None

    @property
    def state(self):
        return self.session.state

    async def submit_phone(self, raw_phone: str) -> Optional[CheckLoginResult]:
        """Normalize the phone and ask the server which login method it uses."""
        phone = normalize_phone(raw_phone, self.settings.DEFAULT_COUNTRY_CODE)
        if phone is None:
            self.session.fail(INVALID_PHONE_MESSAGE, phase=AuthPhase.ANONYMOUS)
            return None

        self._confirmation = None
        generation = self.session.generation
        self.session.start(
            phase=AuthPhase.PHONE_ENTERED,
            phone=phone,
            login_method=None,
            check_result=None,
        )
        try:
            result = await self.auth_service.check_login(phone)
        except LaundryProError as e:
            if self._superseded(generation):
                return None
            logger.warning(f"Check login failed for {mask_phone(phone)}: {e}")
            self.session.fail(user_message(e, CHECK_LOGIN_MESSAGE), phase=AuthPhase.ANONYMOUS)
            return None
        if self._superseded(generation):
            return None

        # A resubmitted phone simply overwrites the earlier result
        self.session.succeed(
            phase=AuthPhase.METHOD_CHECKED,
            phone=phone,
            login_method=result.login_method,
            check_result=result,
        )
        logger.info(
            f"Login method for {mask_phone(phone)}: {result.login_method.value}",
            extra={"phase": AuthPhase.METHOD_CHECKED.value},
        )
        return result

    async def request_otp(self) -> bool:
        """Send a one-time code to the checked phone number."""
        phone = self.state.phone
        if phone is None or self.state.login_method != LoginMethod.OTP:
            self.session.fail("Enter your phone number first")
            return False
        if self.phone_verifier is None:
            self.session.fail(SEND_CODE_MESSAGE)
            logger.error("No phone verifier configured for OTP login")
            return False

        generation = self.session.generation
        self.session.start()
        try:
            confirmation = await self.phone_verifier.send_code(phone)
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            logger.warning(f"Sending code to {mask_phone(phone)} failed: {e}")
            self.session.fail(user_message(e, SEND_CODE_MESSAGE))
            return False

        if self._superseded(generation):
            return False
        self._confirmation = confirmation
        self.session.succeed(phase=AuthPhase.OTP_SENT)
        return True

    async def confirm_otp(self, code: str) -> bool:
        """
        Confirm the code, exchange the id token for a session, load the profile.

        Codes shorter than the configured length are ignored.
        """
        code = (code or "").strip()
        if not validate_otp_code(code, self.settings.OTP_LENGTH):
            return False
        if self._confirmation is None:
            self.session.fail("Please request a new verification code")
            return False

        generation = self.session.generation
        self.session.start()

        # 1. Confirm with the identity provider
        try:
            id_token = await self._confirmation.confirm(code)
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            self.session.fail(user_message(e, CONFIRM_CODE_MESSAGE))
            return False
        if self._superseded(generation):
            return False

        # 2. Exchange the provider token for session cookies
        try:
            await self.auth_service.login_with_otp(id_token)
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            logger.warning(f"OTP login failed: {e}")
            self.session.fail(user_message(e, LOGIN_MESSAGE))
            return False
        if self._superseded(generation):
            return False

        self._confirmation = None
        self.session.succeed(phase=AuthPhase.EXCHANGED)

        # 3. Populate the identity
        return await self.load_profile()

    async def submit_password(self, password: str) -> bool:
        """Exchange phone and password for a session, then load the profile."""
        phone = self.state.phone
        if phone is None:
            self.session.fail("Enter your phone number first")
            return False
        try:
            require_text(password, "Password")
        except ValidationError as e:
            self.session.fail(e.message)
            return False

        generation = self.session.generation
        self.session.start()
        try:
            await self.auth_service.login_with_password(phone, password)
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            logger.warning(f"Password login failed for {mask_phone(phone)}: {e}")
            self.session.fail(user_message(e, LOGIN_MESSAGE))
            return False
        if self._superseded(generation):
            return False

        self.session.succeed(phase=AuthPhase.EXCHANGED)
        return await self.load_profile()

    async def load_profile(self) -> bool:
        """
        Fetch the profile and populate the identity.

        On failure the phase is left as it was (EXCHANGED after a login), so
        the call can simply be repeated.
        """
        generation = self.session.generation
        self.session.start()
        try:
            identity = await self.auth_service.get_profile()
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            logger.warning(f"Profile fetch failed: {e}", extra={"phase": self.state.phase.value})
            self.session.fail(user_message(e, PROFILE_MESSAGE))
            return False
        if self._superseded(generation):
            return False

        self.session.set_identity(identity)
        logger.info(
            f"Signed in as {mask_phone(identity.phone)}",
            extra={"user_id": identity.id, "role": identity.role.value, "phase": self.state.phase.value},
        )
        return True

    async def restore_session(self) -> bool:
        """
        Pick up a cookie session that survived from an earlier login.

        A missing or expired session quietly leaves the store anonymous.
        """
        generation = self.session.generation
        self.session.start()
        try:
            identity = await self.auth_service.get_profile()
        except (UnauthenticatedError, SessionExpiredError):
            if self._superseded(generation):
                return False
            logger.info("No session to restore")
            self.session.reset()
            return False
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            self.session.fail(user_message(e, PROFILE_MESSAGE))
            return False
        if self._superseded(generation):
            return False

        self.session.set_identity(identity)
        return True

    async def set_password(self, password: str, confirm_password: str) -> bool:
        """Set the first password, then refresh the profile to pick up ``hasPassword``."""
        if not self.state.is_authenticated:
            self.session.fail("Please log in again")
            return False
        try:
            validate_new_password(password, confirm_password, self.settings.PASSWORD_MIN_LENGTH)
        except ValidationError as e:
            self.session.fail(e.message)
            return False

        generation = self.session.generation
        self.session.start()
        try:
            await self.auth_service.set_password(password, confirm_password)
        except LaundryProError as e:
            if self._superseded(generation):
                return False
            self.session.fail(user_message(e, SET_PASSWORD_MESSAGE))
            return False
        if self._superseded(generation):
            return False

        return await self.load_profile()

    async def logout(self) -> None:
        """
        Tell the server (best effort), then clear the local session and every
        store. Never fails.
        """
        try:
            await self.auth_service.logout()
        except Exception as e:
            logger.warning(f"Server logout failed, clearing local session anyway: {e}")

        self.auth_service.client.clear_cookies()
        self._confirmation = None
        for store in self.stores:
            store.reset()
        self.session.reset()
        logger.info("Logged out")

    def back_to_phone(self) -> None:
        """Abandon the current login attempt and edit the phone number."""
        self._confirmation = None
        self.session.succeed(
            phase=AuthPhase.ANONYMOUS,
            login_method=None,
            check_result=None,
            error=None,
        )

    def clear_error(self) -> None:
        self.session.clear_error()

    def _superseded(self, generation: int) -> bool:
        """True once a logout has reset the session since ``generation``."""
        if generation != self.session.generation:
            logger.info("Dropping a login response that arrived after logout")
            return True
        return False
