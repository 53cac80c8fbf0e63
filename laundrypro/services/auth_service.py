"""Authentication endpoints."""
import logging

from laundrypro.core.logging import mask_phone
from laundrypro.models.user import CheckLoginResult, User
from laundrypro.schemas.auth import (
    CheckLoginRequest,
    OtpLoginRequest,
    PasswordLoginRequest,
    SetPasswordRequest,
)
from laundrypro.schemas.common import ApiEnvelope
from laundrypro.services.http_client import ApiClient

logger = logging.getLogger(__name__)

AUTH_BASE = "/users"


class AuthService:
    """Maps each authentication operation to one API call."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def check_login(self, phone: str) -> CheckLoginResult:
        """POST /users/check-login: which login method the phone must use."""
        logger.info(f"Checking login method for {mask_phone(phone)}")
        envelope = await self.client.post(
            f"{AUTH_BASE}/check-login", CheckLoginRequest(phone=phone).to_dict()
        )
        return CheckLoginResult.from_dict(envelope.data or {})

    async def login_with_otp(self, id_token: str) -> ApiEnvelope:
        """POST /users/login/otp: exchange the provider id token (sets cookies)."""
        return await self.client.post(
            f"{AUTH_BASE}/login/otp", OtpLoginRequest(id_token=id_token).to_dict()
        )

    async def login_with_password(self, phone: str, password: str) -> ApiEnvelope:
        """POST /users/login/password (sets cookies)."""
        return await self.client.post(
            f"{AUTH_BASE}/login/password",
            PasswordLoginRequest(phone=phone, password=password).to_dict(),
        )

    async def set_password(self, password: str, confirm_password: str) -> ApiEnvelope:
        """POST /users/password: first password of an authenticated account."""
        return await self.client.post(
            f"{AUTH_BASE}/password",
            SetPasswordRequest(password=password, confirm_password=confirm_password).to_dict(),
        )

    async def refresh_token(self) -> ApiEnvelope:
        """POST /users/refresh-token"""
        return await self.client.refresh_session()

    async def logout(self) -> ApiEnvelope:
        """POST /users/logout"""
        return await self.client.post(f"{AUTH_BASE}/logout")

    async def get_profile(self) -> User:
        """GET /users/profile"""
        envelope = await self.client.get(f"{AUTH_BASE}/profile")
        return User.from_dict(envelope.data)
