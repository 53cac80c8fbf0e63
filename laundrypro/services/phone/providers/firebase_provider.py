"""
Firebase phone authentication through the Identity Toolkit REST API.
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from laundrypro.config.settings import Settings, get_settings
from laundrypro.core.exceptions import OtpVerificationError, TransportError
from laundrypro.core.logging import mask_phone
from laundrypro.services.phone.providers.base import BasePhoneVerifier, ConfirmationHandle

logger = logging.getLogger(__name__)

# Identity Toolkit error codes mapped to user-facing messages
ERROR_MESSAGES = {
    "INVALID_CODE": "The verification code is incorrect",
    "SESSION_EXPIRED": "The verification code has expired, request a new one",
    "INVALID_SESSION_INFO": "The verification session is invalid, request a new code",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts, please try again later",
    "INVALID_PHONE_NUMBER": "The phone number is invalid",
    "QUOTA_EXCEEDED": "SMS quota exceeded, please try again later",
}


class FirebaseConfirmation(ConfirmationHandle):
    """Challenge identified by the Identity Toolkit ``sessionInfo``."""

    def __init__(self, verifier: "FirebasePhoneVerifier", phone_number: str, session_info: str):
        self.verifier = verifier
        self.phone_number = phone_number
        self.session_info = session_info

    async def confirm(self, code: str) -> str:
        result = await self.verifier._call(
            "accounts:signInWithPhoneNumber",
            {"sessionInfo": self.session_info, "code": code},
        )
        id_token = result.get("idToken")
        if not id_token:
            raise OtpVerificationError("Identity provider returned no id token")
        logger.info(f"OTP confirmed for {mask_phone(self.phone_number)}")
        return id_token


class FirebasePhoneVerifier(BasePhoneVerifier):
    """
    Firebase phone OTP provider.

    ``recaptcha_token`` is the token produced by the app-verification step
    that Firebase requires before sending an SMS.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        recaptcha_token: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.api_key = api_key or settings.FIREBASE_API_KEY
        self.base_url = (base_url or settings.FIREBASE_AUTH_URL).rstrip("/")
        self.timeout = settings.REQUEST_TIMEOUT
        self.recaptcha_token = recaptcha_token
        self.provider_name = "firebase"

        if not self.api_key:
            raise ValueError("Firebase API key must be provided")

    async def send_code(self, phone_number: str) -> ConfirmationHandle:
        body = {"phoneNumber": phone_number}
        if self.recaptcha_token:
            body["recaptchaToken"] = self.recaptcha_token

        logger.info(f"Sending OTP to {mask_phone(phone_number)}")
        result = await self._call("accounts:sendVerificationCode", body)

        session_info = result.get("sessionInfo")
        if not session_info:
            raise OtpVerificationError("Identity provider returned no verification session")
        return FirebaseConfirmation(self, phone_number, session_info)

    async def _call(self, method: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{method}"
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, params={"key": self.api_key}, json=body) as response:
                    text = await response.text()
                    status = response.status
        except aiohttp.ClientError as e:
            logger.error(f"Firebase client error on {method}: {e}")
            raise TransportError(f"Network error: {str(e)}")
        except asyncio.TimeoutError:
            raise TransportError(f"Request timed out after {self.timeout:g}s")

        try:
            data = json.loads(text) if text else {}
        except json.JSONDecodeError:
            data = {}

        if status >= 400:
            code = (data.get("error") or {}).get("message", "") if isinstance(data, dict) else ""
            # Identity Toolkit messages look like "INVALID_CODE : details"
            code = code.split(":")[0].strip()
            logger.warning(f"Firebase {method} failed: {status} {code}")
            raise OtpVerificationError(
                ERROR_MESSAGES.get(code, "Phone verification failed"),
                status_code=status,
                response_data=data if isinstance(data, dict) else None,
            )
        return data
