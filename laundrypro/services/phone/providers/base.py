"""
Base interface for phone OTP identity providers.
"""
from abc import ABC, abstractmethod


class ConfirmationHandle(ABC):
    """Pending one-time-code challenge for a single phone number."""

    phone_number: str

    @abstractmethod
    async def confirm(self, code: str) -> str:
        """
        Check the code against the challenge.

        Returns:
            Bearer id token to exchange with the LaundryPro API

        Raises:
            OtpVerificationError: wrong or expired code
        """


class BasePhoneVerifier(ABC):
    """Issues one-time-code challenges to phone numbers."""

    provider_name: str = "base"

    @abstractmethod
    async def send_code(self, phone_number: str) -> ConfirmationHandle:
        """
        Send a one-time code to an E.164 phone number.

        Raises:
            OtpVerificationError: the provider refused to send the code
        """
