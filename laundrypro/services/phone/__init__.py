"""Phone OTP identity providers."""
from laundrypro.services.phone.providers.base import BasePhoneVerifier, ConfirmationHandle
from laundrypro.services.phone.providers.firebase_provider import FirebasePhoneVerifier

__all__ = ["BasePhoneVerifier", "ConfirmationHandle", "FirebasePhoneVerifier"]
