"""
Input validation rules applied before any network call
"""
from typing import Optional

from laundrypro.core.exceptions import ValidationError


def validate_new_password(password: str, confirm_password: str, min_length: int) -> None:
    """Raise ValidationError unless the password is long enough and confirmed."""
    if not password or len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")
    if password != confirm_password:
        raise ValidationError("Passwords do not match")


def validate_otp_code(code: Optional[str], length: int) -> bool:
    """True when the code is exactly ``length`` digits."""
    return bool(code) and len(code) == length and code.isdigit()


def require_text(value: Optional[str], field: str, min_length: int = 1) -> str:
    """Strip and check a required text field."""
    text = (value or "").strip()
    if len(text) < min_length:
        if min_length == 1:
            raise ValidationError(f"{field} is required")
        raise ValidationError(f"{field} must be at least {min_length} characters")
    return text
