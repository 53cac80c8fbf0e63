"""
Phone number normalization
"""
import re
from typing import Optional

_SEPARATORS = re.compile(r"[\s\-().]")


def normalize_phone(raw: Optional[str], country_code: str = "+84") -> Optional[str]:
    """
    Normalize a local-format or E.164 phone number.

    0788876568    -> +84788876568
    +84788876568  -> +84788876568
    anything else -> None
    """
    if not raw or not isinstance(raw, str):
        return None

    phone = _SEPARATORS.sub("", raw.strip())

    if phone.startswith(country_code):
        digits = phone[len(country_code):]
    elif phone.startswith("0"):
        digits = phone[1:]
    else:
        return None

    if not digits.isdigit():
        return None
    return f"{country_code}{digits}"


def is_valid_phone(raw: Optional[str], country_code: str = "+84") -> bool:
    """Check if a string normalizes to an E.164 number"""
    return normalize_phone(raw, country_code) is not None
