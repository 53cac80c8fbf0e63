"""Shared fixtures for the LaundryPro client tests."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from laundrypro.config.settings import Settings
from laundrypro.core.exceptions import OtpVerificationError
from laundrypro.models.order import Order
from laundrypro.models.user import User
from laundrypro.schemas.common import Page, Pagination
from laundrypro.services.phone.providers.base import BasePhoneVerifier, ConfirmationHandle

TEST_PHONE = "+84788876568"


@pytest.fixture
def settings():
    return Settings(
        API_BASE_URL="http://laundrypro.test",
        FIREBASE_API_KEY=None,
        LOG_DIR=None,
        _env_file=None,
    )


def make_user(**overrides) -> User:
    data = {
        "_id": "user-1",
        "phone": TEST_PHONE,
        "name": "Nguyen Van A",
        "role": "customer",
        "isVerified": True,
        "hasPassword": True,
        "status": "active",
    }
    data.update(overrides)
    return User.from_dict(data)


def make_order(index: int, **overrides) -> Order:
    data = {
        "_id": f"order-{index}",
        "customerId": {"_id": "user-1", "phone": TEST_PHONE, "name": "Nguyen Van A"},
        "status": "pending",
        "totalPrice": 15000 * index,
        "orderItems": [],
    }
    data.update(overrides)
    return Order.from_dict(data)


def order_page(page: int, limit: int = 10, total: int = 25) -> Page:
    """One page of a server holding ``total`` orders."""
    start = (page - 1) * limit
    items = [make_order(i) for i in range(start + 1, min(start + limit, total) + 1)]
    total_pages = (total + limit - 1) // limit
    return Page(
        items=items,
        pagination=Pagination(page=page, limit=limit, total=total, total_pages=total_pages),
    )


class FakeConfirmation(ConfirmationHandle):
    def __init__(self, phone_number, valid_code, id_token):
        self.phone_number = phone_number
        self.valid_code = valid_code
        self.id_token = id_token
        self.attempts = []

    async def confirm(self, code):
        self.attempts.append(code)
        if code != self.valid_code:
            raise OtpVerificationError("The verification code is incorrect")
        return self.id_token


class FakePhoneVerifier(BasePhoneVerifier):
    """Sends nothing; accepts ``valid_code`` for every phone."""

    provider_name = "fake"

    def __init__(self, valid_code="123456", id_token="firebase-id-token"):
        self.valid_code = valid_code
        self.id_token = id_token
        self.sent = []
        self.confirmation = None

    async def send_code(self, phone_number):
        self.sent.append(phone_number)
        self.confirmation = FakeConfirmation(phone_number, self.valid_code, self.id_token)
        return self.confirmation


@pytest.fixture
def phone_verifier():
    return FakePhoneVerifier()


@pytest.fixture
def auth_service():
    """AuthService double; every call succeeds unless a test overrides it."""
    service = MagicMock()
    service.check_login = AsyncMock()
    service.login_with_otp = AsyncMock()
    service.login_with_password = AsyncMock()
    service.set_password = AsyncMock()
    service.logout = AsyncMock()
    service.get_profile = AsyncMock(return_value=make_user())
    service.client = MagicMock()
    return service
