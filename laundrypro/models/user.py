"""User models: the authenticated identity and its customer/staff projections."""
import enum
from datetime import datetime
from typing import Any, Dict, Optional

from laundrypro.models.base import ApiModel, Entity


class UserRole(str, enum.Enum):
    """User roles in the system."""
    CUSTOMER = "customer"  # Sees only their own orders
    STAFF = "staff"  # Creates and completes orders
    ADMIN = "admin"  # Manages services, staff and customers


class UserStatus(str, enum.Enum):
    """Account status."""
    ACTIVE = "active"
    SUSPENDED = "suspended"


class LoginMethod(str, enum.Enum):
    """How a phone number has to authenticate."""
    OTP = "otp"
    PASSWORD = "password"


class User(Entity):
    """
    Represents an account of the laundry service.

    Can be:
    1. Customers (auto-provisioned when an order is created for their phone)
    2. Staff members (created by an admin, verified on first login)
    3. Admins
    """

    phone: str
    firebase_uid: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    address: Optional[str] = None
    avatar: Optional[str] = None
    is_verified: bool = False
    has_password: bool = False
    status: UserStatus = UserStatus.ACTIVE
    note: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_staff_or_admin(self) -> bool:
        return self.role in (UserRole.STAFF, UserRole.ADMIN)

    def merge(self, changes: Dict[str, Any]) -> "User":
        """Return a copy with ``changes`` applied (wire or attribute names)."""
        data = self.model_dump(by_alias=True)
        fields = type(self).model_fields
        for key, value in changes.items():
            field = fields.get(key)
            data[field.alias if field and field.alias else key] = value
        return type(self).model_validate(data)

    def __repr__(self):
        return f"<User {self.phone} ({self.role.value})>"


class Customer(User):
    """A user with the customer role, as listed by the customers endpoints."""


class StaffUser(User):
    """A user with the staff role, as listed by the admin users endpoints."""

    role: UserRole = UserRole.STAFF


class CheckLoginResult(ApiModel):
    """Result of the check-login step for a phone number."""

    login_method: LoginMethod
    has_password: bool = False
    is_verified: bool = False
    role: Optional[UserRole] = None
