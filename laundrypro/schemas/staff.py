"""Staff administration schemas (admin only)."""
from typing import Optional

from laundrypro.models.base import ApiModel
from laundrypro.models.user import UserRole, UserStatus
from laundrypro.schemas.common import ListParams


class FetchUsersParams(ListParams):
    search: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None


class StaffCreate(ApiModel):
    """POST /users/users/staff. The account verifies itself on first login."""
    phone: str
    name: str
    email: Optional[str] = None


class StaffUpdate(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UpdateUserStatusRequest(ApiModel):
    status: UserStatus
