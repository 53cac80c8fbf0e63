"""Staff administration endpoints (admin only)."""
import logging
from typing import Optional

from laundrypro.core.logging import mask_phone
from laundrypro.models.user import StaffUser, UserRole, UserStatus
from laundrypro.schemas.common import Page
from laundrypro.schemas.staff import (
    FetchUsersParams,
    StaffCreate,
    StaffUpdate,
    UpdateUserStatusRequest,
)
from laundrypro.services.http_client import ApiClient

logger = logging.getLogger(__name__)


class StaffService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list_users(self, params: Optional[FetchUsersParams] = None) -> Page:
        """GET /users/users, filtered to the staff role unless another is given."""
        params = params or FetchUsersParams()
        if params.role is None:
            params = params.model_copy(update={"role": UserRole.STAFF})
        envelope = await self.client.get("/users/users", params=params.to_query())
        return Page.from_envelope(envelope, "users", StaffUser)

    async def get_user(self, user_id: str) -> StaffUser:
        """GET /users/users/:id"""
        envelope = await self.client.get(f"/users/users/{user_id}")
        return StaffUser.from_dict(envelope.data)

    async def create_staff(self, payload: StaffCreate) -> StaffUser:
        """POST /users/users/staff"""
        logger.info(f"Creating staff account for {mask_phone(payload.phone)}")
        envelope = await self.client.post("/users/users/staff", payload.to_dict())
        return StaffUser.from_dict(envelope.data)

    async def update_staff(self, user_id: str, payload: StaffUpdate) -> StaffUser:
        """PUT /users/users/:id"""
        envelope = await self.client.put(f"/users/users/{user_id}", payload.to_dict())
        return StaffUser.from_dict(envelope.data)

    async def update_user_status(self, user_id: str, status: UserStatus):
        """PATCH /users/users/:id/status"""
        return await self.client.patch(
            f"/users/users/{user_id}/status", UpdateUserStatusRequest(status=status).to_dict()
        )
