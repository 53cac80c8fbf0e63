"""Staff store (admin)."""
from typing import Optional

from laundrypro.models.user import StaffUser, UserRole
from laundrypro.schemas.staff import FetchUsersParams
from laundrypro.services.staff_service import StaffService
from laundrypro.state.entity_store import PaginatedEntityStore


class StaffStore(PaginatedEntityStore[StaffUser]):
    """Staff accounts; the list is always filtered to the staff role."""

    name = "staff"
    params_class = FetchUsersParams

    def __init__(self, service: StaffService, default_limit: Optional[int] = None):
        super().__init__(default_limit)
        self.service = service

    async def _load_page(self, params):
        return await self.service.list_users(params.model_copy(update={"role": UserRole.STAFF}))

    async def _load_one(self, user_id):
        return await self.service.get_user(user_id)

    async def _create(self, payload):
        return await self.service.create_staff(payload)

    async def _update(self, user_id, payload):
        return await self.service.update_staff(user_id, payload)

    async def _update_status(self, user_id, status):
        return await self.service.update_user_status(user_id, status)
