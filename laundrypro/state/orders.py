"""Orders store: role-selected order lists and order actions."""
from typing import Optional

from laundrypro.models.order import Order
from laundrypro.models.user import UserRole
from laundrypro.schemas.order import FetchOrdersParams
from laundrypro.services.order_service import OrderService
from laundrypro.state.entity_store import PaginatedEntityStore


class OrdersStore(PaginatedEntityStore[Order]):
    """
    Orders visible to the acting user.

    The acting role is an argument of every read: customers get their own
    orders, staff and admins get all orders.
    """

    name = "orders"
    params_class = FetchOrdersParams

    def __init__(self, service: OrderService, default_limit: Optional[int] = None):
        super().__init__(default_limit)
        self.service = service

    async def fetch(self, role: Optional[UserRole], params: Optional[FetchOrdersParams] = None) -> bool:
        return await self._fetch_with(lambda query: self.service.list_for_role(role, query), params)

    async def load_more(self, role: Optional[UserRole], params: Optional[FetchOrdersParams] = None) -> bool:
        return await self._load_more_with(lambda query: self.service.list_for_role(role, query), params)

    async def fetch_one(self, role: Optional[UserRole], order_id: str) -> Optional[Order]:
        return await self._fetch_one_with(lambda oid: self.service.get_for_role(role, oid), order_id)

    async def _create(self, payload):
        return await self.service.create_order(payload)

    async def _update_status(self, order_id, status):
        return await self.service.update_order_status(order_id, status)
