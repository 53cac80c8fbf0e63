"""Order endpoints."""
import logging
from typing import Optional

from laundrypro.models.order import Order, OrderStatus
from laundrypro.models.user import UserRole
from laundrypro.schemas.common import ApiEnvelope, Page
from laundrypro.schemas.order import (
    CreateOrderRequest,
    FetchOrdersParams,
    UpdateOrderStatusRequest,
)
from laundrypro.services.http_client import ApiClient

logger = logging.getLogger(__name__)


def parse_order_page(envelope: ApiEnvelope) -> Page:
    return Page.from_envelope(envelope, "orders", Order)


class OrderService:
    """Orders: customers read their own; staff and admins read and write all."""

    def __init__(self, client: ApiClient):
        self.client = client

    # Customer endpoints

    async def list_my_orders(self, params: Optional[FetchOrdersParams] = None) -> Page:
        """GET /orders/my-orders"""
        params = params or FetchOrdersParams()
        envelope = await self.client.get("/orders/my-orders", params=params.to_query())
        return parse_order_page(envelope)

    async def get_my_order(self, order_id: str) -> Order:
        """GET /orders/my-orders/:id"""
        envelope = await self.client.get(f"/orders/my-orders/{order_id}")
        return Order.from_dict(envelope.data)

    # Staff / admin endpoints

    async def list_orders(self, params: Optional[FetchOrdersParams] = None) -> Page:
        """GET /orders (filterable by customer, creator, phone, dates)"""
        params = params or FetchOrdersParams()
        envelope = await self.client.get("/orders", params=params.to_query())
        return parse_order_page(envelope)

    async def get_order(self, order_id: str) -> Order:
        """GET /orders/:id"""
        envelope = await self.client.get(f"/orders/{order_id}")
        return Order.from_dict(envelope.data)

    async def create_order(self, payload: CreateOrderRequest) -> Order:
        """POST /orders; the server auto-provisions unknown customers."""
        logger.info(f"Creating order with {len(payload.items)} item(s)")
        envelope = await self.client.post("/orders", payload.to_dict())
        return Order.from_dict(envelope.data)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        """PATCH /orders/:id/status"""
        envelope = await self.client.patch(
            f"/orders/{order_id}/status", UpdateOrderStatusRequest(status=status).to_dict()
        )
        return Order.from_dict(envelope.data)

    # Role-selected endpoints

    async def list_for_role(self, role: Optional[UserRole], params: Optional[FetchOrdersParams] = None) -> Page:
        if role == UserRole.CUSTOMER:
            return await self.list_my_orders(params)
        return await self.list_orders(params)

    async def get_for_role(self, role: Optional[UserRole], order_id: str) -> Order:
        if role == UserRole.CUSTOMER:
            return await self.get_my_order(order_id)
        return await self.get_order(order_id)
