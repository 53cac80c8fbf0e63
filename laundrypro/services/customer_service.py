"""Customer management endpoints."""
from typing import Optional

from laundrypro.models.user import Customer, UserStatus
from laundrypro.schemas.common import Page
from laundrypro.schemas.customer import CustomerCreate, CustomerUpdate, FetchCustomersParams
from laundrypro.schemas.staff import UpdateUserStatusRequest
from laundrypro.services.http_client import ApiClient


class CustomerService:
    """Customers are users; their account status shares the users endpoint."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_customers(self, params: Optional[FetchCustomersParams] = None) -> Page:
        """GET /users/customers"""
        params = params or FetchCustomersParams()
        envelope = await self.client.get("/users/customers", params=params.to_query())
        return Page.from_envelope(envelope, "customers", Customer)

    async def get_customer(self, customer_id: str) -> Customer:
        """GET /users/customers/:id"""
        envelope = await self.client.get(f"/users/customers/{customer_id}")
        return Customer.from_dict(envelope.data)

    async def create_customer(self, payload: CustomerCreate) -> Customer:
        """POST /users/customers"""
        envelope = await self.client.post("/users/customers", payload.to_dict())
        return Customer.from_dict(envelope.data)

    async def update_customer(self, customer_id: str, payload: CustomerUpdate) -> Customer:
        """PUT /users/customers/:id"""
        envelope = await self.client.put(f"/users/customers/{customer_id}", payload.to_dict())
        return Customer.from_dict(envelope.data)

    async def update_customer_status(self, customer_id: str, status: UserStatus):
        """PATCH /users/users/:id/status"""
        return await self.client.patch(
            f"/users/users/{customer_id}/status", UpdateUserStatusRequest(status=status).to_dict()
        )
