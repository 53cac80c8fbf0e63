"""Customers store (admin)."""
from typing import Optional

from laundrypro.models.user import Customer
from laundrypro.schemas.customer import FetchCustomersParams
from laundrypro.services.customer_service import CustomerService
from laundrypro.state.entity_store import PaginatedEntityStore


class CustomersStore(PaginatedEntityStore[Customer]):
    name = "customers"
    params_class = FetchCustomersParams

    def __init__(self, service: CustomerService, default_limit: Optional[int] = None):
        super().__init__(default_limit)
        self.service = service

    async def _load_page(self, params):
        return await self.service.list_customers(params)

    async def _load_one(self, customer_id):
        return await self.service.get_customer(customer_id)

    async def _create(self, payload):
        return await self.service.create_customer(payload)

    async def _update(self, customer_id, payload):
        return await self.service.update_customer(customer_id, payload)

    async def _update_status(self, customer_id, status):
        return await self.service.update_customer_status(customer_id, status)
