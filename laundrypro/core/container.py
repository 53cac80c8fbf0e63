"""
Application container.

Builds one HTTP client, the domain services on top of it, the stores and the
flow controllers, and wires logout to reset every store.
"""
import logging
from typing import Optional

from laundrypro.config.settings import Settings, get_settings
from laundrypro.core.navigation import NavigationGate
from laundrypro.services.auth_service import AuthService
from laundrypro.services.catalog_service import CatalogService
from laundrypro.services.customer_service import CustomerService
from laundrypro.services.http_client import ApiClient
from laundrypro.services.order_service import OrderService
from laundrypro.services.phone.providers.base import BasePhoneVerifier
from laundrypro.services.phone.providers.firebase_provider import FirebasePhoneVerifier
from laundrypro.services.profile_service import ProfileService
from laundrypro.services.staff_service import StaffService
from laundrypro.state import (
    CustomersStore,
    OrdersStore,
    ProfileStore,
    ServicesStore,
    SessionStore,
    StaffStore,
)
from laundrypro.workflows.auth_flow import AuthFlowController
from laundrypro.workflows.profile_flow import ProfileController

logger = logging.getLogger(__name__)


class AppContainer:
    """Owns every long-lived object of a running client."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        phone_verifier: Optional[BasePhoneVerifier] = None,
        client: Optional[ApiClient] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or ApiClient(settings=self.settings)

        if phone_verifier is None and self.settings.FIREBASE_API_KEY:
            phone_verifier = FirebasePhoneVerifier(settings=self.settings)
        self.phone_verifier = phone_verifier

        # Services
        self.auth_service = AuthService(self.client)
        self.order_service = OrderService(self.client)
        self.catalog_service = CatalogService(self.client)
        self.customer_service = CustomerService(self.client)
        self.staff_service = StaffService(self.client)
        self.profile_service = ProfileService(self.client)

        # Stores
        limit = self.settings.DEFAULT_PAGE_LIMIT
        self.session = SessionStore()
        self.orders = OrdersStore(self.order_service, default_limit=limit)
        self.services = ServicesStore(self.catalog_service)
        self.customers = CustomersStore(self.customer_service, default_limit=limit)
        self.staff = StaffStore(self.staff_service, default_limit=limit)
        self.profile = ProfileStore()

        # Flows
        self.auth = AuthFlowController(
            self.auth_service,
            self.session,
            phone_verifier=self.phone_verifier,
            stores=(self.orders, self.services, self.customers, self.staff, self.profile),
            settings=self.settings,
        )
        self.profile_flow = ProfileController(
            self.profile_service, self.session, self.profile, settings=self.settings
        )
        self.navigation = NavigationGate(self.session)

        logger.info(f"{self.settings.PROJECT_NAME} client ready for {self.client.base_url}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        self.navigation.close()
        await self.client.close()
