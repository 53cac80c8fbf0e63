"""Domain services: one operation maps to one API call."""
from laundrypro.services.http_client import ApiClient
from laundrypro.services.auth_service import AuthService
from laundrypro.services.order_service import OrderService
from laundrypro.services.catalog_service import CatalogService
from laundrypro.services.customer_service import CustomerService
from laundrypro.services.staff_service import StaffService
from laundrypro.services.profile_service import ProfileService

__all__ = [
    "ApiClient",
    "AuthService",
    "OrderService",
    "CatalogService",
    "CustomerService",
    "StaffService",
    "ProfileService",
]
