"""Application state stores."""
from laundrypro.state.customers import CustomersStore
from laundrypro.state.entity_store import EntityState, PaginatedEntityStore
from laundrypro.state.orders import OrdersStore
from laundrypro.state.profile import ProfileState, ProfileStore
from laundrypro.state.services import ServicesState, ServicesStore
from laundrypro.state.session import AuthPhase, SessionState, SessionStore
from laundrypro.state.staff import StaffStore
from laundrypro.state.store import Store

__all__ = [
    "AuthPhase",
    "CustomersStore",
    "EntityState",
    "OrdersStore",
    "PaginatedEntityStore",
    "ProfileState",
    "ProfileStore",
    "ServicesState",
    "ServicesStore",
    "SessionState",
    "SessionStore",
    "StaffStore",
    "Store",
]
