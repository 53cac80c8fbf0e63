"""
Navigation gate.

Decides which screens are reachable for the current session. The decision is
recomputed on every session change rather than once at login, so setting a
password (or losing the session) moves the user immediately.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from laundrypro.models.user import UserRole
from laundrypro.state.session import SessionState, SessionStore

logger = logging.getLogger(__name__)


class ScreenGroup(str, enum.Enum):
    AUTH = "auth"
    SET_PASSWORD = "set_password"
    MAIN = "main"


class Action(str, enum.Enum):
    """Role-gated actions offered by the main screens."""
    VIEW_ORDERS = "view_orders"
    CREATE_ORDER = "create_order"
    UPDATE_ORDER_STATUS = "update_order_status"
    EDIT_SERVICES = "edit_services"
    MANAGE_STAFF = "manage_staff"
    MANAGE_CUSTOMERS = "manage_customers"


AUTH_SCREENS = ("Login", "Otp", "SetPassword")
SET_PASSWORD_SCREENS = ("SetPassword",)
MAIN_SCREENS = (
    "Home",
    "OrderList",
    "OrderDetail",
    "ServiceList",
    "ServiceDetail",
    "Profile",
    "EditProfile",
    "ChangePassword",
)
STAFF_SCREENS = ("CreateOrder", "ServiceForm")
ADMIN_SCREENS = (
    "StaffList",
    "StaffDetail",
    "CreateStaff",
    "EditStaff",
    "CustomerList",
    "CustomerDetail",
    "CustomerForm",
)

STAFF_ACTIONS = frozenset({Action.CREATE_ORDER, Action.UPDATE_ORDER_STATUS, Action.EDIT_SERVICES})
ADMIN_ACTIONS = frozenset({Action.MANAGE_STAFF, Action.MANAGE_CUSTOMERS})


@dataclass(frozen=True)
class NavigationDecision:
    group: ScreenGroup
    screens: Tuple[str, ...]
    role: Optional[UserRole] = None
    actions: frozenset = frozenset()

    @property
    def initial_screen(self) -> str:
        return self.screens[0]

    def allows(self, screen: str) -> bool:
        return screen in self.screens

    def can(self, action: Action) -> bool:
        return action in self.actions


def resolve_navigation(state: SessionState) -> NavigationDecision:
    """Pure function of the session state."""
    identity = state.identity
    if identity is None:
        return NavigationDecision(ScreenGroup.AUTH, AUTH_SCREENS)

    # No way out of password setup until the server reports a password
    if not identity.has_password:
        return NavigationDecision(ScreenGroup.SET_PASSWORD, SET_PASSWORD_SCREENS, role=identity.role)

    screens = MAIN_SCREENS
    actions = {Action.VIEW_ORDERS}
    if identity.is_staff_or_admin:
        screens += STAFF_SCREENS
        actions |= STAFF_ACTIONS
    if identity.is_admin:
        screens += ADMIN_SCREENS
        actions |= ADMIN_ACTIONS
    return NavigationDecision(ScreenGroup.MAIN, screens, role=identity.role, actions=frozenset(actions))


class NavigationGate:
    """Republishes the navigation decision whenever the session changes it."""

    def __init__(self, session: SessionStore):
        self._listeners: List[Callable[[NavigationDecision], None]] = []
        self.decision = resolve_navigation(session.state)
        self._unsubscribe = session.subscribe(self._on_session_change)

    def subscribe(self, listener: Callable[[NavigationDecision], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._unsubscribe()

    def _on_session_change(self, state: SessionState) -> None:
        decision = resolve_navigation(state)
        if decision == self.decision:
            return
        logger.info(f"Navigation: {self.decision.group.value} -> {decision.group.value}")
        self.decision = decision
        for listener in list(self._listeners):
            listener(decision)
