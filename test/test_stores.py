"""Tests for the entity stores' collection rules."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_order, order_page
from laundrypro.core.exceptions import DomainError, ForbiddenError
from laundrypro.models.order import OrderStatus
from laundrypro.models.service import Service
from laundrypro.models.user import Customer, StaffUser, UserRole, UserStatus
from laundrypro.schemas.common import ApiEnvelope, Page, Pagination
from laundrypro.schemas.customer import CustomerUpdate
from laundrypro.schemas.order import FetchOrdersParams
from laundrypro.schemas.service import CreateServiceRequest
from laundrypro.schemas.staff import FetchUsersParams
from laundrypro.services.order_service import OrderService
from laundrypro.state import CustomersStore, EntityState, OrdersStore, ServicesStore, StaffStore


def paged_order_service(total=25):
    """OrderService double serving ``total`` orders page by page."""
    service = MagicMock()

    async def list_for_role(role, params):
        return order_page(params.page, params.limit, total)

    service.list_for_role = AsyncMock(side_effect=list_for_role)
    service.get_for_role = AsyncMock(side_effect=lambda role, order_id: make_order(int(order_id.split("-")[1])))
    service.create_order = AsyncMock(return_value=make_order(99))
    service.update_order_status = AsyncMock(return_value=None)
    return service


def make_service(service_id, name="Giặt khô", **overrides):
    data = {"_id": service_id, "name": name, "category": "Giặt sấy", "price": 20000, "unit": "kg"}
    data.update(overrides)
    return Service.from_dict(data)


class TestOrdersPaging:

    async def test_load_more_twice_collects_all_orders(self):
        service = paged_order_service(total=25)
        store = OrdersStore(service, default_limit=10)

        assert await store.fetch(UserRole.STAFF) is True
        await store.load_more(UserRole.STAFF)
        await store.load_more(UserRole.STAFF)

        ids = store.state.ids
        assert len(ids) == 25
        assert len(set(ids)) == 25
        assert store.state.pagination.page == 3
        assert store.state.pagination.total_pages == 3

    async def test_load_more_past_last_page_is_noop(self):
        service = paged_order_service(total=25)
        store = OrdersStore(service, default_limit=10)
        await store.fetch(UserRole.STAFF)
        await store.load_more(UserRole.STAFF)
        await store.load_more(UserRole.STAFF)
        before = store.state

        assert await store.load_more(UserRole.STAFF) is False

        assert store.state == before
        assert service.list_for_role.await_count == 3

    async def test_load_more_reuses_fetch_filters(self):
        service = paged_order_service(total=25)
        store = OrdersStore(service, default_limit=10)

        await store.fetch(UserRole.ADMIN, FetchOrdersParams(status=OrderStatus.PENDING))
        await store.load_more(UserRole.ADMIN)

        role, params = service.list_for_role.await_args.args
        assert role == UserRole.ADMIN
        assert params.page == 2
        assert params.limit == 10
        assert params.status == OrderStatus.PENDING

    async def test_load_more_never_duplicates_ids(self):
        service = MagicMock()
        first = Page(items=[make_order(1), make_order(2)], pagination=Pagination(page=1, limit=2, total=4, total_pages=2))
        # An order created meanwhile shifts order-2 onto page 2
        second = Page(items=[make_order(2), make_order(3)], pagination=Pagination(page=2, limit=2, total=5, total_pages=3))
        service.list_for_role = AsyncMock(side_effect=[first, second])
        store = OrdersStore(service, default_limit=2)

        await store.fetch(UserRole.STAFF)
        await store.load_more(UserRole.STAFF)

        assert store.state.ids == ("order-1", "order-2", "order-3")
        assert store.state.pagination.page == 2

    async def test_fetch_resets_to_first_page(self):
        service = paged_order_service(total=25)
        store = OrdersStore(service, default_limit=10)
        await store.fetch(UserRole.STAFF)
        await store.load_more(UserRole.STAFF)

        await store.fetch(UserRole.STAFF, FetchOrdersParams(customer_phone="+84788876568"))

        assert store.state.pagination.page == 1
        assert len(store.state.items) == 10

    async def test_role_is_passed_to_the_service(self):
        service = paged_order_service()
        store = OrdersStore(service)

        await store.fetch(UserRole.CUSTOMER)
        await store.fetch_one(UserRole.CUSTOMER, "order-7")

        assert service.list_for_role.await_args.args[0] == UserRole.CUSTOMER
        service.get_for_role.assert_awaited_once_with(UserRole.CUSTOMER, "order-7")
        assert store.state.selected.id == "order-7"

    async def test_fetch_failure_keeps_message(self):
        service = MagicMock()
        service.list_for_role = AsyncMock(side_effect=ForbiddenError(
            "no", status_code=403, response_data={"message": "Bạn không có quyền"}
        ))
        store = OrdersStore(service)

        assert await store.fetch(UserRole.STAFF) is False

        assert store.state.error == "Bạn không có quyền"
        assert store.state.is_loading is False
        store.clear_error()
        assert store.state.error is None


class TestMalformedResponses:

    async def test_list_that_is_not_an_object_fails_the_fetch(self):
        client = MagicMock()
        client.get = AsyncMock(return_value=ApiEnvelope(data=[{"_id": "o1"}]))
        store = OrdersStore(OrderService(client))

        assert await store.fetch(UserRole.STAFF) is False

        assert store.state.is_loading is False
        assert store.state.error == "Could not load the list"
        assert store.state.items == ()

    async def test_malformed_entity_fails_fetch_one(self):
        client = MagicMock()
        client.get = AsyncMock(return_value=ApiEnvelope(data="order"))
        store = OrdersStore(OrderService(client))

        assert await store.fetch_one(UserRole.STAFF, "o1") is None

        assert store.state.is_saving is False
        assert store.state.error == "Could not load the details"


class TestUnsupportedOperations:

    async def test_services_have_no_status(self):
        catalog = MagicMock()
        store = ServicesStore(catalog)

        assert await store.update_status("svc-1", "active") is False

        assert store.state.error == "This action is not available"
        assert store.state.is_saving is False
        assert catalog.mock_calls == []

    async def test_orders_cannot_be_edited(self):
        service = paged_order_service(total=3)
        store = OrdersStore(service)
        await store.fetch(UserRole.STAFF)
        items = store.state.items

        assert await store.update("order-1", object()) is None

        assert store.state.items == items
        assert store.state.error == "This action is not available"


class TestPagingDuringSave:

    async def test_load_more_runs_while_status_change_is_pending(self):
        release = asyncio.Event()
        service = paged_order_service(total=25)

        async def update_order_status(order_id, status):
            await release.wait()

        service.update_order_status = AsyncMock(side_effect=update_order_status)
        store = OrdersStore(service, default_limit=10)
        await store.fetch(UserRole.STAFF)

        pending = asyncio.ensure_future(store.update_status("order-1", OrderStatus.COMPLETED))
        await asyncio.sleep(0)
        assert store.state.is_saving is True

        assert await store.load_more(UserRole.STAFF) is True
        assert store.state.pagination.page == 2

        release.set()
        assert await pending is True
        assert len(store.state.items) == 20
        assert store.state.get("order-1").status == OrderStatus.COMPLETED
        assert store.state.is_saving is False


class TestSequencing:

    async def test_stale_fetch_response_is_discarded(self):
        slow_started = asyncio.Event()
        release_slow = asyncio.Event()

        async def list_for_role(role, params):
            if params.status == OrderStatus.PENDING:
                slow_started.set()
                await release_slow.wait()
                return Page(items=[make_order(1, status="pending")],
                            pagination=Pagination(page=1, limit=10, total=1, total_pages=1))
            return Page(items=[make_order(2, status="completed")],
                        pagination=Pagination(page=1, limit=10, total=1, total_pages=1))

        service = MagicMock()
        service.list_for_role = AsyncMock(side_effect=list_for_role)
        store = OrdersStore(service)

        slow = asyncio.ensure_future(store.fetch(UserRole.STAFF, FetchOrdersParams(status=OrderStatus.PENDING)))
        await slow_started.wait()
        assert await store.fetch(UserRole.STAFF, FetchOrdersParams(status=OrderStatus.COMPLETED)) is True
        release_slow.set()

        assert await slow is False
        assert store.state.ids == ("order-2",)
        assert store.state.filters.status == OrderStatus.COMPLETED

    async def test_response_after_reset_is_discarded(self):
        release = asyncio.Event()

        async def list_for_role(role, params):
            await release.wait()
            return order_page(1)

        service = MagicMock()
        service.list_for_role = AsyncMock(side_effect=list_for_role)
        store = OrdersStore(service)

        pending = asyncio.ensure_future(store.fetch(UserRole.STAFF))
        await asyncio.sleep(0)
        store.reset()
        release.set()

        assert await pending is False
        assert store.state == EntityState()


class TestUpdateStatus:

    async def test_only_status_changes(self):
        service = paged_order_service(total=3)
        store = OrdersStore(service)
        await store.fetch(UserRole.STAFF)
        await store.fetch_one(UserRole.STAFF, "order-2")
        before = store.state.get("order-2")

        assert await store.update_status("order-2", OrderStatus.COMPLETED) is True

        after = store.state.get("order-2")
        assert after.status == OrderStatus.COMPLETED
        assert after.model_dump(exclude={"status"}) == before.model_dump(exclude={"status"})
        assert store.state.selected.status == OrderStatus.COMPLETED
        assert store.state.get("order-1").status == OrderStatus.PENDING
        assert store.state.get("order-3").status == OrderStatus.PENDING
        service.update_order_status.assert_awaited_once_with("order-2", OrderStatus.COMPLETED)

    async def test_failed_status_change_leaves_collection(self):
        service = paged_order_service(total=3)
        service.update_order_status.side_effect = DomainError(
            "bad", status_code=400, response_data={"message": "Order already completed"}
        )
        store = OrdersStore(service)
        await store.fetch(UserRole.STAFF)
        items = store.state.items

        assert await store.update_status("order-1", OrderStatus.COMPLETED) is False

        assert store.state.items == items
        assert store.state.error == "Order already completed"

    async def test_customer_status(self):
        service = MagicMock()
        customer = Customer.from_dict({"_id": "c-1", "phone": "+84788876568", "note": "VIP"})
        service.list_customers = AsyncMock(return_value=Page(
            items=[customer], pagination=Pagination(page=1, limit=10, total=1, total_pages=1)
        ))
        service.update_customer_status = AsyncMock()
        store = CustomersStore(service)
        await store.fetch()

        await store.update_status("c-1", UserStatus.SUSPENDED)

        assert store.state.get("c-1").status == UserStatus.SUSPENDED
        assert store.state.get("c-1").note == "VIP"


class TestCreateAndUpdate:

    async def test_created_order_is_prepended(self):
        service = paged_order_service(total=3)
        store = OrdersStore(service)
        await store.fetch(UserRole.STAFF)

        order = await store.create(object())

        assert order.id == "order-99"
        assert store.state.ids[0] == "order-99"
        assert len(store.state.items) == 4

    async def test_update_refreshes_selection(self):
        service = MagicMock()
        original = Customer.from_dict({"_id": "c-1", "phone": "+84788876568", "name": "A"})
        updated = Customer.from_dict({"_id": "c-1", "phone": "+84788876568", "name": "B"})
        service.get_customer = AsyncMock(return_value=original)
        service.update_customer = AsyncMock(return_value=updated)
        store = CustomersStore(service)
        await store.fetch_one("c-1")

        await store.update("c-1", CustomerUpdate(name="B"))

        assert store.state.selected.name == "B"
        assert store.state.ids == ("c-1",)
        store.clear_selected()
        assert store.state.selected is None

    async def test_update_failure_keeps_entity(self):
        service = MagicMock()
        service.get_customer = AsyncMock(
            return_value=Customer.from_dict({"_id": "c-1", "phone": "+84788876568", "name": "A"})
        )
        service.update_customer = AsyncMock(side_effect=DomainError("Email already used", status_code=409))
        store = CustomersStore(service)
        await store.fetch_one("c-1")

        assert await store.update("c-1", CustomerUpdate(email="a@b.c")) is None

        assert store.state.selected.name == "A"
        # No server message in the body, so the fallback is shown
        assert store.state.error == "Could not save the changes"


class TestServicesStore:

    async def test_created_service_appears_first_with_server_id(self):
        catalog = MagicMock()
        catalog.list_services = AsyncMock(return_value=[make_service("svc-1"), make_service("svc-2", "Ủi")])

        async def create_service(payload):
            return Service.from_dict({"_id": "svc-new", **payload.to_dict()})

        catalog.create_service = AsyncMock(side_effect=create_service)
        store = ServicesStore(catalog)
        await store.fetch()

        created = await store.create(CreateServiceRequest(
            name="Giặt thường", category="Giặt sấy", price=15000, unit="kg", active=True
        ))

        assert created.id == "svc-new"
        head = store.state.items[0]
        assert head.id == "svc-new"
        assert head.name == "Giặt thường"
        assert head.price == 15000
        assert store.state.ids == ("svc-new", "svc-1", "svc-2")

    async def test_services_are_a_single_page(self):
        catalog = MagicMock()
        catalog.list_services = AsyncMock(return_value=[make_service("svc-1")])
        store = ServicesStore(catalog)
        await store.fetch()

        assert await store.load_more() is False
        assert catalog.list_services.await_count == 1
        params = catalog.list_services.await_args.args[0]
        assert params.page is None
        assert params.limit is None

    async def test_delete_removes_service_and_selection(self):
        catalog = MagicMock()
        catalog.list_services = AsyncMock(return_value=[make_service("svc-1"), make_service("svc-2")])
        catalog.get_service = AsyncMock(return_value=make_service("svc-1"))
        catalog.delete_service = AsyncMock()
        store = ServicesStore(catalog)
        await store.fetch()
        await store.fetch_one("svc-1")

        assert await store.delete("svc-1") is True

        assert store.state.ids == ("svc-2",)
        assert store.state.selected is None

    async def test_categories(self):
        catalog = MagicMock()
        catalog.list_categories = AsyncMock(return_value=["Giặt sấy", "Ủi"])
        store = ServicesStore(catalog)

        assert await store.fetch_categories() == ("Giặt sấy", "Ủi")
        assert store.state.categories == ("Giặt sấy", "Ủi")

    async def test_filters(self):
        catalog = MagicMock()
        catalog.list_services = AsyncMock(return_value=[
            make_service("svc-1", category="Giặt sấy"),
            make_service("svc-2", category="Ủi", active=False),
        ])
        store = ServicesStore(catalog)
        await store.fetch()

        assert [s.id for s in store.active_services()] == ["svc-1"]
        assert [s.id for s in store.get_by_category("Ủi")] == ["svc-2"]


class TestStaffStore:

    async def test_list_is_always_staff(self):
        service = MagicMock()
        service.list_users = AsyncMock(return_value=Page(
            items=[StaffUser.from_dict({"_id": "s-1", "phone": "+84900000001"})],
            pagination=Pagination(page=1, limit=10, total=1, total_pages=1),
        ))
        store = StaffStore(service)

        await store.fetch(FetchUsersParams(search="Lan", role=UserRole.ADMIN))

        params = service.list_users.await_args.args[0]
        assert params.role == UserRole.STAFF
        assert params.search == "Lan"
        assert store.state.items[0].role == UserRole.STAFF


class TestObservers:

    async def test_listeners_see_every_change(self):
        store = OrdersStore(paged_order_service(total=3))
        seen = []
        unsubscribe = store.subscribe(lambda state: seen.append(state.is_loading))

        await store.fetch(UserRole.STAFF)
        unsubscribe()
        await store.fetch(UserRole.STAFF)

        assert seen == [True, False]

    async def test_failing_listener_does_not_break_store(self):
        store = OrdersStore(paged_order_service(total=3))

        def broken(state):
            raise RuntimeError("render failed")

        store.subscribe(broken)
        assert await store.fetch(UserRole.STAFF) is True
        assert len(store.state.items) == 3


@pytest.mark.parametrize("store_factory", [
    lambda: OrdersStore(paged_order_service()),
    lambda: ServicesStore(MagicMock()),
])
def test_reset_returns_initial_state(store_factory):
    store = store_factory()
    store._set(error="x", is_loading=True)

    store.reset()

    assert store.state.error is None
    assert store.state.items == ()
