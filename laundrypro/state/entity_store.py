"""
Client-side collection cache shared by the orders, services, customers
and staff stores.

Collections hold at most one entity per id. List operations are tagged with a
per-store sequence number; a list response is applied only if no newer list
operation was issued after it, so a slow ``fetch`` can never overwrite a newer
``load_more`` (or the other way round).

``is_loading`` and ``is_loading_more`` track list requests only. Single-entity
work (``fetch_one``, ``create``, ``update``, ``update_status``) is tracked by
``is_saving`` and never blocks paging.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, Iterable, Optional, Tuple, TypeVar

from laundrypro.core.exceptions import LaundryProError, user_message
from laundrypro.models.base import Entity
from laundrypro.schemas.common import ListParams, Page, Pagination
from laundrypro.state.store import Store

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)

PageLoader = Callable[[Any], Awaitable[Page]]


@dataclass(frozen=True)
class EntityState(Generic[T]):
    items: Tuple[T, ...] = ()
    selected: Optional[T] = None
    pagination: Pagination = field(default_factory=Pagination)
    filters: Optional[ListParams] = None
    is_loading: bool = False
    is_loading_more: bool = False
    is_saving: bool = False
    error: Optional[str] = None

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self.items)

    def get(self, entity_id: str) -> Optional[T]:
        for item in self.items:
            if item.id == entity_id:
                return item
        return None


def upsert(items: Iterable[T], entity: T) -> Tuple[T, ...]:
    """Replace the entity with the same id in place, or append it."""
    result = []
    found = False
    for item in items:
        if item.id == entity.id:
            result.append(entity)
            found = True
        else:
            result.append(item)
    if not found:
        result.append(entity)
    return tuple(result)


def upsert_many(items: Iterable[T], entities: Iterable[T]) -> Tuple[T, ...]:
    result = tuple(items)
    for entity in entities:
        result = upsert(result, entity)
    return result


def prepend(items: Iterable[T], entity: T) -> Tuple[T, ...]:
    return (entity,) + tuple(item for item in items if item.id != entity.id)


class PaginatedEntityStore(Store[EntityState[T]], Generic[T]):
    """
    Base class for entity stores.

    Subclasses bind the domain service calls by overriding the hooks; an
    operation whose hook is not bound is refused with an error and no request.
    Operations catch API failures, keep a user-facing message in
    ``state.error`` and return ``False``/``None`` instead of raising.
    """

    name = "entities"
    state_class = EntityState
    params_class = ListParams
    default_limit = 10

    # Fallback messages when the server supplies none
    messages: Dict[str, str] = {
        "fetch": "Could not load the list",
        "fetch_one": "Could not load the details",
        "create": "Could not create the item",
        "update": "Could not save the changes",
        "update_status": "Could not change the status",
        "unsupported": "This action is not available",
    }

    def __init__(self, default_limit: Optional[int] = None):
        super().__init__(self.state_class)
        if default_limit is not None:
            self.default_limit = default_limit
        self._list_seq = 0

    # Hooks bound by subclasses

    async def _load_page(self, params) -> Page:
        raise NotImplementedError

    async def _load_one(self, entity_id: str) -> T:
        raise NotImplementedError

    async def _create(self, payload) -> T:
        raise NotImplementedError

    async def _update(self, entity_id: str, payload) -> T:
        raise NotImplementedError

    async def _update_status(self, entity_id: str, status) -> Any:
        raise NotImplementedError

    def _is_bound(self, hook: str) -> bool:
        return getattr(type(self), hook) is not getattr(PaginatedEntityStore, hook)

    # Public operations

    async def fetch(self, params=None) -> bool:
        """Replace the collection with page 1 for ``params``."""
        if not self._is_bound("_load_page"):
            self._refuse("fetch")
            return False
        return await self._fetch_with(self._load_page, params)

    async def load_more(self, params=None) -> bool:
        """Append the next page; a no-op once the last page is loaded."""
        if not self._is_bound("_load_page"):
            self._refuse("load_more")
            return False
        return await self._load_more_with(self._load_page, params)

    async def fetch_one(self, entity_id: str) -> Optional[T]:
        if not self._is_bound("_load_one"):
            return self._refuse("fetch_one")
        return await self._fetch_one_with(self._load_one, entity_id)

    async def create(self, payload) -> Optional[T]:
        """Create on the server and put the returned entity at the head of the list."""
        if not self._is_bound("_create"):
            return self._refuse("create")
        generation = self._generation
        self._set(is_saving=True, error=None)
        try:
            entity = await self._create(payload)
        except LaundryProError as e:
            return self._failed("create", e, generation)
        if generation != self._generation:
            return None

        self._set(items=prepend(self._state.items, entity), is_saving=False)
        logger.info(f"Created {self.name} entity {entity.id}", extra={"store": self.name})
        return entity

    async def update(self, entity_id: str, payload) -> Optional[T]:
        if not self._is_bound("_update"):
            return self._refuse("update")
        generation = self._generation
        self._set(is_saving=True, error=None)
        try:
            entity = await self._update(entity_id, payload)
        except LaundryProError as e:
            return self._failed("update", e, generation)
        if generation != self._generation:
            return None

        self._set(
            items=upsert(self._state.items, entity),
            selected=self._refreshed_selection(entity),
            is_saving=False,
        )
        return entity

    async def update_status(self, entity_id: str, status) -> bool:
        """Change the status on the server, then patch only ``status`` locally."""
        if not self._is_bound("_update_status"):
            self._refuse("update_status")
            return False
        generation = self._generation
        self._set(is_saving=True, error=None)
        try:
            await self._update_status(entity_id, status)
        except LaundryProError as e:
            self._failed("update_status", e, generation)
            return False
        if generation != self._generation:
            return False

        items = tuple(
            item.model_copy(update={"status": status}) if item.id == entity_id else item
            for item in self._state.items
        )
        selected = self._state.selected
        if selected is not None and selected.id == entity_id:
            selected = selected.model_copy(update={"status": status})

        self._set(items=items, selected=selected, is_saving=False)
        return True

    def clear_error(self) -> None:
        self._set(error=None)

    def clear_selected(self) -> None:
        self._set(selected=None)

    def reset(self) -> None:
        self._list_seq += 1
        super().reset()

    # Shared implementations

    def _page_params(self, params, page: int):
        params = params if params is not None else self.params_class()
        limit = params.limit or self.default_limit
        return params.model_copy(update={"page": page, "limit": limit})

    def _next_seq(self) -> int:
        self._list_seq += 1
        return self._list_seq

    def _is_stale(self, seq: int) -> bool:
        if seq != self._list_seq:
            logger.debug(
                f"Dropping stale {self.name} list response #{seq} (latest #{self._list_seq})",
                extra={"store": self.name},
            )
            return True
        return False

    async def _fetch_with(self, loader: PageLoader, params) -> bool:
        seq = self._next_seq()
        query = self._page_params(params, 1)
        self._set(is_loading=True, is_loading_more=False, error=None, filters=query)

        try:
            page = await loader(query)
        except LaundryProError as e:
            if not self._is_stale(seq):
                self._set(is_loading=False, error=user_message(e, self.messages["fetch"]))
            return False

        if self._is_stale(seq):
            return False

        self._set(
            items=upsert_many((), page.items),
            pagination=page.pagination,
            is_loading=False,
        )
        return True

    async def _load_more_with(self, loader: PageLoader, params) -> bool:
        state = self._state
        if state.pagination.page >= state.pagination.total_pages:
            return False
        # Only another list request blocks paging
        if state.is_loading or state.is_loading_more:
            return False

        seq = self._next_seq()
        query = self._page_params(params if params is not None else state.filters, state.pagination.page + 1)
        self._set(is_loading_more=True, error=None)

        try:
            page = await loader(query)
        except LaundryProError as e:
            if not self._is_stale(seq):
                self._set(is_loading_more=False, error=user_message(e, self.messages["fetch"]))
            return False

        if self._is_stale(seq):
            return False

        pagination = page.pagination
        if pagination.page < self._state.pagination.page:
            pagination = self._state.pagination
        self._set(
            items=upsert_many(self._state.items, page.items),
            pagination=pagination,
            is_loading_more=False,
        )
        return True

    async def _fetch_one_with(self, loader: Callable[[str], Awaitable[T]], entity_id: str) -> Optional[T]:
        generation = self._generation
        self._set(is_saving=True, error=None)
        try:
            entity = await loader(entity_id)
        except LaundryProError as e:
            return self._failed("fetch_one", e, generation)
        if generation != self._generation:
            return None

        self._set(items=upsert(self._state.items, entity), selected=entity, is_saving=False)
        return entity

    def _refreshed_selection(self, entity: T) -> Optional[T]:
        selected = self._state.selected
        if selected is not None and selected.id == entity.id:
            return entity
        return selected

    def _refuse(self, operation: str) -> None:
        logger.warning(f"{self.name} does not support {operation}", extra={"store": self.name})
        self._set(error=self.messages["unsupported"])
        return None

    def _failed(
        self,
        operation: str,
        error: LaundryProError,
        generation: int,
        flag: Optional[str] = "is_saving",
    ) -> None:
        logger.warning(
            f"{self.name} {operation} failed: {error}",
            extra={"store": self.name, "status": error.status_code},
        )
        if generation == self._generation:
            changes = {"error": user_message(error, self.messages[operation])}
            if flag is not None:
                changes[flag] = False
            self._set(**changes)
        return None
