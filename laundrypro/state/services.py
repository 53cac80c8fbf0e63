"""Services store: the shop's catalog and its categories."""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from laundrypro.core.exceptions import LaundryProError, user_message
from laundrypro.models.service import Service
from laundrypro.schemas.common import Page, Pagination
from laundrypro.schemas.service import FetchServicesParams
from laundrypro.services.catalog_service import CatalogService
from laundrypro.state.entity_store import EntityState, PaginatedEntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServicesState(EntityState[Service]):
    categories: Tuple[str, ...] = ()


class ServicesStore(PaginatedEntityStore[Service]):
    """
    The catalog is not paginated by the API. Each fetch is presented as a
    single complete page, so ``load_more`` never issues a request.
    """

    name = "services"
    state_class = ServicesState
    params_class = FetchServicesParams

    messages = dict(
        PaginatedEntityStore.messages,
        delete="Could not delete the service",
        categories="Could not load the categories",
    )

    def __init__(self, service: CatalogService):
        super().__init__()
        self.service = service

    async def _load_page(self, params):
        # page/limit are not understood by the endpoint
        services = await self.service.list_services(params.model_copy(update={"page": None, "limit": None}))
        return Page(
            items=services,
            pagination=Pagination(page=1, limit=len(services), total=len(services), total_pages=1),
        )

    async def _load_one(self, service_id):
        return await self.service.get_service(service_id)

    async def _create(self, payload):
        return await self.service.create_service(payload)

    async def _update(self, service_id, payload):
        return await self.service.update_service(service_id, payload)

    async def fetch_categories(self) -> Tuple[str, ...]:
        generation = self._generation
        try:
            categories = await self.service.list_categories()
        except LaundryProError as e:
            self._failed("categories", e, generation, flag=None)
            return self._state.categories
        if generation == self._generation:
            self._set(categories=tuple(categories))
        return tuple(categories)

    async def delete(self, service_id: str) -> bool:
        """Delete on the server, then drop the service from the list and selection."""
        generation = self._generation
        self._set(is_saving=True, error=None)
        try:
            await self.service.delete_service(service_id)
        except LaundryProError as e:
            self._failed("delete", e, generation)
            return False
        if generation != self._generation:
            return False

        selected = self._state.selected
        if selected is not None and selected.id == service_id:
            selected = None
        self._set(
            items=tuple(item for item in self._state.items if item.id != service_id),
            selected=selected,
            is_saving=False,
        )
        logger.info(f"Deleted service {service_id}", extra={"store": self.name})
        return True

    def active_services(self) -> Tuple[Service, ...]:
        return tuple(item for item in self._state.items if item.active)

    def get_by_category(self, category: Optional[str]) -> Tuple[Service, ...]:
        if not category:
            return self._state.items
        return tuple(item for item in self._state.items if item.category == category)
