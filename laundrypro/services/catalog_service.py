"""Laundry service catalog endpoints."""
import logging
from typing import List, Optional

from laundrypro.models.service import Service
from laundrypro.schemas.common import ApiEnvelope
from laundrypro.schemas.service import (
    CreateServiceRequest,
    FetchServicesParams,
    UpdateServiceRequest,
)
from laundrypro.services.http_client import ApiClient

logger = logging.getLogger(__name__)


def _form_fields(payload) -> dict:
    """Multipart fields for a create/update payload, image kept as an upload."""
    fields = payload.model_dump(by_alias=True, exclude_none=True, exclude={"image"})
    if payload.image is not None:
        fields["image"] = payload.image
    return fields


class CatalogService:
    """
    Services offered by the shop.

    Reads are public; create, update and delete are admin-only and use
    multipart bodies so an image can be attached.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_services(self, params: Optional[FetchServicesParams] = None) -> List[Service]:
        """GET /services (unpaginated)"""
        params = params or FetchServicesParams()
        envelope = await self.client.get("/services", params=params.to_query())
        return [Service.from_dict(item) for item in envelope.data_items()]

    async def list_categories(self) -> List[str]:
        """GET /services/categories"""
        envelope = await self.client.get("/services/categories")
        return [str(category) for category in envelope.data_items()]

    async def get_service(self, service_id: str) -> Service:
        """GET /services/:id"""
        envelope = await self.client.get(f"/services/{service_id}")
        return Service.from_dict(envelope.data)

    async def create_service(self, payload: CreateServiceRequest) -> Service:
        """POST /services (multipart)"""
        logger.info(f"Creating service {payload.name!r}")
        envelope = await self.client.post("/services", form=_form_fields(payload))
        return Service.from_dict(envelope.data)

    async def update_service(self, service_id: str, payload: UpdateServiceRequest) -> Service:
        """PUT /services/:id (multipart)"""
        envelope = await self.client.put(f"/services/{service_id}", form=_form_fields(payload))
        return Service.from_dict(envelope.data)

    async def delete_service(self, service_id: str) -> ApiEnvelope:
        """DELETE /services/:id"""
        logger.info(f"Deleting service {service_id}")
        return await self.client.delete(f"/services/{service_id}")
