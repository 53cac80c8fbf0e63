"""Laundry service catalog request schemas."""
from typing import Optional

from pydantic import Field

from laundrypro.models.base import ApiModel
from laundrypro.schemas.common import ListParams


class FileUpload(ApiModel):
    """A file sent as a multipart part (service image, avatar)."""
    filename: str
    content: bytes = Field(repr=False)
    content_type: str = "image/jpeg"


class FetchServicesParams(ListParams):
    """Filters for the (unpaginated) services list."""
    active: Optional[bool] = None
    category: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class CreateServiceRequest(ApiModel):
    """POST /services (multipart). Required: name, category, price, unit."""
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(gt=0)
    unit: str = Field(min_length=1)
    active: Optional[bool] = None
    image: Optional[FileUpload] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Giặt thường",
                "category": "Giặt sấy",
                "price": 15000,
                "unit": "kg",
                "active": True
            }
        }
    }


class UpdateServiceRequest(ApiModel):
    """PUT /services/:id (multipart). All fields optional."""
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = None
    active: Optional[bool] = None
    image: Optional[FileUpload] = None
