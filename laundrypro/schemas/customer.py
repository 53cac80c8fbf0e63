"""Customer management schemas."""
from typing import Optional

from laundrypro.models.base import ApiModel
from laundrypro.schemas.common import ListParams


class FetchCustomersParams(ListParams):
    search: Optional[str] = None


class CustomerCreate(ApiModel):
    """Create new customer."""
    phone: str
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    note: Optional[str] = None


class CustomerUpdate(ApiModel):
    """Update customer profile."""
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    note: Optional[str] = None
