"""Laundry service catalog model."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from laundrypro.models.base import Entity


class Service(Entity):
    """A priced laundry service offered by the shop (e.g. washing per kg)."""

    name: str
    category: str
    price: float = Field(gt=0)
    unit: str
    active: bool = True
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
