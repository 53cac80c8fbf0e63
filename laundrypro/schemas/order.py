"""Order request schemas."""
from typing import List, Optional

from pydantic import Field

from laundrypro.models.base import ApiModel
from laundrypro.models.order import OrderStatus
from laundrypro.schemas.common import ListParams


class FetchOrdersParams(ListParams):
    """Filters for the order lists. Staff/admin filters are ignored for customers."""
    status: Optional[OrderStatus] = None
    customer_id: Optional[str] = None
    created_by: Optional[str] = None
    customer_phone: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class CreateOrderItem(ApiModel):
    """One line of a new order."""
    service_id: str
    quantity: float = Field(gt=0)
    unit_price: Optional[float] = None
    note: Optional[str] = None


class CreateOrderRequest(ApiModel):
    """POST /orders: the customer is auto-provisioned when the phone is unknown."""
    customer_phone: str
    customer_name: str
    customer_address: Optional[str] = None
    items: List[CreateOrderItem] = Field(min_length=1)
    note: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "customerPhone": "+84788876568",
                "customerName": "Nguyen Van A",
                "items": [{"serviceId": "svc-1", "quantity": 3, "unitPrice": 15000}],
            }
        }
    }


class UpdateOrderStatusRequest(ApiModel):
    status: OrderStatus
