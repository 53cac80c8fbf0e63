"""Order models."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from laundrypro.models.base import ApiModel, Entity


class OrderStatus(str, Enum):
    """Order status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Payment status enumeration."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    """Payment method enumeration."""
    CASH = "cash"
    MOMO = "momo"
    VNPAY = "vnpay"
    BANK = "bank"


class OrderItem(Entity):
    """One service line of an order."""

    order_id: Optional[str] = None
    service_id: str
    service_name: Optional[str] = None
    service_category: Optional[str] = None
    service_price: Optional[float] = None
    service_unit: Optional[str] = None
    quantity: float
    unit_price: float
    total_price: float
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Payment(Entity):
    """Payment attached to an order."""

    order_id: Optional[str] = None
    method: PaymentMethod
    amount: float
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_ref: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderCustomer(Entity):
    """Customer summary embedded in an order."""

    phone: str
    name: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    is_verified: Optional[bool] = None
    has_password: Optional[bool] = None


class OrderCreatedBy(Entity):
    """Staff or admin who created the order."""

    phone: str
    name: Optional[str] = None


class Order(Entity):
    """
    Laundry order.

    ``total_price`` is the server-computed sum of the item totals; the client
    only displays it.
    """

    customer: Optional[OrderCustomer] = Field(default=None, alias="customerId")
    created_by: Optional[OrderCreatedBy] = None
    status: OrderStatus = OrderStatus.PENDING
    completed_at: Optional[datetime] = None
    total_price: float = 0.0
    payment: Optional[Payment] = None
    order_items: List[OrderItem] = Field(default_factory=list)
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
