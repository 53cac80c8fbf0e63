"""
API entity models.

This file makes it easy to import all models at once.
"""

from .base import ApiModel, Entity
from .user import User, UserRole, UserStatus, LoginMethod, Customer, StaffUser, CheckLoginResult
from .order import Order, OrderItem, OrderCustomer, OrderCreatedBy, OrderStatus, Payment, PaymentStatus, PaymentMethod
from .service import Service

__all__ = [
    "ApiModel",
    "Entity",
    "User",
    "UserRole",
    "UserStatus",
    "LoginMethod",
    "Customer",
    "StaffUser",
    "CheckLoginResult",
    "Order",
    "OrderItem",
    "OrderCustomer",
    "OrderCreatedBy",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "Service",
]
