"""Request payloads and response shapes for the LaundryPro API."""
from .common import ApiEnvelope, Pagination, Page, ListParams
from .auth import CheckLoginRequest, OtpLoginRequest, PasswordLoginRequest, SetPasswordRequest
from .order import FetchOrdersParams, CreateOrderItem, CreateOrderRequest, UpdateOrderStatusRequest
from .service import FileUpload, FetchServicesParams, CreateServiceRequest, UpdateServiceRequest
from .customer import FetchCustomersParams, CustomerCreate, CustomerUpdate
from .staff import FetchUsersParams, StaffCreate, StaffUpdate, UpdateUserStatusRequest
from .profile import ProfileUpdate, ChangePasswordRequest

__all__ = [
    "ApiEnvelope",
    "Pagination",
    "Page",
    "ListParams",
    "CheckLoginRequest",
    "OtpLoginRequest",
    "PasswordLoginRequest",
    "SetPasswordRequest",
    "FetchOrdersParams",
    "CreateOrderItem",
    "CreateOrderRequest",
    "UpdateOrderStatusRequest",
    "FileUpload",
    "FetchServicesParams",
    "CreateServiceRequest",
    "UpdateServiceRequest",
    "FetchCustomersParams",
    "CustomerCreate",
    "CustomerUpdate",
    "FetchUsersParams",
    "StaffCreate",
    "StaffUpdate",
    "UpdateUserStatusRequest",
    "ProfileUpdate",
    "ChangePasswordRequest",
]
