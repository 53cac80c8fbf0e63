"""Authentication request schemas."""
from pydantic import Field

from laundrypro.models.base import ApiModel


class CheckLoginRequest(ApiModel):
    """Request schema for the check-login step."""
    phone: str

    model_config = {
        "json_schema_extra": {
            "example": {"phone": "+84788876568"}
        }
    }


class OtpLoginRequest(ApiModel):
    """Exchange an identity-provider id token for a session."""
    id_token: str = Field(repr=False)


class PasswordLoginRequest(ApiModel):
    """Request schema for phone + password login."""
    phone: str
    password: str = Field(repr=False)

    model_config = {
        "json_schema_extra": {
            "example": {"phone": "+84788876568", "password": "secret123"}
        }
    }


class SetPasswordRequest(ApiModel):
    """Set the initial password of an account that has none."""
    password: str = Field(repr=False)
    confirm_password: str = Field(repr=False)
