"""Own-profile schemas."""
from typing import Optional

from pydantic import Field

from laundrypro.models.base import ApiModel
from laundrypro.schemas.service import FileUpload


class ProfileUpdate(ApiModel):
    """PUT /users/profile (multipart, optional avatar)."""
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[FileUpload] = None


class ChangePasswordRequest(ApiModel):
    current_password: str = Field(repr=False)
    new_password: str = Field(repr=False)
    confirm_password: str = Field(repr=False)
