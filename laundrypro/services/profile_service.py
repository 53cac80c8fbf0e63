"""Own-profile endpoints."""
from laundrypro.models.user import User
from laundrypro.schemas.common import ApiEnvelope
from laundrypro.schemas.profile import ChangePasswordRequest, ProfileUpdate
from laundrypro.services.http_client import ApiClient


class ProfileService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def update_profile(self, payload: ProfileUpdate) -> User:
        """PUT /users/profile (multipart, avatar optional)"""
        fields = payload.model_dump(by_alias=True, exclude_none=True, exclude={"avatar"})
        if payload.avatar is not None:
            fields["avatar"] = payload.avatar
        envelope = await self.client.put("/users/profile", form=fields)
        return User.from_dict(envelope.data)

    async def change_password(self, payload: ChangePasswordRequest) -> ApiEnvelope:
        """PUT /users/password"""
        return await self.client.put("/users/password", payload.to_dict())
