"""Profile edit and password change."""
import logging
from typing import Optional

from laundrypro.config.settings import Settings, get_settings
from laundrypro.core.exceptions import LaundryProError, ValidationError, user_message
from laundrypro.models.user import User
from laundrypro.schemas.profile import ChangePasswordRequest, ProfileUpdate
from laundrypro.services.profile_service import ProfileService
from laundrypro.state.profile import ProfileStore
from laundrypro.state.session import SessionStore
from laundrypro.utils.validation import require_text, validate_new_password

logger = logging.getLogger(__name__)


class ProfileController:
    def __init__(
        self,
        profile_service: ProfileService,
        session: SessionStore,
        profile: ProfileStore,
        settings: Optional[Settings] = None,
    ):
        self.profile_service = profile_service
        self.session = session
        self.profile = profile
        self.settings = settings or get_settings()

    async def update_profile(self, payload: ProfileUpdate) -> Optional[User]:
        """Save the profile and merge the server's copy into the session identity."""
        try:
            if payload.name is not None:
                require_text(payload.name, "Name")
        except ValidationError as e:
            self.profile.fail(e.message)
            return None

        generation = self.session.generation
        self.profile.start()
        try:
            user = await self.profile_service.update_profile(payload)
        except LaundryProError as e:
            logger.warning(f"Profile update failed: {e}")
            self.profile.fail(user_message(e, "Could not update your profile"))
            return None

        if generation != self.session.generation:
            logger.info("Dropping a profile update that arrived after logout")
            return None
        self.session.merge_identity(user.model_dump(by_alias=True, exclude_none=True))
        self.profile.succeed("Profile updated")
        return user

    async def change_password(self, current_password: str, new_password: str, confirm_password: str) -> bool:
        try:
            require_text(current_password, "Current password")
            validate_new_password(new_password, confirm_password, self.settings.CHANGE_PASSWORD_MIN_LENGTH)
        except ValidationError as e:
            self.profile.fail(e.message)
            return False

        self.profile.start()
        try:
            envelope = await self.profile_service.change_password(
                ChangePasswordRequest(
                    current_password=current_password,
                    new_password=new_password,
                    confirm_password=confirm_password,
                )
            )
        except LaundryProError as e:
            self.profile.fail(user_message(e, "Could not change the password"))
            return False

        self.profile.succeed(envelope.message or "Password changed")
        return True

    def clear_error(self) -> None:
        self.profile.clear_error()
