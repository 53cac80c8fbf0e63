"""Profile store: progress of the profile edit and password change forms."""
from dataclasses import dataclass
from typing import Optional

from laundrypro.state.store import Store


@dataclass(frozen=True)
class ProfileState:
    is_loading: bool = False
    error: Optional[str] = None
    message: Optional[str] = None


class ProfileStore(Store[ProfileState]):
    name = "profile"

    def __init__(self):
        super().__init__(ProfileState)

    def start(self) -> ProfileState:
        return self._set(is_loading=True, error=None, message=None)

    def succeed(self, message: Optional[str] = None) -> ProfileState:
        return self._set(is_loading=False, message=message)

    def fail(self, error: str) -> ProfileState:
        return self._set(is_loading=False, error=error)

    def clear_error(self) -> ProfileState:
        return self._set(error=None)
