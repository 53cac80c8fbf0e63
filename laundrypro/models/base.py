"""Base model for API entities."""
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from laundrypro.core.exceptions import ServerError

ModelT = TypeVar("ModelT", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for entities returned by the LaundryPro API.

    Wire fields are camelCase; Python attributes are snake_case. Unknown
    fields sent by the server are kept rather than rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @classmethod
    def from_dict(cls: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        """Create model instance from an API payload."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ServerError(
                f"Malformed {cls.__name__} in response: {e.error_count()} error(s)"
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to its wire representation."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Entity(ApiModel):
    """An API entity keyed by the server-assigned ``_id``."""

    id: str = Field(alias="_id")
