"""Shared response shapes: the success envelope and pagination."""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import Field

from laundrypro.core.exceptions import ServerError
from laundrypro.models.base import ApiModel

T = TypeVar("T")


class ApiEnvelope(ApiModel):
    """Every success response: ``{success, message?, data}``."""
    success: bool = True
    message: Optional[str] = None
    data: Any = None

    def data_object(self) -> Dict[str, Any]:
        """``data`` as an object; a missing body counts as empty."""
        if self.data is None:
            return {}
        if not isinstance(self.data, dict):
            raise ServerError(f"Malformed response: expected an object, got {type(self.data).__name__}")
        return self.data

    def data_items(self, key: Optional[str] = None) -> List[Any]:
        """The list at ``data[key]`` (or ``data`` itself without a key)."""
        items = self.data_object().get(key) if key else self.data
        if items is None:
            return []
        if not isinstance(items, list):
            raise ServerError(f"Malformed response: expected a list for {key or 'data'}")
        return items


class Pagination(ApiModel):
    """Server-authoritative pagination attached to list results."""
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


class Page(ApiModel, Generic[T]):
    """One page of a list endpoint."""
    items: List[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    message: Optional[str] = None

    @classmethod
    def from_envelope(cls, envelope: ApiEnvelope, key: str, model: Type[ApiModel]) -> "Page":
        """Build a page from a list response shaped ``{<key>: [...], pagination}``."""
        return cls(
            items=[model.from_dict(item) for item in envelope.data_items(key)],
            pagination=Pagination.from_dict(envelope.data_object().get("pagination") or {}),
            message=envelope.message,
        )


class ListParams(ApiModel):
    """Base for list query parameters; renders to a query-string mapping."""
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_query(self) -> Dict[str, str]:
        query = {}
        for key, value in self.model_dump(by_alias=True, exclude_none=True, mode="json").items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            query[key] = str(value)
        return query
