"""
Search and pagination data models.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SearchRequest(BaseModel):
    """Raw search filter as received from clients.

    Values are not validated beyond their type; the criteria resolver
    clamps out-of-range paging values.
    """

    model_config = ConfigDict(populate_by_name=True)

    min_age: Optional[int] = Field(None, alias="minAge", description="Inclusive lower age bound")
    max_age: Optional[int] = Field(None, alias="maxAge", description="Inclusive upper age bound")
    page: Optional[int] = Field(None, description="1-based page number")
    page_size: Optional[int] = Field(None, alias="pageSize", description="Items per page")


@dataclass(frozen=True)
class SearchCriteria:
    """Canonical search predicate with resolved paging."""
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    page: int = 1
    page_size: int = 10

    def __post_init__(self):
        if self.page < 1 or self.page_size < 1:
            raise ValueError("page and page_size must be positive")

    def matches(self, age: float) -> bool:
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of filtered candidates plus its pagination envelope."""
    items: Tuple[T, ...] = field(default_factory=tuple)
    total_count: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False

    def to_envelope(self, serialize: Optional[Callable[[T], Any]] = None) -> Dict[str, Any]:
        """Render the response envelope sent to HTTP clients."""
        render = serialize or (lambda item: item)
        return {
            "results": [render(item) for item in self.items],
            "totalCount": self.total_count,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }
