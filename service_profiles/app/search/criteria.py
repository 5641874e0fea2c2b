"""
Search criteria resolution.
"""

from typing import Any, Mapping, Optional, Union

from .models import SearchCriteria, SearchRequest

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class CriteriaResolver:
    """Turn raw search input into canonical :class:`SearchCriteria`.

    Missing or non-positive ``page`` becomes 1, missing or non-positive
    ``page_size`` becomes the default, and oversized pages are capped at
    ``max_page_size``. Age bounds pass through untouched, contradictory
    bounds included.
    """

    def __init__(self, default_page_size: int = DEFAULT_PAGE_SIZE, max_page_size: int = MAX_PAGE_SIZE):
        if default_page_size < 1 or max_page_size < 1:
            raise ValueError("page sizes must be positive")
        self.default_page_size = min(default_page_size, max_page_size)
        self.max_page_size = max_page_size

    def resolve(self, raw: Union[SearchRequest, Mapping[str, Any], None]) -> SearchCriteria:
        if raw is None:
            raw = SearchRequest()
        elif not isinstance(raw, SearchRequest):
            raw = SearchRequest.model_validate(dict(raw))

        return SearchCriteria(
            min_age=raw.min_age,
            max_age=raw.max_age,
            page=self._resolve_page(raw.page),
            page_size=self._resolve_page_size(raw.page_size),
        )

    def _resolve_page(self, page: Optional[int]) -> int:
        if page is None or page <= 0:
            return 1
        return page

    def _resolve_page_size(self, page_size: Optional[int]) -> int:
        if page_size is None or page_size <= 0:
            return self.default_page_size
        return min(page_size, self.max_page_size)


def resolve(raw: Union[SearchRequest, Mapping[str, Any], None]) -> SearchCriteria:
    """Resolve with the default page-size policy."""
    return CriteriaResolver().resolve(raw)
