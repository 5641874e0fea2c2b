"""
Pagination engine for candidate search.
"""

from typing import Any, Callable, Iterable, List, Protocol, TypeVar

from .models import PageResult, SearchCriteria


class Candidate(Protocol):
    """Anything searchable by age."""
    age: float


T = TypeVar("T", bound=Candidate)


def _default_age(candidate: Any) -> float:
    return candidate.age


def paginate(
    candidates: Iterable[T],
    criteria: SearchCriteria,
    age_of: Callable[[T], float] = _default_age,
) -> PageResult[T]:
    """Filter ``candidates`` by age and slice out the requested page.

    The iterable is consumed once. Input order is preserved; the engine
    never re-sorts. ``total_count`` covers the whole filtered set, so an
    out-of-range page yields no items but a correct envelope.
    """
    start = criteria.offset
    stop = start + criteria.page_size

    items: List[T] = []
    total_count = 0
    for candidate in candidates:
        if not criteria.matches(age_of(candidate)):
            continue
        if start <= total_count < stop:
            items.append(candidate)
        total_count += 1

    total_pages = -(-total_count // criteria.page_size)
    return PageResult(
        items=tuple(items),
        total_count=total_count,
        page=criteria.page,
        page_size=criteria.page_size,
        total_pages=total_pages,
        has_next=criteria.page < total_pages,
        has_previous=criteria.page > 1,
    )
