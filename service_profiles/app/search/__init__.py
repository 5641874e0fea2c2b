"""
Profile search: criteria resolution and deterministic pagination.
"""

from .criteria import CriteriaResolver, resolve
from .models import PageResult, SearchCriteria, SearchRequest
from .pagination import Candidate, paginate

__all__ = [
    "Candidate",
    "CriteriaResolver",
    "PageResult",
    "SearchCriteria",
    "SearchRequest",
    "paginate",
    "resolve",
]
