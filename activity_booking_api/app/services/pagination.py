"""
Filtering and pagination helpers shared by every list endpoint.

List endpoints build a set of predicates from their query parameters,
ask the repository for matching records and slice the result with
:func:`paginate`.  Each predicate builder returns ``None`` when its
query parameter was not supplied, and :func:`build_filters` discards
those, so an absent parameter never narrows the result.  Filtering
always happens before pagination.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from fastapi import Query, Request
from fastapi.exceptions import RequestValidationError

from ..schemas.common import Pagination

T = TypeVar("T")
Predicate = Callable[[Any], bool]


@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int
    total_pages: int

    def pagination(self) -> Pagination:
        return Pagination(page=self.page, limit=self.limit, total=self.total, totalPages=self.total_pages)


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Return the ``page``‑th slice of ``items`` (1‑based).

    ``page`` and ``limit`` must already be validated positive integers.
    Pages past the end are empty rather than an error.
    """
    total = len(items)
    total_pages = math.ceil(total / limit) if total else 0
    offset = (page - 1) * limit
    return Page(
        items=list(items[offset:offset + limit]),
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
    )


def build_filters(*predicates: Optional[Predicate]) -> List[Predicate]:
    return [predicate for predicate in predicates if predicate is not None]


def is_active_filter(is_active: Optional[bool]) -> Optional[Predicate]:
    if is_active is None:
        return None
    return lambda record: record.is_active == is_active


def equals_filter(field: str, value: Any) -> Optional[Predicate]:
    if value is None or value == "":
        return None
    return lambda record: getattr(record, field) == value


def search_filter(search: Optional[str], *fields: str) -> Optional[Predicate]:
    """Case-insensitive substring match over any of ``fields``."""
    if not search:
        return None
    needle = search.lower()

    def matches(record: Any) -> bool:
        for field in fields:
            value = getattr(record, field, None)
            if value is not None and needle in str(value).lower():
                return True
        return False

    return matches


def range_filter(field: str, minimum: Any = None, maximum: Any = None) -> Optional[Predicate]:
    """Inclusive bounds check; either bound may be omitted."""
    if minimum is None and maximum is None:
        return None

    def within(record: Any) -> bool:
        value = getattr(record, field)
        if value is None:
            return False
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True

    return within


@dataclass
class PageRequest:
    page: int
    limit: int

    def apply(self, items: Sequence[T]) -> Page[T]:
        return paginate(items, self.page, self.limit)


class PageParams:
    """Query dependency providing validated ``page`` and ``limit`` values.

    Instances are created per endpoint with that endpoint's default page
    size, e.g. ``paging: PageRequest = Depends(PageParams(50))``.
    Non-numeric or non-positive values, and limits above the serving
    app's ``max_page_limit``, fail query validation (HTTP 400).
    """

    def __init__(self, default_limit: Optional[int] = None) -> None:
        self.default_limit = default_limit

    def __call__(
        self,
        request: Request,
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: Optional[int] = Query(None, ge=1, description="Page size"),
    ) -> PageRequest:
        app_settings = request.app.state.settings
        maximum = app_settings.max_page_limit
        if limit is not None and limit > maximum:
            raise RequestValidationError(
                [
                    {
                        "type": "less_than_equal",
                        "loc": ("query", "limit"),
                        "msg": f"Input should be less than or equal to {maximum}",
                        "input": limit,
                        "ctx": {"le": maximum},
                    }
                ]
            )
        return PageRequest(page=page, limit=limit or self.default_limit or app_settings.default_page_limit)
