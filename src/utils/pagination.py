# src/utils/pagination.py
import math
from typing import Any, Dict, List
from fastapi import Query
from .exceptions import BadRequestException

MAX_PAGE_SIZE = 100


class PageParams:
    """Validated ``page``/``limit`` query parameters.

    Instances are created through :func:`page_params` so each endpoint can
    choose its own default page size.
    """

    def __init__(self, page: int, limit: int):
        if page < 1:
            raise BadRequestException("page must be a positive integer")
        if limit < 1:
            raise BadRequestException("limit must be a positive integer")
        self.page = page
        self.limit = min(limit, MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total_items: int) -> Dict[str, int]:
        return {
            "currentPage": self.page,
            "totalPages": math.ceil(total_items / self.limit),
            "totalItems": total_items,
            "itemsPerPage": self.limit,
        }


def page_params(default_limit: int = 10):
    """Build a dependency that parses pagination with the given default limit"""

    def dependency(
        page: int = Query(1, description="Page number, starting at 1"),
        limit: int = Query(default_limit, description="Items per page"),
    ) -> PageParams:
        return PageParams(page, limit)

    return dependency


def paginated(items: List[Any], params: PageParams, total: int, key: str) -> dict:
    """Listing payload: ``{<key>: items, pagination: {...}}``"""
    return {key: items, "pagination": params.meta(total)}
