"""
Pagination and sorting for querykit.
"""

from . import pagination, sort
from .pagination import Page, PaginationConfig, cap_page_size, new_page
from .sort import (
    Criteria,
    Fields,
    Order,
    OrderBuilder,
    SortConfig,
    load_sort_fields,
    parse_sort,
    parse_sort_item,
)

__all__ = [
    "pagination",
    "sort",
    "PaginationConfig",
    "Page",
    "new_page",
    "cap_page_size",
    "Fields",
    "OrderBuilder",
    "SortConfig",
    "Order",
    "Criteria",
    "parse_sort_item",
    "parse_sort",
    "load_sort_fields",
]
