"""
querykit: ORM-agnostic filtering, sorting and pagination.

Callers describe their backend through small adapter functions (atomic
predicates, AND/OR combinators, where/order/limit/offset appliers); querykit
turns request input into modified query values through them.

    from querykit.filters import build_filter_map, evaluate, string_field
    from querykit.query import pagination, sort

The FastAPI dependency lives in `querykit.params`.
"""

from . import filters, query
from .config import Settings, get_settings, load_settings
from .exceptions import (
    FilterPayloadError,
    QueryKitError,
    TypeMismatchError,
    UnparseableTimeError,
)

__version__ = "0.1.0"

__all__ = [
    "filters",
    "query",
    "Settings",
    "get_settings",
    "load_settings",
    "QueryKitError",
    "TypeMismatchError",
    "UnparseableTimeError",
    "FilterPayloadError",
]
