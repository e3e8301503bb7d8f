"""
Limit/offset pagination for any query type.

    cfg = PaginationConfig(
        limit=lambda q, n: q.limit(n),
        offset=lambda q, n: q.offset(n),
    )
    query = apply(query, cfg, 25, 0)   # first page
    query = apply(query, cfg, 25, 25)  # second page
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ..config import get_settings

Q = TypeVar("Q")
T = TypeVar("T")


@dataclass(frozen=True)
class PaginationConfig(Generic[Q]):
    limit: Callable[[Q, int], Q]
    offset: Callable[[Q, int], Q]


def apply(query: Q, cfg: PaginationConfig[Q], limit: int, offset: int) -> Q:
    """
    Apply OFFSET then LIMIT. Zero or negative values are not applied.
    """
    if offset > 0:
        query = cfg.offset(query, offset)
    if limit > 0:
        query = cfg.limit(query, limit)
    return query


def cap_page_size(page_size: int, max_page_size: Optional[int] = None) -> int:
    settings = get_settings()
    cap = settings.max_page_size if max_page_size is None else max_page_size
    if page_size <= 0:
        return min(settings.default_page_size, cap)
    return min(page_size, cap)


@dataclass
class Page(Generic[T]):
    """
    One page of results with its pagination metadata.
    """
    data: List[T] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0

    @property
    def has_next_page(self) -> bool:
        return self.offset + self.limit < self.total

    @property
    def has_prev_page(self) -> bool:
        return self.offset > 0

    @property
    def page_number(self) -> int:
        # 1-indexed
        if self.limit <= 0:
            return 1
        return self.offset // self.limit + 1

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 1
        return -(-self.total // self.limit)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": list(self.data),
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
        }


def new_page(data: List[T], total: int, limit: int, offset: int) -> Page[T]:
    return Page(data=data, total=total, limit=limit, offset=offset)


__all__ = ["PaginationConfig", "apply", "cap_page_size", "Page", "new_page"]
