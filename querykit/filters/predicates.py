"""
Caller-supplied predicate plumbing.

Predicates are opaque to this package: they are produced by the caller's
atomic functions and combined only through the caller's AND/OR functions.

Example for SQLAlchemy:

    combinators = Combinators(or_=sqlalchemy.or_, and_=sqlalchemy.and_)
    cfg = FilterConfig(where=lambda q, p: q.where(p))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

P = TypeVar("P")
Q = TypeVar("Q")


@dataclass(frozen=True)
class Combinators(Generic[P]):
    """
    AND/OR over zero or more predicates. Used to synthesize "always true"
    and "always false" predicates, and to join filter results.
    """
    or_: Callable[..., P]
    and_: Callable[..., P]


@dataclass(frozen=True)
class PredicateBuilder(Generic[P]):
    """
    Combinators plus an ID membership predicate (Refine-style getMany).
    """
    id_in: Callable[..., P]
    or_: Callable[..., P]
    and_: Callable[..., P]


@dataclass(frozen=True)
class FilterConfig(Generic[Q, P]):
    # applies a WHERE clause to the query
    where: Callable[[Q, P], Q]


def apply_where(query: Q, cfg: FilterConfig[Q, P], predicate: P) -> Q:
    """Apply a single custom predicate."""
    return cfg.where(query, predicate)


__all__ = ["P", "Q", "Combinators", "PredicateBuilder", "FilterConfig", "apply_where"]
