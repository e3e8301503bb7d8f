"""
Declarative registration of field filter builders.

Fields are described first and receive the combinators when the map is
built, so one description can serve several backends:

    filter_builders = build_filter_map(
        Combinators(or_=sa.or_, and_=sa.and_),
        string_field("email", StringPredicates(...)),
        nullable_string_field("first_name", StringPredicates(..., is_nil=..., is_not_nil=...)),
        bool_field("is_active", BoolPredicates(...)),
        time_field("created_at", TimePredicates(...)),
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Generic, Mapping, Optional

from ..config import get_settings
from .builders import (
    BoolFilterBuilder,
    BoolPredicates,
    FieldFilterBuilder,
    StringFilterBuilder,
    StringPredicates,
    TimeFilterBuilder,
    TimePredicates,
)
from .predicates import Combinators, P

log = logging.getLogger("querykit.filters")

FilterMap = Mapping[str, FieldFilterBuilder[P]]


@dataclass(frozen=True)
class FieldBuilder(Generic[P]):
    name: str
    create: Callable[[Combinators[P]], FieldFilterBuilder[P]]


def build_filter_map(combinators: Combinators[P], *fields: FieldBuilder[P]) -> FilterMap:
    """
    Build a read-only name -> builder mapping. Names are matched exactly.
    A repeated name replaces the earlier registration.
    """
    result: Dict[str, FieldFilterBuilder[P]] = {}
    for fb in fields:
        if fb.name in result:
            log.warning("duplicate filter field %r; last registration wins", fb.name)
        result[fb.name] = fb.create(combinators)
    return MappingProxyType(result)


def string_field(name: str, predicates: StringPredicates[P]) -> FieldBuilder[P]:
    return FieldBuilder(
        name=name,
        create=lambda c: StringFilterBuilder(predicates, c, nullable=False, name=name),
    )


def nullable_string_field(name: str, predicates: StringPredicates[P]) -> FieldBuilder[P]:
    return FieldBuilder(
        name=name,
        create=lambda c: StringFilterBuilder(predicates, c, nullable=True, name=name),
    )


def bool_field(name: str, predicates: BoolPredicates[P]) -> FieldBuilder[P]:
    return FieldBuilder(
        name=name,
        create=lambda c: BoolFilterBuilder(predicates, c, name=name),
    )


def _time_field(name: str, predicates: TimePredicates[P], nullable: bool, strict: Optional[bool]) -> FieldBuilder[P]:
    def create(c: Combinators[P]) -> FieldFilterBuilder[P]:
        s = get_settings().strict_time_parsing if strict is None else strict
        return TimeFilterBuilder(predicates, c, nullable=nullable, strict=s, name=name)

    return FieldBuilder(name=name, create=create)


def time_field(name: str, predicates: TimePredicates[P], *, strict: Optional[bool] = None) -> FieldBuilder[P]:
    """
    Non-nullable time field. `strict=None` takes the strictness from
    Settings.strict_time_parsing when the map is built.
    """
    return _time_field(name, predicates, False, strict)


def nullable_time_field(name: str, predicates: TimePredicates[P], *, strict: Optional[bool] = None) -> FieldBuilder[P]:
    return _time_field(name, predicates, True, strict)


__all__ = [
    "FilterMap",
    "FieldBuilder",
    "build_filter_map",
    "string_field",
    "nullable_string_field",
    "bool_field",
    "time_field",
    "nullable_time_field",
]
