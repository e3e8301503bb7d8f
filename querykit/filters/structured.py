"""
Structured filter evaluation.

Walks a FilterGroup, resolves each filter's field to its builder, dispatches
the operator and joins the resulting predicates:

    group = FilterGroup(
        filters=[
            Filter("email", Operator.CONTAINS, "john"),
            Filter("created_at", Operator.GTE, "2024-01-15"),
        ],
        logic="and",
    )
    query = apply_structured_filters(query, cfg, group, filter_builders, combinators)

Unknown fields are skipped and unknown operators behave as `eq`, so
malformed or newer client input never fails the request.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .builders import FieldFilterBuilder
from .models import Filter, FilterGroup, LogicalOperator, Operator
from .predicates import Combinators, FilterConfig, P, Q

log = logging.getLogger("querykit.filters")


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _operator(tag: Any) -> Operator:
    try:
        return Operator(tag)
    except ValueError:
        log.debug("unknown operator %r, treating as eq", tag)
        return Operator.EQ


def build_predicate(builder: FieldFilterBuilder[P], f: Filter) -> P:
    op = _operator(f.operator)
    if op is Operator.EQ:
        return builder.eq(f.value)
    if op is Operator.NE:
        return builder.ne(f.value)
    if op is Operator.GT:
        return builder.gt(f.value)
    if op is Operator.GTE:
        return builder.gte(f.value)
    if op is Operator.LT:
        return builder.lt(f.value)
    if op is Operator.LTE:
        return builder.lte(f.value)
    if op is Operator.IN:
        return builder.in_(_as_list(f.value))
    if op is Operator.NIN:
        return builder.nin(_as_list(f.value))
    if op is Operator.CONTAINS:
        return builder.contains(_as_text(f.value))
    if op is Operator.STARTSWITH:
        return builder.starts_with(_as_text(f.value))
    if op is Operator.ENDSWITH:
        return builder.ends_with(_as_text(f.value))
    if op is Operator.NULL:
        return builder.is_null()
    return builder.is_not_null()


def evaluate(
    group: FilterGroup,
    field_builders: Mapping[str, FieldFilterBuilder[P]],
    combinators: Combinators[P],
) -> Optional[P]:
    """
    Return the combined predicate for `group`, or None when nothing
    constrains the query (no filters, or only unknown fields).

    A single surviving predicate is returned as-is. Several are joined with
    `or_` when group.logic is exactly "or", otherwise with `and_`.
    `combinators` may be any object with `or_` / `and_`, such as a
    PredicateBuilder.
    """
    if not group.filters:
        return None

    parts: List[P] = []
    for f in group.filters:
        builder = field_builders.get(f.field)
        if builder is None:
            log.debug("skipping filter on unknown field %r", f.field)
            continue
        parts.append(build_predicate(builder, f))

    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    if group.logic == LogicalOperator.OR.value:
        return combinators.or_(*parts)
    return combinators.and_(*parts)


def apply_structured_filters(
    query: Q,
    cfg: FilterConfig[Q, P],
    group: FilterGroup,
    field_builders: Mapping[str, FieldFilterBuilder[P]],
    combinators: Combinators[P],
) -> Q:
    predicate = evaluate(group, field_builders, combinators)
    if predicate is None:
        return query
    return cfg.where(query, predicate)


__all__ = ["build_predicate", "evaluate", "apply_structured_filters"]
