"""
Full-text search and ID filtering.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Sequence

from .predicates import FilterConfig, P, PredicateBuilder, Q

# field name -> case-insensitive "contains" predicate for that field
SearchFields = Mapping[str, Callable[[str], P]]


def apply_ids(
    query: Q,
    cfg: FilterConfig[Q, P],
    builder: PredicateBuilder[P],
    ids: Sequence[Any],
) -> Q:
    """
    Restrict the query to the given IDs. No IDs leaves the query unchanged.
    """
    if not ids:
        return query
    return cfg.where(query, builder.id_in(*ids))


def apply_search(
    query: Q,
    cfg: FilterConfig[Q, P],
    fields: SearchFields,
    builder: PredicateBuilder[P],
    search: str,
) -> Q:
    """
    Apply whitespace-tokenized search across `fields`.

    Each token must match at least one field (OR within a token) and every
    token must match (AND between tokens). "john doe" over first/last name
    becomes:

        (first ILIKE %john% OR last ILIKE %john%) AND
        (first ILIKE %doe% OR last ILIKE %doe%)
    """
    tokens = (search or "").split()
    if not tokens:
        return query

    token_predicates: List[P] = []
    for token in tokens:
        field_predicates = [contains_fold(token) for contains_fold in fields.values()]
        token_predicates.append(builder.or_(*field_predicates))

    if len(token_predicates) == 1:
        combined = token_predicates[0]
    else:
        combined = builder.and_(*token_predicates)
    return cfg.where(query, combined)


__all__ = ["SearchFields", "apply_ids", "apply_search"]
