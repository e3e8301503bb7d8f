"""
Filtering for querykit.

Typed field filter builders, the field registry, the structured filter
evaluator, full-text search and ID filtering, plus the filter-group wire
models.
"""

from .builders import (
    ZERO_TIME,
    BoolFilterBuilder,
    BoolPredicates,
    FieldFilterBuilder,
    StringFilterBuilder,
    StringPredicates,
    TimeFilterBuilder,
    TimePredicates,
    parse_time_value,
)
from .models import (
    FILTER_GROUP_SCHEMA,
    Filter,
    FilterGroup,
    LogicalOperator,
    Operator,
    parse_filter_group_json,
)
from .predicates import Combinators, FilterConfig, PredicateBuilder, apply_where
from .registry import (
    FieldBuilder,
    FilterMap,
    bool_field,
    build_filter_map,
    nullable_string_field,
    nullable_time_field,
    string_field,
    time_field,
)
from .search import SearchFields, apply_ids, apply_search
from .structured import apply_structured_filters, build_predicate, evaluate

__all__ = [
    "Combinators",
    "PredicateBuilder",
    "FilterConfig",
    "apply_where",
    "ZERO_TIME",
    "FieldFilterBuilder",
    "StringPredicates",
    "StringFilterBuilder",
    "BoolPredicates",
    "BoolFilterBuilder",
    "TimePredicates",
    "TimeFilterBuilder",
    "parse_time_value",
    "FieldBuilder",
    "FilterMap",
    "build_filter_map",
    "string_field",
    "nullable_string_field",
    "bool_field",
    "time_field",
    "nullable_time_field",
    "Operator",
    "LogicalOperator",
    "Filter",
    "FilterGroup",
    "FILTER_GROUP_SCHEMA",
    "parse_filter_group_json",
    "build_predicate",
    "evaluate",
    "apply_structured_filters",
    "SearchFields",
    "apply_ids",
    "apply_search",
]
