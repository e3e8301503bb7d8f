# querykit/filters/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union
import json

import jsonschema

from ..exceptions import FilterPayloadError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Operator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NIN = "nin"
    CONTAINS = "contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
    NULL = "null"
    NNULL = "nnull"


class LogicalOperator(str, Enum):
    AND = "and"
    OR = "or"


# ---------------------------------------------------------------------------
# Core filter models
# ---------------------------------------------------------------------------

@dataclass
class Filter:
    """
    One leaf condition: a field, an operator tag and a value.

    The operator is kept as given; tags outside Operator are evaluated as
    equality rather than rejected.
    """
    field: str
    operator: Union[Operator, str] = Operator.EQ
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        op = self.operator.value if isinstance(self.operator, Operator) else self.operator
        return {"field": self.field, "operator": op, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Filter":
        return cls(
            field=data["field"],
            operator=data.get("operator", Operator.EQ.value),
            value=data.get("value"),
        )


@dataclass
class FilterGroup:
    """
    Flat, ordered list of filters joined by AND (default) or OR.
    """
    filters: List[Filter] = field(default_factory=list)
    logic: str = LogicalOperator.AND.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filters": [f.to_dict() for f in self.filters],
            "logic": self.logic,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterGroup":
        return cls(
            filters=[Filter.from_dict(f) for f in data.get("filters") or []],
            logic=data.get("logic") or LogicalOperator.AND.value,
        )


# ---------------------------------------------------------------------------
# JSON Schema
# ---------------------------------------------------------------------------

# Operator and logic stay free-form strings: unknown tags are tolerated later.
FILTER_GROUP_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://querykit.dev/filter-group.schema.json",
    "title": "Filter Group",
    "$defs": {
        "Filter": {
            "type": "object",
            "properties": {
                "field": {"type": "string", "minLength": 1},
                "operator": {"type": "string"},
                "value": {},
            },
            "required": ["field"],
        },
    },
    "type": "object",
    "properties": {
        "filters": {"type": ["array", "null"], "items": {"$ref": "#/$defs/Filter"}},
        "logic": {"type": ["string", "null"]},
    },
}


def _validate(instance: Any) -> None:
    try:
        jsonschema.validate(instance=instance, schema=FILTER_GROUP_SCHEMA)
    except jsonschema.ValidationError as e:
        raise FilterPayloadError(f"invalid filter group: {e.message}") from e


def parse_filter_group_json(
    payload: Union[str, bytes, Dict[str, Any]],
    *,
    validate: bool = True,
) -> FilterGroup:
    """
    Accept a JSON string or dict and return a FilterGroup.
    """
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise FilterPayloadError(f"filter group is not valid JSON: {e}") from e
    else:
        data = payload
    if validate:
        _validate(data)
    elif not isinstance(data, dict):
        raise FilterPayloadError("filter group must be a JSON object")
    return FilterGroup.from_dict(data)


__all__ = [
    "Operator",
    "LogicalOperator",
    "Filter",
    "FilterGroup",
    "FILTER_GROUP_SCHEMA",
    "parse_filter_group_json",
]
