from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Protocol, Sequence, TypeVar, Union
import json
import logging

import yaml

Q = TypeVar("Q")

log = logging.getLogger("querykit.sort")

# API field name -> backend field name, e.g. {"created_at": "created_at"}
Fields = Mapping[str, str]


class OrderBuilder(Protocol):
    """Creates ORDER BY options for a backend field."""

    def asc(self, field: str) -> Any: ...

    def desc(self, field: str) -> Any: ...


@dataclass(frozen=True)
class SortConfig(Generic[Q]):
    # applies one or more order options to the query
    order: Callable[..., Q]


class Order(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class Criteria:
    field: str
    order: Union[Order, str] = Order.ASC

    def to_dict(self) -> Dict[str, Any]:
        order = self.order.value if isinstance(self.order, Order) else self.order
        return {"field": self.field, "order": order}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Criteria":
        return cls(field=data["field"], order=data.get("order", Order.ASC.value))


def _option(builder: OrderBuilder, db_field: str, direction: Any) -> Any:
    if direction == Order.DESC.value:
        return builder.desc(db_field)
    return builder.asc(db_field)


def apply(
    query: Q,
    cfg: SortConfig[Q],
    fields: Fields,
    builder: OrderBuilder,
    sort_by: str,
    sort_dir: str,
) -> Q:
    """
    Sort by one API field. Empty or unknown fields leave the query unchanged;
    any direction other than "desc" sorts ascending.
    """
    if not sort_by:
        return query
    db_field = fields.get(sort_by)
    if db_field is None:
        log.debug("ignoring sort on unknown field %r", sort_by)
        return query
    return cfg.order(query, _option(builder, db_field, sort_dir))


def apply_multiple(
    query: Q,
    cfg: SortConfig[Q],
    fields: Fields,
    builder: OrderBuilder,
    sorts: Sequence[Criteria],
) -> Q:
    """
    Apply several criteria in order (first is primary, the rest break ties).
    """
    opts: List[Any] = []
    for s in sorts or []:
        db_field = fields.get(s.field)
        if db_field is None:
            log.debug("ignoring sort on unknown field %r", s.field)
            continue
        opts.append(_option(builder, db_field, s.order))
    if not opts:
        return query
    return cfg.order(query, *opts)


def parse_sort_item(item: str) -> Criteria:
    """
    Accepts:
      - '-age'            -> ('age', desc)
      - 'age'             -> ('age', asc)
      - 'age DESC'        -> ('age', desc)
      - 'age:desc'        -> ('age', desc)
    """
    s = item.strip()
    if not s:
        return Criteria("", Order.ASC)

    if s.startswith("-"):
        return Criteria(s[1:].strip(), Order.DESC)

    if s.count(":") == 1:
        col, dir_ = s.split(":")
        d = dir_.strip().lower()
        return Criteria(col.strip(), Order.DESC if d in ("desc", "d") else Order.ASC)

    parts = s.split()
    if len(parts) == 2 and parts[1].lower() in ("asc", "desc"):
        return Criteria(parts[0], Order(parts[1].lower()))

    return Criteria(s, Order.ASC)


def parse_sort(items: Iterable[str]) -> List[Criteria]:
    return [c for c in (parse_sort_item(x) for x in (items or [])) if c.field]


def load_sort_fields(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read a sort field mapping from YAML or JSON:

        fields:
          email: email
          created_at: created_at
    """
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"Sort field file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            cfg = yaml.safe_load(f) or {}
        else:
            cfg = json.load(f)
    fields = cfg.get("fields", {}) if isinstance(cfg, dict) else None
    if not isinstance(fields, dict):
        raise RuntimeError(f"Bad sort field mapping in {path}: {fields!r}")
    return {str(k): str(v) for k, v in fields.items()}


__all__ = [
    "Fields",
    "OrderBuilder",
    "SortConfig",
    "Order",
    "Criteria",
    "apply",
    "apply_multiple",
    "parse_sort_item",
    "parse_sort",
    "load_sort_fields",
]
