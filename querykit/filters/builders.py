"""
Typed field filter builders.

A builder turns one (operator, value) pair into exactly one predicate by
delegating to the caller's atomic functions for that field. Operators that are
meaningless for a type degrade to a tautology instead of failing, and
non-nullable fields answer null checks with predicates that are provably
false (IS NULL) or provably true (IS NOT NULL).
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Generic, List, Optional, Sequence

from ..exceptions import TypeMismatchError, UnparseableTimeError
from .predicates import Combinators, P

log = logging.getLogger("querykit.filters")

# Sentinel for non-nullable time fields and the target of time "always true".
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FieldFilterBuilder(ABC, Generic[P]):
    """
    Builds predicates for one field. Every method returns exactly one
    predicate.
    """

    # Equality
    @abstractmethod
    def eq(self, value: Any) -> P: ...

    @abstractmethod
    def ne(self, value: Any) -> P: ...

    # Comparison
    @abstractmethod
    def gt(self, value: Any) -> P: ...

    @abstractmethod
    def gte(self, value: Any) -> P: ...

    @abstractmethod
    def lt(self, value: Any) -> P: ...

    @abstractmethod
    def lte(self, value: Any) -> P: ...

    # Membership
    @abstractmethod
    def in_(self, values: Sequence[Any]) -> P: ...

    @abstractmethod
    def nin(self, values: Sequence[Any]) -> P: ...

    # String matching
    @abstractmethod
    def contains(self, value: str) -> P: ...

    @abstractmethod
    def starts_with(self, value: str) -> P: ...

    @abstractmethod
    def ends_with(self, value: str) -> P: ...

    # Null checks
    @abstractmethod
    def is_null(self) -> P: ...

    @abstractmethod
    def is_not_null(self) -> P: ...


# ---------------------------------------------------------------------------
# String fields
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StringPredicates(Generic[P]):
    """
    Atomic predicate functions for a string field, e.g. for SQLAlchemy:

        StringPredicates(
            eq=User.email.__eq__,
            ne=User.email.__ne__,
            ...
            in_=User.email.in_,
            nin=User.email.not_in,
            contains=User.email.icontains,
            starts_with=User.email.istartswith,
            ends_with=User.email.iendswith,
        )

    `is_nil` / `is_not_nil` are only needed for nullable fields.
    """
    eq: Callable[[str], P]
    ne: Callable[[str], P]
    gt: Callable[[str], P]
    gte: Callable[[str], P]
    lt: Callable[[str], P]
    lte: Callable[[str], P]
    in_: Callable[[List[str]], P]
    nin: Callable[[List[str]], P]
    contains: Callable[[str], P]
    starts_with: Callable[[str], P]
    ends_with: Callable[[str], P]
    is_nil: Optional[Callable[[], P]] = None
    is_not_nil: Optional[Callable[[], P]] = None


def _as_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(name, "str", value)
    return value


class StringFilterBuilder(FieldFilterBuilder[P]):
    def __init__(
        self,
        predicates: StringPredicates[P],
        combinators: Combinators[P],
        nullable: bool = False,
        name: str = "",
    ):
        self.predicates = predicates
        self.combinators = combinators
        self.nullable = nullable
        self.name = name

    def eq(self, value: Any) -> P:
        return self.predicates.eq(_as_str(self.name, value))

    def ne(self, value: Any) -> P:
        return self.predicates.ne(_as_str(self.name, value))

    def gt(self, value: Any) -> P:
        return self.predicates.gt(_as_str(self.name, value))

    def gte(self, value: Any) -> P:
        return self.predicates.gte(_as_str(self.name, value))

    def lt(self, value: Any) -> P:
        return self.predicates.lt(_as_str(self.name, value))

    def lte(self, value: Any) -> P:
        return self.predicates.lte(_as_str(self.name, value))

    def in_(self, values: Sequence[Any]) -> P:
        return self.predicates.in_([_as_str(self.name, v) for v in values])

    def nin(self, values: Sequence[Any]) -> P:
        return self.predicates.nin([_as_str(self.name, v) for v in values])

    def contains(self, value: str) -> P:
        return self.predicates.contains(value)

    def starts_with(self, value: str) -> P:
        return self.predicates.starts_with(value)

    def ends_with(self, value: str) -> P:
        return self.predicates.ends_with(value)

    def is_null(self) -> P:
        if self.nullable:
            return self.predicates.is_nil()
        # nothing equals and differs from "" at once
        return self.combinators.and_(self.predicates.eq(""), self.predicates.ne(""))

    def is_not_null(self) -> P:
        if self.nullable:
            return self.predicates.is_not_nil()
        # everything equals or differs from ""
        return self.combinators.or_(self.predicates.eq(""), self.predicates.ne(""))


# ---------------------------------------------------------------------------
# Boolean fields
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoolPredicates(Generic[P]):
    eq: Callable[[bool], P]
    ne: Callable[[bool], P]


def _as_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeMismatchError(name, "bool", value)
    return value


class BoolFilterBuilder(FieldFilterBuilder[P]):
    """
    Boolean fields are always non-nullable. Ordering and string operators are
    not meaningful: comparisons degrade to equality and string matching
    matches everything.
    """

    def __init__(self, predicates: BoolPredicates[P], combinators: Combinators[P], name: str = ""):
        self.predicates = predicates
        self.combinators = combinators
        self.name = name

    def _always_true(self) -> P:
        return self.combinators.or_(self.predicates.eq(True), self.predicates.eq(False))

    def _always_false(self) -> P:
        return self.combinators.and_(self.predicates.eq(True), self.predicates.eq(False))

    def _presence(self, values: Sequence[Any]) -> tuple[bool, bool]:
        flags = [_as_bool(self.name, v) for v in values]
        return True in flags, False in flags

    def eq(self, value: Any) -> P:
        return self.predicates.eq(_as_bool(self.name, value))

    def ne(self, value: Any) -> P:
        return self.predicates.ne(_as_bool(self.name, value))

    def gt(self, value: Any) -> P:
        return self.eq(value)

    def gte(self, value: Any) -> P:
        return self.eq(value)

    def lt(self, value: Any) -> P:
        return self.eq(value)

    def lte(self, value: Any) -> P:
        return self.eq(value)

    def in_(self, values: Sequence[Any]) -> P:
        if not values:
            return self._always_false()
        has_true, has_false = self._presence(values)
        if has_true and has_false:
            return self._always_true()
        return self.predicates.eq(has_true)

    def nin(self, values: Sequence[Any]) -> P:
        if not values:
            return self._always_true()
        has_true, has_false = self._presence(values)
        if has_true and has_false:
            return self._always_false()
        return self.predicates.eq(not has_true)

    def contains(self, value: str) -> P:
        return self._always_true()

    def starts_with(self, value: str) -> P:
        return self._always_true()

    def ends_with(self, value: str) -> P:
        return self._always_true()

    def is_null(self) -> P:
        return self._always_false()

    def is_not_null(self) -> P:
        return self._always_true()


# ---------------------------------------------------------------------------
# Time fields
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimePredicates(Generic[P]):
    eq: Callable[[datetime], P]
    ne: Callable[[datetime], P]
    gt: Callable[[datetime], P]
    gte: Callable[[datetime], P]
    lt: Callable[[datetime], P]
    lte: Callable[[datetime], P]
    in_: Callable[[List[datetime]], P]
    nin: Callable[[List[datetime]], P]
    # nullable fields only
    is_nil: Optional[Callable[[], P]] = None
    is_not_nil: Optional[Callable[[], P]] = None


def parse_time_value(value: Any) -> datetime:
    """
    Parse a time value from a datetime, a date, an RFC3339 timestamp string
    or a plain YYYY-MM-DD date string (tried in that order). Dates resolve
    to midnight UTC.

    Raises UnparseableTimeError for anything else.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str):
        raise UnparseableTimeError(value)

    m = _RFC3339_RE.match(value)
    if m:
        frac, offset = m.group(1) or "", m.group(2)
        # fromisoformat wants at most microsecond precision and no "Z"
        base = value[: m.start(1) if frac else m.start(2)]
        if frac:
            base += frac[:7]
        if offset == "Z":
            offset = "+00:00"
        try:
            return datetime.fromisoformat(base + offset)
        except ValueError:
            pass
    if _DATE_RE.match(value):
        try:
            return datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            pass
    raise UnparseableTimeError(value)


class TimeFilterBuilder(FieldFilterBuilder[P]):
    """
    Values are coerced with parse_time_value. When `strict` is False a value
    that fails to parse is replaced by ZERO_TIME and a warning is logged;
    when True the UnparseableTimeError propagates.
    """

    def __init__(
        self,
        predicates: TimePredicates[P],
        combinators: Combinators[P],
        nullable: bool = False,
        strict: bool = False,
        name: str = "",
    ):
        self.predicates = predicates
        self.combinators = combinators
        self.nullable = nullable
        self.strict = strict
        self.name = name

    def _time(self, value: Any) -> datetime:
        try:
            return parse_time_value(value)
        except UnparseableTimeError as e:
            if self.strict:
                raise
            log.warning("field %r: %s; using zero time", self.name, e)
            return ZERO_TIME

    def eq(self, value: Any) -> P:
        return self.predicates.eq(self._time(value))

    def ne(self, value: Any) -> P:
        return self.predicates.ne(self._time(value))

    def gt(self, value: Any) -> P:
        return self.predicates.gt(self._time(value))

    def gte(self, value: Any) -> P:
        return self.predicates.gte(self._time(value))

    def lt(self, value: Any) -> P:
        return self.predicates.lt(self._time(value))

    def lte(self, value: Any) -> P:
        return self.predicates.lte(self._time(value))

    def in_(self, values: Sequence[Any]) -> P:
        return self.predicates.in_([self._time(v) for v in values])

    def nin(self, values: Sequence[Any]) -> P:
        return self.predicates.nin([self._time(v) for v in values])

    # Every timestamp is >= the zero time.
    def contains(self, value: str) -> P:
        return self.predicates.gte(ZERO_TIME)

    def starts_with(self, value: str) -> P:
        return self.predicates.gte(ZERO_TIME)

    def ends_with(self, value: str) -> P:
        return self.predicates.gte(ZERO_TIME)

    def is_null(self) -> P:
        if self.nullable:
            return self.predicates.is_nil()
        return self.combinators.and_(self.predicates.eq(ZERO_TIME), self.predicates.ne(ZERO_TIME))

    def is_not_null(self) -> P:
        if self.nullable:
            return self.predicates.is_not_nil()
        return self.combinators.or_(self.predicates.eq(ZERO_TIME), self.predicates.ne(ZERO_TIME))


__all__ = [
    "ZERO_TIME",
    "FieldFilterBuilder",
    "StringPredicates",
    "StringFilterBuilder",
    "BoolPredicates",
    "BoolFilterBuilder",
    "TimePredicates",
    "TimeFilterBuilder",
    "parse_time_value",
]
