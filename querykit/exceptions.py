"""
Exceptions raised by querykit.

Only type mismatches, strict time parsing and malformed wire payloads ever
reach the caller. Unknown fields and unknown operators are not errors.
"""

from __future__ import annotations

from typing import Any


class QueryKitError(Exception):
    """Root of every error raised by this package."""


class TypeMismatchError(QueryKitError, TypeError):
    """
    A filter value's type does not match the native type of the field.
    """

    def __init__(self, field: str, expected: str, value: Any):
        self.field = field
        self.expected = expected
        self.value = value
        target = f"field {field!r}" if field else "filter value"
        super().__init__(
            f"{target} expects {expected}, got {type(value).__name__}: {value!r}"
        )


class UnparseableTimeError(QueryKitError, ValueError):
    """A time value matches none of the supported formats."""

    def __init__(self, value: Any):
        self.value = value
        if isinstance(value, str):
            msg = f"unable to parse time value: {value}"
        else:
            msg = f"unsupported time value type: {type(value).__name__}"
        super().__init__(msg)


class FilterPayloadError(QueryKitError, ValueError):
    """A filter group payload is not valid JSON or violates the schema."""


__all__ = [
    "QueryKitError",
    "TypeMismatchError",
    "UnparseableTimeError",
    "FilterPayloadError",
]
