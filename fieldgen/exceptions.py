"""
Exception hierarchy for fieldgen.

Field resolution itself never raises: these errors are signalled by policies
and by misuse of the public API, and are caught at the seams documented on
each class.
"""

from __future__ import annotations


class FieldgenError(Exception):
    """Base class for all fieldgen errors."""


class UnknownColumnTypeError(FieldgenError):
    """
    Raised by a strict TypeResolver for a declared type it cannot map.

    FieldDescriptor catches it and continues with no resolved type.
    """

    def __init__(self, column_name: str, declared_type: str | None) -> None:
        super().__init__(f"Cannot map declared type {declared_type!r} of column '{column_name}'")
        self.column_name = column_name
        self.declared_type = declared_type


class FieldRebindError(FieldgenError):
    """Column name rebound after the property name was already memoized (strict mode only)."""


class UnknownPolicyError(FieldgenError, ValueError):
    """Requested policy name is not registered."""


__all__ = [
    "FieldRebindError",
    "FieldgenError",
    "UnknownColumnTypeError",
    "UnknownPolicyError",
]
