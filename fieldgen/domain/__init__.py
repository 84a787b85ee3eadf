"""
Domain package for fieldgen.

Exports the configuration, rule and result models used across policies and
the field descriptor. Keep this package focused on data definitions and
validation concerns.
"""

from fieldgen.domain.models import (
    ColumnTypeInfo,
    DateTypeMode,
    EntityConfig,
    FillKind,
    FillRule,
    FillScope,
    NamingStrategy,
    RawColumn,
    ResolvedField,
    TypeOverride,
)

__all__ = [
    "ColumnTypeInfo",
    "DateTypeMode",
    "EntityConfig",
    "FillKind",
    "FillRule",
    "FillScope",
    "NamingStrategy",
    "RawColumn",
    "ResolvedField",
    "TypeOverride",
]
