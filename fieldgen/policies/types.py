"""
Default SQL-type to target-type resolution.

The resolver first consults the global override rules (highest priority
first, declaration order for ties), then falls back to a substring-matched
mapping table modelled on MySQL type names. Date and time columns map
according to the configured DateTypeMode.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from fieldgen.domain.models import ColumnTypeInfo, DateTypeMode, TypeOverride, strip_precision
from fieldgen.exceptions import UnknownColumnTypeError
from fieldgen.policies.abstract import ColumnLike
from fieldgen.utils.logging import get_logger

log = get_logger(__name__)

STRING = ColumnTypeInfo(type="String")
LONG = ColumnTypeInfo(type="Long")
INTEGER = ColumnTypeInfo(type="Integer")
FLOAT = ColumnTypeInfo(type="Float")
DOUBLE = ColumnTypeInfo(type="Double")
BOOLEAN = ColumnTypeInfo(type="Boolean")
BYTE_ARRAY = ColumnTypeInfo(type="byte[]")
BIG_DECIMAL = ColumnTypeInfo(type="BigDecimal", package="java.math.BigDecimal")
BLOB = ColumnTypeInfo(type="Blob", package="java.sql.Blob")
CLOB = ColumnTypeInfo(type="Clob", package="java.sql.Clob")
DATE = ColumnTypeInfo(type="Date", package="java.util.Date")
DATE_SQL = ColumnTypeInfo(type="Date", package="java.sql.Date")
TIME = ColumnTypeInfo(type="Time", package="java.sql.Time")
TIMESTAMP = ColumnTypeInfo(type="Timestamp", package="java.sql.Timestamp")
LOCAL_DATE = ColumnTypeInfo(type="LocalDate", package="java.time.LocalDate")
LOCAL_TIME = ColumnTypeInfo(type="LocalTime", package="java.time.LocalTime")
LOCAL_DATE_TIME = ColumnTypeInfo(type="LocalDateTime", package="java.time.LocalDateTime")
YEAR = ColumnTypeInfo(type="Year", package="java.time.Year")

# Order matters: "bigint" before "int", "tinyint(1)" before "int".
_TYPE_TABLE: List[Tuple[Tuple[str, ...], ColumnTypeInfo]] = [
    (("char", "text", "json", "enum"), STRING),
    (("bigint",), LONG),
    (("tinyint(1)", "bit(1)"), BOOLEAN),
    (("bit",), BOOLEAN),
    (("int",), INTEGER),
    (("decimal",), BIG_DECIMAL),
    (("clob",), CLOB),
    (("blob",), BLOB),
    (("binary",), BYTE_ARRAY),
    (("float",), FLOAT),
    (("double",), DOUBLE),
]

_DATE_MARKERS = ("date", "time", "year")


def _to_date_type(mode: DateTypeMode, declared_type: str) -> ColumnTypeInfo:
    base = strip_precision(declared_type)
    if mode is DateTypeMode.ONLY_DATE:
        return DATE
    if mode is DateTypeMode.SQL_PACK:
        if base == "date" or base == "year":
            return DATE_SQL
        if base == "time":
            return TIME
        return TIMESTAMP
    if base == "date":
        return LOCAL_DATE
    if base == "time":
        return LOCAL_TIME
    if base == "year":
        return YEAR
    return LOCAL_DATE_TIME


def ordered_overrides(type_overrides: Sequence[TypeOverride]) -> List[TypeOverride]:
    """Sort overrides by descending priority; ties keep declaration order."""
    return sorted(type_overrides, key=lambda rule: -rule.priority)


class DefaultTypeResolver:
    """
    Resolve a column's declared SQL type to a ColumnTypeInfo.

    Parameters
    ----------
    date_type : DateTypeMode
        Target family for date/time columns.
    strict : bool
        Raise UnknownColumnTypeError for unmatched types instead of
        falling back to String.
    """

    def __init__(
        self,
        date_type: DateTypeMode = DateTypeMode.TIME_PACK,
        strict: bool = False,
    ) -> None:
        self.date_type = date_type
        self.strict = strict

    def resolve(
        self, column: ColumnLike, type_overrides: Sequence[TypeOverride] = ()
    ) -> Optional[ColumnTypeInfo]:
        for rule in ordered_overrides(type_overrides):
            if rule.matches(column.raw_column_name, column.declared_type):
                log.debug(
                    "Type override matched",
                    extra={"column": column.raw_column_name, "type": rule.type_info.type},
                )
                return rule.type_info

        if not column.declared_type:
            return None
        return self._lookup(column.raw_column_name, column.declared_type)

    def _lookup(self, column_name: str, declared_type: str) -> ColumnTypeInfo:
        lowered = declared_type.lower()
        for markers, type_info in _TYPE_TABLE:
            if any(marker in lowered for marker in markers):
                return type_info
        if any(marker in lowered for marker in _DATE_MARKERS):
            return _to_date_type(self.date_type, lowered)
        if self.strict:
            raise UnknownColumnTypeError(column_name, declared_type)
        return STRING


__all__ = [
    "BIG_DECIMAL",
    "BOOLEAN",
    "DATE",
    "INTEGER",
    "LOCAL_DATE",
    "LOCAL_DATE_TIME",
    "LONG",
    "DefaultTypeResolver",
    "STRING",
    "ordered_overrides",
]
