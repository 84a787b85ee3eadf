"""
Domain models for fieldgen.

Defines the configuration, rule and result records that flow through the field
resolution engine. Everything here is a frozen pydantic model so that policy
inputs stay read-only for the duration of a generation run.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

_PRECISION_RE = re.compile(r"\(.*?\)")

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class NamingStrategy(str, Enum):
    """Convention used to turn a column name into a property name."""

    NO_CHANGE = "no_change"
    UNDERLINE_TO_CAMEL = "underline_to_camel"


class FillKind(str, Enum):
    """When generated code auto-populates a field."""

    DEFAULT = "DEFAULT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    INSERT_UPDATE = "INSERT_UPDATE"


class FillScope(str, Enum):
    COLUMN = "column"
    PROPERTY = "property"


class DateTypeMode(str, Enum):
    """Family of target types used for date/time columns."""

    TIME_PACK = "time_pack"
    ONLY_DATE = "only_date"
    SQL_PACK = "sql_pack"


class FillRule(BaseModel):
    """
    A single auto-fill declaration.

    Column-scoped rules match the raw column name case-insensitively,
    property-scoped rules match the resolved property name exactly.
    """

    target_name: str = Field(..., min_length=1, description="Column or property name to match.")
    scope: FillScope = Field(FillScope.COLUMN, description="What `target_name` refers to.")
    fill_kind: FillKind = Field(FillKind.DEFAULT, description="Fill kind applied on match.")

    model_config = _FROZEN

    def matches(self, column_name: str, property_name: Optional[str]) -> bool:
        if self.scope is FillScope.COLUMN:
            return self.target_name.lower() == column_name.lower()
        return property_name is not None and self.target_name == property_name


class ColumnTypeInfo(BaseModel):
    """
    Target-language type of a column.
    """

    type: str = Field(..., description="Simple type name used in generated declarations.")
    package: Optional[str] = Field(None, description="Import path, None for built-ins.")

    model_config = _FROZEN

    @property
    def is_boolean(self) -> bool:
        return self.type.lower() == "boolean"


class TypeOverride(BaseModel):
    """
    Global type rule consulted before the default mapping table.

    Matches when `column_name` equals the column's name or `declared_type`
    equals the column's declared type (both case-insensitive, precision such
    as ``(255)`` ignored on the declared type).
    """

    column_name: Optional[str] = None
    declared_type: Optional[str] = None
    type_info: ColumnTypeInfo
    priority: int = 0

    model_config = _FROZEN

    def matches(self, column_name: str, declared_type: Optional[str]) -> bool:
        if self.column_name and self.column_name.lower() == column_name.lower():
            return True
        if self.declared_type and declared_type:
            return strip_precision(self.declared_type) == strip_precision(declared_type)
        return False


class RawColumn(BaseModel):
    """
    One introspected column record as handed over by the data-source layer.
    """

    name: str = Field(..., min_length=1, description="Column name as stored in the database.")
    declared_type: Optional[str] = Field(None, alias="type", description="Raw SQL type string.")
    nullable: bool = Field(True, description="Whether the column accepts NULL.")
    comment: Optional[str] = Field(None, description="Column comment from the catalog.")
    primary_key: bool = Field(False, description="Part of the primary key.")
    auto_increment: bool = Field(False, description="Identity / auto-increment key.")
    custom_attributes: Dict[str, Any] = Field(default_factory=dict)

    model_config = _FROZEN


class EntityConfig(BaseModel):
    """
    Entity-level generation settings consumed by FieldDescriptor.
    """

    column_naming: NamingStrategy = NamingStrategy.UNDERLINE_TO_CAMEL
    strip_boolean_is_prefix: bool = False
    always_annotate: bool = False
    capital_mode: bool = False
    version_property_name: Optional[str] = None
    version_column_name: Optional[str] = None
    logic_delete_property_name: Optional[str] = None
    logic_delete_column_name: Optional[str] = None
    fill_rules: List[FillRule] = Field(default_factory=list)
    type_overrides: List[TypeOverride] = Field(default_factory=list)
    escape_comments: bool = False
    strict_rebind: bool = False

    model_config = _FROZEN

    @field_validator(
        "version_property_name",
        "version_column_name",
        "logic_delete_property_name",
        "logic_delete_column_name",
    )
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value


class ResolvedField(BaseModel):
    """
    Immutable, fully-resolved view of a column handed to templates.
    """

    column_name: str
    escaped_column_name: str
    annotation_column_name: str
    is_reserved_keyword: bool
    declared_type: Optional[str] = None
    property_name: str = ""
    capitalized_accessor_name: str = ""
    property_type: Optional[str] = None
    type_package: Optional[str] = None
    requires_explicit_mapping: bool = False
    comment: Optional[str] = None
    nullable: bool = True
    fill_strategy: Optional[FillKind] = None
    is_primary_key: bool = False
    is_auto_increment: bool = False
    is_version_field: bool = False
    is_logic_delete_field: bool = False
    custom_attributes: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None

    model_config = _FROZEN


def strip_precision(declared_type: str) -> str:
    """Normalize a declared SQL type: ``VARCHAR(255)`` -> ``varchar``."""
    return _PRECISION_RE.sub("", declared_type).strip().lower()


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
    "strip_precision",
]
