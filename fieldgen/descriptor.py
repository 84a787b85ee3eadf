"""
Field descriptor: the per-column entity resolved by fieldgen.

A descriptor binds the raw column name at construction (applying the keyword
policy eagerly), accumulates configuration through setters or the
FieldDescriptorBuilder, and resolves its property name, type and fill
strategy lazily on first request. `resolve()` runs the lazy steps and returns
a fresh immutable ResolvedField snapshot for templates.

Resolution never raises: missing or unmappable data degrades to empty values
so that a single odd column cannot abort a generation run.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from fieldgen.domain.models import (
    ColumnTypeInfo,
    EntityConfig,
    FillKind,
    FillRule,
    NamingStrategy,
    RawColumn,
    ResolvedField,
)
from fieldgen.exceptions import FieldRebindError, UnknownColumnTypeError
from fieldgen.policies.abstract import KeywordPolicy, NamingPolicy, TypeResolver
from fieldgen.policies.naming import contains_upper_case, is_capital_mode
from fieldgen.utils.logging import get_logger

log = get_logger(__name__)

IS_PREFIX = "is"


def _strip_is_prefix(name: str) -> str:
    rest = name[len(IS_PREFIX):]
    return rest[:1].lower() + rest[1:]


class FieldDescriptor:
    """
    Canonical in-memory representation of one database column.

    Parameters
    ----------
    raw_name : str
        Column name as read from the data source.
    config : EntityConfig | None
        Entity-level generation settings; defaults to EntityConfig().
    keyword_policy : KeywordPolicy | None
        Reserved-word policy applied whenever the raw name is bound.
    """

    def __init__(
        self,
        raw_name: str,
        config: Optional[EntityConfig] = None,
        keyword_policy: Optional[KeywordPolicy] = None,
    ) -> None:
        self.config = config or EntityConfig()
        self.keyword_policy = keyword_policy

        self.declared_type: Optional[str] = None
        self.resolved_type: Optional[ColumnTypeInfo] = None
        self.property_name: Optional[str] = None
        self.requires_explicit_mapping = False
        self.comment: Optional[str] = None
        self.fill_strategy: Optional[FillKind] = None
        self.custom_attributes: Dict[str, Any] = {}
        self.is_primary_key = False
        self.is_auto_increment = False
        self.nullable = True

        self._bind(raw_name)

    @classmethod
    def create(
        cls,
        raw_name: str,
        config: Optional[EntityConfig] = None,
        keyword_policy: Optional[KeywordPolicy] = None,
    ) -> "FieldDescriptor":
        return cls(raw_name, config=config, keyword_policy=keyword_policy)

    def __repr__(self) -> str:
        return (
            f"FieldDescriptor(column={self.raw_column_name!r}, "
            f"property={self.property_name!r}, type={self.property_type!r})"
        )

    # -- binding ---------------------------------------------------------

    def _bind(self, name: str) -> None:
        self.raw_column_name = name
        self.escaped_column_name = name
        self.is_reserved_keyword = False
        if self.keyword_policy is not None and self.keyword_policy.is_reserved(name):
            self.escaped_column_name = self.keyword_policy.escape(name)
            self.is_reserved_keyword = self.escaped_column_name != name

    def set_column_name(self, name: str) -> "FieldDescriptor":
        """
        Rebind the raw/escaped column name pair.

        Rebinding after the property name has been memoized leaves the two out
        of sync. This is tolerated unless `strict_rebind` is configured, in
        which case FieldRebindError is raised.
        """
        if self.property_name:
            if self.config.strict_rebind:
                raise FieldRebindError(
                    f"Column '{self.raw_column_name}' already resolved to property "
                    f"'{self.property_name}'; cannot rebind to '{name}'"
                )
            log.debug(
                "Column rebound after property name was resolved",
                extra={"column": self.raw_column_name, "new_column": name},
            )
        self._bind(name)
        return self

    # -- configuration setters -------------------------------------------

    def set_declared_type(self, declared_type: Optional[str]) -> "FieldDescriptor":
        self.declared_type = declared_type
        return self

    def set_type_info(self, type_info: ColumnTypeInfo) -> "FieldDescriptor":
        """Pin the resolved type; the TypeResolver is then skipped."""
        self.resolved_type = type_info
        return self

    def set_comment(self, comment: Optional[str]) -> "FieldDescriptor":
        if self.config.escape_comments and comment and comment.strip():
            comment = comment.replace('"', '\\"')
        self.comment = comment
        return self

    def set_custom_attributes(self, attributes: Mapping[str, Any]) -> "FieldDescriptor":
        self.custom_attributes = dict(attributes)
        return self

    def set_nullable(self, nullable: bool) -> "FieldDescriptor":
        self.nullable = nullable
        return self

    def mark_as_primary_key(self, auto_increment: bool = False) -> "FieldDescriptor":
        self.is_primary_key = True
        self.is_auto_increment = auto_increment
        return self

    # -- property name ---------------------------------------------------

    @property
    def property_type(self) -> Optional[str]:
        return self.resolved_type.type if self.resolved_type is not None else None

    def resolve_property_name(
        self, naming_policy: NamingPolicy, type_resolver: TypeResolver
    ) -> str:
        """
        Resolve (once) the property name and the explicit-mapping flag.

        Later calls return the memoized name, whatever policies they pass.
        """
        if self.property_name:
            return self.property_name

        if self.resolved_type is None:
            self.resolved_type = self._resolve_type(type_resolver)
        candidate = naming_policy.convert(self.raw_column_name, self.config.column_naming)
        self._accept_property_name(candidate)
        log.debug(
            "Property name resolved",
            extra={
                "column": self.raw_column_name,
                "property": self.property_name,
                "explicit_mapping": self.requires_explicit_mapping,
            },
        )
        return self.property_name

    def override_property_name(
        self, name: str, type_info: Optional[ColumnTypeInfo] = None
    ) -> "FieldDescriptor":
        """Set the property name from outside; it is never recomputed afterwards."""
        if type_info is not None:
            self.resolved_type = type_info
        self._accept_property_name(name)
        return self

    def _resolve_type(self, type_resolver: TypeResolver) -> Optional[ColumnTypeInfo]:
        try:
            return type_resolver.resolve(self, self.config.type_overrides)
        except UnknownColumnTypeError as exc:
            log.warning(
                "No type derived for column",
                extra={"column": exc.column_name, "declared_type": exc.declared_type},
            )
            return None

    def _accept_property_name(self, candidate: str) -> None:
        if (
            self.config.strip_boolean_is_prefix
            and self.resolved_type is not None
            and self.resolved_type.is_boolean
            and candidate.startswith(IS_PREFIX)
            and len(candidate) > len(IS_PREFIX)
        ):
            self.property_name = _strip_is_prefix(candidate)
            self.requires_explicit_mapping = True
            return
        self.property_name = candidate
        self.requires_explicit_mapping = self._explicit_mapping_required()

    def _explicit_mapping_required(self) -> bool:
        config = self.config
        if config.always_annotate or self.is_reserved_keyword:
            return True
        raw, prop = self.raw_column_name, self.property_name or ""
        if config.capital_mode and is_capital_mode(raw):
            return raw.lower() != prop.lower()
        if config.column_naming is NamingStrategy.UNDERLINE_TO_CAMEL:
            return contains_upper_case(raw)
        return raw != prop

    # -- semantic roles --------------------------------------------------

    def is_version_field(self) -> bool:
        """Optimistic-lock column: configured property name OR configured column name."""
        by_property = self.config.version_property_name
        by_column = self.config.version_column_name
        return (by_property is not None and self.property_name == by_property) or (
            by_column is not None and self.raw_column_name.lower() == by_column.lower()
        )

    def is_logic_delete_field(self) -> bool:
        """Soft-delete column: configured property name OR configured column name."""
        by_property = self.config.logic_delete_property_name
        by_column = self.config.logic_delete_column_name
        return (by_property is not None and self.property_name == by_property) or (
            by_column is not None and self.raw_column_name.lower() == by_column.lower()
        )

    # -- fill strategy ---------------------------------------------------

    def resolve_fill_strategy(
        self, fill_rules: Optional[Sequence[FillRule]] = None
    ) -> Optional[FillKind]:
        """
        Return the fill kind of the first matching rule, cached once found.

        `fill_rules` defaults to the configured rule list. No match leaves the
        strategy unresolved so a later call may still match.
        """
        if self.fill_strategy is not None:
            return self.fill_strategy
        rules = self.config.fill_rules if fill_rules is None else fill_rules
        for rule in rules:
            if rule.matches(self.raw_column_name, self.property_name):
                self.fill_strategy = rule.fill_kind
                log.debug(
                    "Fill rule matched",
                    extra={"column": self.raw_column_name, "fill": rule.fill_kind.value},
                )
                break
        return self.fill_strategy

    # -- template helpers ------------------------------------------------

    def capitalized_accessor_name(self) -> str:
        """
        Accessor suffix following JavaBean rules: ``id`` -> ``Id``,
        ``userName`` -> ``UserName``, ``uRL`` stays ``uRL``.
        """
        name = self.property_name or ""
        if len(name) <= 1:
            return name.upper()
        if name[1].islower():
            return name[0].upper() + name[1:]
        return name

    def annotation_column_name(self) -> str:
        """Column name for annotations; double-quoted keywords are re-escaped for literals."""
        if self.is_reserved_keyword and self.escaped_column_name.startswith('"'):
            return f'\\"{self.raw_column_name}\\"'
        return self.escaped_column_name

    # -- two-phase resolution --------------------------------------------

    def resolve(
        self,
        naming_policy: NamingPolicy,
        type_resolver: TypeResolver,
        fill_rules: Optional[Sequence[FillRule]] = None,
    ) -> ResolvedField:
        """
        Run the lazy resolution steps and return an immutable snapshot.

        Property name and fill strategy are memoized on the descriptor; the
        snapshot itself is rebuilt on every call so later setter calls show up.
        """
        self.resolve_property_name(naming_policy, type_resolver)
        self.resolve_fill_strategy(fill_rules)
        return ResolvedField(
            column_name=self.raw_column_name,
            escaped_column_name=self.escaped_column_name,
            annotation_column_name=self.annotation_column_name(),
            is_reserved_keyword=self.is_reserved_keyword,
            declared_type=self.declared_type,
            property_name=self.property_name or "",
            capitalized_accessor_name=self.capitalized_accessor_name(),
            property_type=self.property_type,
            type_package=self.resolved_type.package if self.resolved_type is not None else None,
            requires_explicit_mapping=self.requires_explicit_mapping,
            comment=self.comment,
            nullable=self.nullable,
            fill_strategy=self.fill_strategy,
            is_primary_key=self.is_primary_key,
            is_auto_increment=self.is_auto_increment,
            is_version_field=self.is_version_field(),
            is_logic_delete_field=self.is_logic_delete_field(),
            custom_attributes=dict(self.custom_attributes),
        )


class FieldDescriptorBuilder:
    """
    Accumulates column configuration and produces one FieldDescriptor.

    Example
    -------
        field = (
            FieldDescriptorBuilder(config, keyword_policy)
            .name("user_name")
            .declared_type("varchar(64)")
            .comment("login name")
            .build()
        )
    """

    def __init__(
        self,
        config: Optional[EntityConfig] = None,
        keyword_policy: Optional[KeywordPolicy] = None,
    ) -> None:
        self._config = config
        self._keyword_policy = keyword_policy
        self._name: Optional[str] = None
        self._declared_type: Optional[str] = None
        self._type_info: Optional[ColumnTypeInfo] = None
        self._comment: Optional[str] = None
        self._nullable = True
        self._primary_key = False
        self._auto_increment = False
        self._custom_attributes: Dict[str, Any] = {}

    @classmethod
    def from_raw_column(
        cls,
        column: RawColumn,
        config: Optional[EntityConfig] = None,
        keyword_policy: Optional[KeywordPolicy] = None,
    ) -> "FieldDescriptorBuilder":
        builder = (
            cls(config, keyword_policy)
            .name(column.name)
            .declared_type(column.declared_type)
            .comment(column.comment)
            .nullable(column.nullable)
            .custom_attributes(column.custom_attributes)
        )
        if column.primary_key:
            builder.primary_key(auto_increment=column.auto_increment)
        return builder

    def name(self, name: str) -> "FieldDescriptorBuilder":
        self._name = name
        return self

    def declared_type(self, declared_type: Optional[str]) -> "FieldDescriptorBuilder":
        self._declared_type = declared_type
        return self

    def type_info(self, type_info: ColumnTypeInfo) -> "FieldDescriptorBuilder":
        self._type_info = type_info
        return self

    def comment(self, comment: Optional[str]) -> "FieldDescriptorBuilder":
        self._comment = comment
        return self

    def nullable(self, nullable: bool) -> "FieldDescriptorBuilder":
        self._nullable = nullable
        return self

    def primary_key(self, auto_increment: bool = False) -> "FieldDescriptorBuilder":
        self._primary_key = True
        self._auto_increment = auto_increment
        return self

    def custom_attributes(self, attributes: Mapping[str, Any]) -> "FieldDescriptorBuilder":
        self._custom_attributes.update(attributes)
        return self

    def build(self) -> FieldDescriptor:
        if not self._name:
            raise ValueError("A column name is required to build a FieldDescriptor")
        field = FieldDescriptor.create(self._name, self._config, self._keyword_policy)
        field.set_declared_type(self._declared_type)
        field.set_comment(self._comment)
        field.set_nullable(self._nullable)
        field.set_custom_attributes(self._custom_attributes)
        if self._type_info is not None:
            field.set_type_info(self._type_info)
        if self._primary_key:
            field.mark_as_primary_key(self._auto_increment)
        return field


__all__ = ["FieldDescriptor", "FieldDescriptorBuilder"]
