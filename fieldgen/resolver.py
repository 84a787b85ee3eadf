"""
Table-level driver for resolving introspected columns.

Usage (example from CLI):
    from fieldgen.resolver import build_context, load_columns, resolve_columns

    context = build_context(get_settings())
    fields = resolve_columns(load_columns("columns.json"), context)

Each column becomes one FieldDescriptor which is resolved through the
configured policies. A policy failing on one column is logged and reported
on that field only; the remaining columns are still resolved.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import TypeAdapter

from fieldgen.config import Settings
from fieldgen.descriptor import FieldDescriptor, FieldDescriptorBuilder
from fieldgen.domain.models import EntityConfig, RawColumn, ResolvedField
from fieldgen.exceptions import UnknownPolicyError
from fieldgen.policies.abstract import KeywordPolicy, NamingPolicy, TypeResolver
from fieldgen.policies.keywords import H2KeywordPolicy, MySqlKeywordPolicy, PostgreSqlKeywordPolicy
from fieldgen.policies.naming import DefaultNamingPolicy
from fieldgen.policies.types import DefaultTypeResolver
from fieldgen.utils.logging import get_logger

log = get_logger(__name__)

NO_KEYWORD_POLICY = "none"

_COLUMNS_ADAPTER = TypeAdapter(List[RawColumn])


@dataclass(frozen=True)
class ResolutionContext:
    """
    Read-only bundle of configuration and policies for one generation run.
    """

    config: EntityConfig
    naming_policy: NamingPolicy
    type_resolver: TypeResolver
    keyword_policy: Optional[KeywordPolicy] = None
    extra: Dict[str, str] = field(default_factory=dict)


def _keyword_policy_factories() -> Dict[str, Callable[[], Optional[KeywordPolicy]]]:
    """Registry of available keyword policies."""
    return {
        NO_KEYWORD_POLICY: lambda: None,
        "mysql": lambda: MySqlKeywordPolicy(),
        "postgresql": lambda: PostgreSqlKeywordPolicy(),
        "h2": lambda: H2KeywordPolicy(),
    }


def available_keyword_policies() -> List[str]:
    """List available keyword policy names."""
    return sorted(_keyword_policy_factories().keys())


def resolve_keyword_policy(name: str) -> Optional[KeywordPolicy]:
    factories = _keyword_policy_factories()
    key = name.strip().lower()
    if key not in factories:
        raise UnknownPolicyError(
            f"Unknown keyword policy '{name}'. Available: {', '.join(factories)}"
        )
    return factories[key]()


def build_context(settings: Settings, keyword_policy: Optional[str] = None) -> ResolutionContext:
    """
    Wire the default policies from settings.

    Parameters
    ----------
    settings : Settings
        Effective configuration.
    keyword_policy : str | None
        Registry name overriding `settings.keyword_policy`.
    """
    policy_name = keyword_policy or settings.keyword_policy
    return ResolutionContext(
        config=settings.entity_config(),
        naming_policy=DefaultNamingPolicy(settings.field_prefixes),
        type_resolver=DefaultTypeResolver(
            date_type=settings.date_type, strict=settings.strict_types
        ),
        keyword_policy=resolve_keyword_policy(policy_name),
        extra={"keyword_policy": policy_name},
    )


def load_columns(path: Path | str) -> List[RawColumn]:
    """
    Read a JSON array of raw column records.

    Raises pydantic.ValidationError for malformed records.
    """
    with Path(path).open("r", encoding="utf-8") as f:
        payload = json.load(f)
    return _COLUMNS_ADAPTER.validate_python(payload)


def _unresolved(descriptor: FieldDescriptor, exc: Exception) -> ResolvedField:
    return ResolvedField(
        column_name=descriptor.raw_column_name,
        escaped_column_name=descriptor.escaped_column_name,
        annotation_column_name=descriptor.annotation_column_name(),
        is_reserved_keyword=descriptor.is_reserved_keyword,
        declared_type=descriptor.declared_type,
        comment=descriptor.comment,
        nullable=descriptor.nullable,
        is_primary_key=descriptor.is_primary_key,
        is_auto_increment=descriptor.is_auto_increment,
        custom_attributes=dict(descriptor.custom_attributes),
        error=str(exc),
    )


def build_descriptors(
    columns: Iterable[RawColumn], context: ResolutionContext
) -> List[FieldDescriptor]:
    return [
        FieldDescriptorBuilder.from_raw_column(
            column, context.config, context.keyword_policy
        ).build()
        for column in columns
    ]


def resolve_columns(
    columns: Iterable[RawColumn], context: ResolutionContext
) -> List[ResolvedField]:
    """
    Resolve every column; never aborts because one field failed.

    Returns
    -------
    List[ResolvedField]
        One entry per input column, in input order. Fields whose policies
        raised carry the message in `error` and empty resolved attributes.
    """
    descriptors = build_descriptors(columns, context)
    log.info(
        f"[RESOLVE START] {len(descriptors)} column(s)",
        extra={"columns": len(descriptors), **context.extra},
    )

    results: List[ResolvedField] = []
    failures = 0
    for descriptor in descriptors:
        try:
            resolved = descriptor.resolve(context.naming_policy, context.type_resolver)
        except Exception as exc:  # noqa: BLE001 - one field must not abort the run
            log.exception(
                f"[FIELD FAILED] {descriptor.raw_column_name}",
                extra={"column": descriptor.raw_column_name},
            )
            failures += 1
            resolved = _unresolved(descriptor, exc)
        results.append(resolved)

    log.info(
        f"[RESOLVE COMPLETE] {len(results) - failures} resolved, {failures} failed",
        extra={"resolved": len(results) - failures, "failed": failures},
    )
    return results


__all__ = [
    "ResolutionContext",
    "available_keyword_policies",
    "build_context",
    "build_descriptors",
    "load_columns",
    "resolve_columns",
    "resolve_keyword_policy",
]
