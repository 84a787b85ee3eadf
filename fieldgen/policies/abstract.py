"""
Abstract policy interfaces for fieldgen.

A FieldDescriptor is resolved by composing three injected strategies: a
NamingPolicy, a TypeResolver and a KeywordPolicy. Concrete implementations
may satisfy the Protocols structurally or subclass the ABC helpers below.
"""

from __future__ import annotations

import abc
from typing import Optional, Protocol, Sequence, runtime_checkable

from fieldgen.domain.models import ColumnTypeInfo, NamingStrategy, TypeOverride


@runtime_checkable
class ColumnLike(Protocol):
    """What a TypeResolver needs to know about a column."""

    raw_column_name: str
    declared_type: Optional[str]


@runtime_checkable
class NamingPolicy(Protocol):
    """
    Converts a raw column name into a candidate property name.

    Implementations must be pure: identical inputs give identical outputs.
    """

    def convert(self, raw_column_name: str, convention: NamingStrategy) -> str:
        ...


@runtime_checkable
class TypeResolver(Protocol):
    """
    Maps a column's declared SQL type to a target-language type.

    Parameters
    ----------
    column : ColumnLike
        The column being resolved (name and declared type).
    type_overrides : Sequence[TypeOverride]
        Global override rules, consulted before the default table.

    Returns
    -------
    ColumnTypeInfo | None
        None when no type can be derived.
    """

    def resolve(
        self, column: ColumnLike, type_overrides: Sequence[TypeOverride] = ()
    ) -> Optional[ColumnTypeInfo]:
        ...


@runtime_checkable
class KeywordPolicy(Protocol):
    """
    Detects reserved column names and escapes them.

    `escape` must be idempotent: ``escape(escape(x)) == escape(x)``.
    A display `name` is optional; AbstractKeywordPolicy provides one.
    """

    def is_reserved(self, name: str) -> bool:
        ...

    def escape(self, name: str) -> str:
        ...


class AbstractKeywordPolicy(abc.ABC):
    """
    ABC helper for keyword policies backed by a fixed word list.

    Subclasses set `name`, `keywords` (upper-case) and the `quote` character.
    """

    name: str
    quote: str

    @property
    @abc.abstractmethod
    def keywords(self) -> frozenset:  # pragma: no cover - interface only
        """Upper-case reserved words of the dialect."""
        raise NotImplementedError

    def is_reserved(self, name: str) -> bool:
        return self._unwrap(name).upper() in self.keywords

    def escape(self, name: str) -> str:
        if self._is_wrapped(name):
            return name
        return f"{self.quote}{name}{self.quote}"

    def _is_wrapped(self, name: str) -> bool:
        return len(name) >= 2 and name.startswith(self.quote) and name.endswith(self.quote)

    def _unwrap(self, name: str) -> str:
        return name[1:-1] if self._is_wrapped(name) else name


__all__ = [
    "AbstractKeywordPolicy",
    "ColumnLike",
    "KeywordPolicy",
    "NamingPolicy",
    "TypeResolver",
]
