"""
Policies package for fieldgen.

Re-exports the policy interfaces and the default implementations so that
downstream code can import from `fieldgen.policies` directly.
"""

from fieldgen.policies.abstract import (
    AbstractKeywordPolicy,
    ColumnLike,
    KeywordPolicy,
    NamingPolicy,
    TypeResolver,
)
from fieldgen.policies.keywords import H2KeywordPolicy, MySqlKeywordPolicy, PostgreSqlKeywordPolicy
from fieldgen.policies.naming import DefaultNamingPolicy
from fieldgen.policies.types import DefaultTypeResolver

__all__ = [
    # Abstracts
    "AbstractKeywordPolicy",
    "ColumnLike",
    "KeywordPolicy",
    "NamingPolicy",
    "TypeResolver",
    # Concrete policies
    "DefaultNamingPolicy",
    "DefaultTypeResolver",
    "H2KeywordPolicy",
    "MySqlKeywordPolicy",
    "PostgreSqlKeywordPolicy",
]
