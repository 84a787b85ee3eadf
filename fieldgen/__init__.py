"""
fieldgen - field metadata resolution for table-to-source code generators.

Given the columns reported by schema introspection, this package derives the
canonical representation of each generated field:

- Property name via a configurable naming convention
- Target-language type via a type resolver with override rules
- Escaped identifier via a dialect keyword policy
- Optimistic-lock / logic-delete roles and auto-fill strategy

Rendering templates and talking to databases are left to the caller.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from fieldgen.config import Settings, get_settings
from fieldgen.descriptor import FieldDescriptor, FieldDescriptorBuilder
from fieldgen.domain.models import (
    ColumnTypeInfo,
    EntityConfig,
    FillKind,
    FillRule,
    FillScope,
    NamingStrategy,
    RawColumn,
    ResolvedField,
    TypeOverride,
)
from fieldgen.resolver import (
    ResolutionContext,
    available_keyword_policies,
    build_context,
    resolve_columns,
)
from fieldgen.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    "EntityConfig",
    # Descriptor
    "FieldDescriptor",
    "FieldDescriptorBuilder",
    "ResolvedField",
    # Rules and types
    "ColumnTypeInfo",
    "FillKind",
    "FillRule",
    "FillScope",
    "NamingStrategy",
    "RawColumn",
    "TypeOverride",
    # Resolution
    "ResolutionContext",
    "available_keyword_policies",
    "build_context",
    "resolve_columns",
    # Logging
    "configure_logging",
    "get_logger",
]
