"""
Pytest configuration for fieldgen.

Provides fixtures for:
- Default and customised entity configuration
- The shipped naming/type/keyword policies
- A sample table written to a temporary JSON file
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from fieldgen.config import get_settings
from fieldgen.domain.models import EntityConfig
from fieldgen.policies.keywords import MySqlKeywordPolicy, PostgreSqlKeywordPolicy
from fieldgen.policies.naming import DefaultNamingPolicy
from fieldgen.policies.types import DefaultTypeResolver

SETTINGS_ENV_VARS = (
    "COLUMN_NAMING",
    "FIELD_PREFIXES",
    "STRIP_BOOLEAN_IS_PREFIX",
    "ALWAYS_ANNOTATE",
    "CAPITAL_MODE",
    "VERSION_PROPERTY_NAME",
    "VERSION_COLUMN_NAME",
    "LOGIC_DELETE_PROPERTY_NAME",
    "LOGIC_DELETE_COLUMN_NAME",
    "FILL_RULES",
    "TYPE_OVERRIDES",
    "DATE_TYPE",
    "STRICT_TYPES",
    "KEYWORD_POLICY",
    "ESCAPE_COMMENTS",
    "STRICT_REBIND",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path):
    """
    Keep every test independent of the caller's environment and `.env`.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def config() -> EntityConfig:
    return EntityConfig()


@pytest.fixture
def naming_policy() -> DefaultNamingPolicy:
    return DefaultNamingPolicy()


@pytest.fixture
def type_resolver() -> DefaultTypeResolver:
    return DefaultTypeResolver()


@pytest.fixture
def mysql_keywords() -> MySqlKeywordPolicy:
    return MySqlKeywordPolicy()


@pytest.fixture
def postgres_keywords() -> PostgreSqlKeywordPolicy:
    return PostgreSqlKeywordPolicy()


@pytest.fixture
def sample_columns() -> List[Dict[str, Any]]:
    """
    A small `t_user` table as an introspector would report it.
    """
    return [
        {"name": "id", "type": "bigint(20)", "nullable": False, "primary_key": True,
         "auto_increment": True, "comment": "primary key"},
        {"name": "user_name", "type": "varchar(64)", "nullable": False, "comment": "login name"},
        {"name": "order", "type": "int(11)", "comment": 'sort "weight"'},
        {"name": "is_deleted", "type": "tinyint(1)", "comment": "soft delete flag"},
        {"name": "version", "type": "int(11)"},
        {"name": "create_time", "type": "datetime"},
        {"name": "update_time", "type": "datetime"},
    ]


@pytest.fixture
def columns_file(tmp_path: Path, sample_columns: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "t_user.json"
    path.write_text(json.dumps(sample_columns), encoding="utf-8")
    return path
