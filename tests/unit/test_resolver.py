from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from fieldgen.config import Settings
from fieldgen.domain.models import EntityConfig, RawColumn
from fieldgen.exceptions import UnknownPolicyError
from fieldgen.policies.keywords import MySqlKeywordPolicy
from fieldgen.policies.naming import DefaultNamingPolicy
from fieldgen.policies.types import DefaultTypeResolver
from fieldgen.resolver import (
    ResolutionContext,
    available_keyword_policies,
    build_context,
    build_descriptors,
    load_columns,
    resolve_columns,
    resolve_keyword_policy,
)


class _ExplodingNamingPolicy:
    def convert(self, raw_column_name, convention):
        if raw_column_name == "bad":
            raise RuntimeError("intentional failure")
        return DefaultNamingPolicy().convert(raw_column_name, convention)


def test_available_keyword_policies_sorted():
    names = available_keyword_policies()

    assert names == sorted(names)
    assert {"none", "mysql", "postgresql", "h2"} <= set(names)


def test_resolve_keyword_policy():
    assert resolve_keyword_policy("none") is None
    assert isinstance(resolve_keyword_policy(" MySQL "), MySqlKeywordPolicy)


def test_unknown_keyword_policy_raises():
    with pytest.raises(UnknownPolicyError):
        resolve_keyword_policy("oracle")
    with pytest.raises(ValueError):
        resolve_keyword_policy("oracle")


def test_build_context_wires_settings():
    settings = Settings(keyword_policy="mysql", field_prefixes=["t_"], strict_types=True)

    context = build_context(settings)

    assert isinstance(context.keyword_policy, MySqlKeywordPolicy)
    assert context.naming_policy.field_prefixes == ("t_",)
    assert context.type_resolver.strict is True
    assert build_context(settings, keyword_policy="none").keyword_policy is None


def test_build_descriptors_marks_primary_keys():
    columns = [RawColumn(name="id", primary_key=True, auto_increment=True), RawColumn(name="name")]
    context = build_context(Settings())

    first, second = build_descriptors(columns, context)

    assert first.is_primary_key is True
    assert first.is_auto_increment is True
    assert second.is_primary_key is False


def test_resolve_columns_keeps_order_and_continues_after_failure():
    context = ResolutionContext(
        config=EntityConfig(),
        naming_policy=_ExplodingNamingPolicy(),
        type_resolver=DefaultTypeResolver(),
    )
    columns = [RawColumn(name="first_name"), RawColumn(name="bad"), RawColumn(name="last_name")]

    fields = resolve_columns(columns, context)

    assert [f.column_name for f in fields] == ["first_name", "bad", "last_name"]
    assert fields[0].property_name == "firstName"
    assert fields[1].error == "intentional failure"
    assert fields[1].property_name == ""
    assert fields[2].property_name == "lastName"
    assert fields[2].error is None


def test_load_columns(columns_file: Path):
    columns = load_columns(columns_file)

    assert columns[0].name == "id"
    assert columns[0].declared_type == "bigint(20)"
    assert columns[0].primary_key is True


def test_load_columns_rejects_nameless_records(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text('[{"type": "int"}]', encoding="utf-8")

    with pytest.raises(ValidationError):
        load_columns(path)
