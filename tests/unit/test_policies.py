from __future__ import annotations

import pytest

from fieldgen.descriptor import FieldDescriptor
from fieldgen.domain.models import ColumnTypeInfo, DateTypeMode, NamingStrategy, TypeOverride
from fieldgen.exceptions import UnknownColumnTypeError
from fieldgen.policies import KeywordPolicy, NamingPolicy, TypeResolver
from fieldgen.policies.keywords import H2KeywordPolicy, MySqlKeywordPolicy, PostgreSqlKeywordPolicy
from fieldgen.policies.naming import DefaultNamingPolicy, remove_prefix, underline_to_camel
from fieldgen.policies.types import DefaultTypeResolver, ordered_overrides

KEYWORD_POLICIES = [MySqlKeywordPolicy(), PostgreSqlKeywordPolicy(), H2KeywordPolicy()]
SAMPLE_NAMES = ["order", "ORDER", "`order`", '"user"', "user_name", "", "`", "select", "a\"b"]


def _column(name: str, declared_type: str | None) -> FieldDescriptor:
    return FieldDescriptor.create(name).set_declared_type(declared_type)


class TestNaming:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("user_name", "userName"),
            ("USER_NAME", "userName"),
            ("UserName", "userName"),
            ("User_Name", "userName"),
            ("user__name_", "userName"),
            ("id", "id"),
            ("is_deleted", "isDeleted"),
            ("", ""),
            ("___", ""),
        ],
    )
    def test_underline_to_camel(self, raw: str, expected: str):
        assert underline_to_camel(raw) == expected

    def test_no_change_keeps_name(self):
        assert DefaultNamingPolicy().convert("User_Name", NamingStrategy.NO_CHANGE) == "User_Name"

    def test_prefix_removed_before_conversion(self):
        policy = DefaultNamingPolicy(field_prefixes=["f_", "c_"])

        assert policy.convert("F_USER_NAME", NamingStrategy.UNDERLINE_TO_CAMEL) == "userName"
        assert policy.convert("c_age", NamingStrategy.NO_CHANGE) == "age"

    def test_only_first_matching_prefix_removed(self):
        assert remove_prefix("a_b_name", ["a_", "b_"]) == "b_name"

    def test_convert_is_deterministic(self):
        policy = DefaultNamingPolicy()
        results = {policy.convert("create_time", NamingStrategy.UNDERLINE_TO_CAMEL) for _ in range(3)}

        assert results == {"createTime"}

    def test_satisfies_protocol(self):
        assert isinstance(DefaultNamingPolicy(), NamingPolicy)


class TestTypes:
    @pytest.mark.parametrize(
        ("declared_type", "expected"),
        [
            ("varchar(255)", "String"),
            ("LONGTEXT", "String"),
            ("json", "String"),
            ("bigint(20) unsigned", "Long"),
            ("tinyint(1)", "Boolean"),
            ("bit", "Boolean"),
            ("tinyint(4)", "Integer"),
            ("int(11)", "Integer"),
            ("decimal(10,2)", "BigDecimal"),
            ("blob", "Blob"),
            ("varbinary(16)", "byte[]"),
            ("float", "Float"),
            ("double", "Double"),
            ("date", "LocalDate"),
            ("time", "LocalTime"),
            ("year", "Year"),
            ("datetime(3)", "LocalDateTime"),
            ("timestamp", "LocalDateTime"),
            ("geometry", "String"),
        ],
    )
    def test_default_table(self, declared_type: str, expected: str):
        type_info = DefaultTypeResolver().resolve(_column("c", declared_type))

        assert type_info is not None
        assert type_info.type == expected

    @pytest.mark.parametrize(
        ("mode", "declared_type", "expected_package"),
        [
            (DateTypeMode.ONLY_DATE, "datetime", "java.util.Date"),
            (DateTypeMode.SQL_PACK, "date", "java.sql.Date"),
            (DateTypeMode.SQL_PACK, "time", "java.sql.Time"),
            (DateTypeMode.SQL_PACK, "timestamp", "java.sql.Timestamp"),
            (DateTypeMode.TIME_PACK, "datetime", "java.time.LocalDateTime"),
        ],
    )
    def test_date_modes(self, mode: DateTypeMode, declared_type: str, expected_package: str):
        type_info = DefaultTypeResolver(date_type=mode).resolve(_column("c", declared_type))

        assert type_info is not None
        assert type_info.package == expected_package

    def test_missing_declared_type_resolves_to_none(self):
        assert DefaultTypeResolver().resolve(_column("c", None)) is None

    def test_strict_mode_raises_for_unknown_types(self):
        with pytest.raises(UnknownColumnTypeError) as excinfo:
            DefaultTypeResolver(strict=True).resolve(_column("shape", "geometry"))

        assert excinfo.value.column_name == "shape"
        assert excinfo.value.declared_type == "geometry"

    def test_override_by_column_name(self):
        uuid = ColumnTypeInfo(type="UUID", package="java.util.UUID")
        overrides = [TypeOverride(column_name="TRACE_ID", type_info=uuid)]

        assert DefaultTypeResolver().resolve(_column("trace_id", "varchar(36)"), overrides) == uuid

    def test_override_by_declared_type_ignores_precision(self):
        overrides = [TypeOverride(declared_type="TINYINT", type_info=ColumnTypeInfo(type="Byte"))]

        type_info = DefaultTypeResolver().resolve(_column("flag", "tinyint(1)"), overrides)

        assert type_info is not None
        assert type_info.type == "Byte"

    def test_overrides_follow_priority_then_declaration_order(self):
        low = TypeOverride(declared_type="int", type_info=ColumnTypeInfo(type="Low"))
        first = TypeOverride(declared_type="int", type_info=ColumnTypeInfo(type="First"), priority=5)
        second = TypeOverride(column_name="qty", type_info=ColumnTypeInfo(type="Second"), priority=5)

        assert ordered_overrides([low, first, second]) == [first, second, low]
        type_info = DefaultTypeResolver().resolve(_column("qty", "int(11)"), [low, first, second])
        assert type_info is not None
        assert type_info.type == "First"

    def test_override_applies_without_declared_type(self):
        overrides = [TypeOverride(column_name="payload", type_info=ColumnTypeInfo(type="Object"))]

        type_info = DefaultTypeResolver().resolve(_column("payload", None), overrides)

        assert type_info is not None
        assert type_info.type == "Object"

    def test_boolean_detection_is_case_insensitive(self):
        assert ColumnTypeInfo(type="Boolean").is_boolean is True
        assert ColumnTypeInfo(type="boolean").is_boolean is True
        assert ColumnTypeInfo(type="Byte").is_boolean is False

    def test_satisfies_protocol(self):
        assert isinstance(DefaultTypeResolver(), TypeResolver)


class TestKeywords:
    @pytest.mark.parametrize("policy", KEYWORD_POLICIES, ids=lambda p: p.name)
    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_escape_is_idempotent(self, policy, name: str):
        assert policy.escape(policy.escape(name)) == policy.escape(name)

    @pytest.mark.parametrize("policy", KEYWORD_POLICIES, ids=lambda p: p.name)
    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_reserved_flag_tracks_escaping(self, policy, name: str):
        field = FieldDescriptor.create(name, keyword_policy=policy)

        assert field.is_reserved_keyword is (field.escaped_column_name != field.raw_column_name)

    def test_mysql_uses_backticks(self):
        policy = MySqlKeywordPolicy()

        assert policy.is_reserved("order") is True
        assert policy.is_reserved("Order") is True
        assert policy.is_reserved("`order`") is True
        assert policy.is_reserved("user_name") is False
        assert policy.escape("order") == "`order`"

    def test_postgres_uses_double_quotes(self):
        policy = PostgreSqlKeywordPolicy()

        assert policy.is_reserved("user") is True
        assert policy.escape("user") == '"user"'

    def test_dialects_differ(self):
        assert MySqlKeywordPolicy().is_reserved("user") is False
        assert PostgreSqlKeywordPolicy().is_reserved("user") is True
        assert H2KeywordPolicy().is_reserved("rownum") is True

    @pytest.mark.parametrize("policy", KEYWORD_POLICIES, ids=lambda p: p.name)
    def test_satisfies_protocol(self, policy):
        assert isinstance(policy, KeywordPolicy)

    def test_nameless_policy_satisfies_protocol(self):
        class _UpperOnly:
            def is_reserved(self, name):
                return name.isupper()

            def escape(self, name):
                return name if name.startswith("[") else f"[{name}]"

        policy = _UpperOnly()
        field = FieldDescriptor.create("KEY", keyword_policy=policy)

        assert isinstance(policy, KeywordPolicy)
        assert field.escaped_column_name == "[KEY]"
