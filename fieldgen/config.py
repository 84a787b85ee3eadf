"""
Configuration settings for fieldgen.

Uses Pydantic Settings to load the naming, keyword, type and fill policy
options from environment variables (or a local `.env`). Structured options
such as fill rules and type overrides are read as JSON.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldgen.domain.models import (
    DateTypeMode,
    EntityConfig,
    FillRule,
    NamingStrategy,
    TypeOverride,
)


class Settings(BaseSettings):
    # Naming
    column_naming: NamingStrategy = Field(NamingStrategy.UNDERLINE_TO_CAMEL, alias="COLUMN_NAMING")
    field_prefixes: List[str] = Field(default_factory=list, alias="FIELD_PREFIXES")
    strip_boolean_is_prefix: bool = Field(False, alias="STRIP_BOOLEAN_IS_PREFIX")
    always_annotate: bool = Field(False, alias="ALWAYS_ANNOTATE")
    capital_mode: bool = Field(False, alias="CAPITAL_MODE")

    # Semantic roles
    version_property_name: Optional[str] = Field(None, alias="VERSION_PROPERTY_NAME")
    version_column_name: Optional[str] = Field(None, alias="VERSION_COLUMN_NAME")
    logic_delete_property_name: Optional[str] = Field(None, alias="LOGIC_DELETE_PROPERTY_NAME")
    logic_delete_column_name: Optional[str] = Field(None, alias="LOGIC_DELETE_COLUMN_NAME")

    # Rules
    fill_rules: List[FillRule] = Field(default_factory=list, alias="FILL_RULES")
    type_overrides: List[TypeOverride] = Field(default_factory=list, alias="TYPE_OVERRIDES")
    date_type: DateTypeMode = Field(DateTypeMode.TIME_PACK, alias="DATE_TYPE")
    strict_types: bool = Field(False, alias="STRICT_TYPES")

    # Output
    keyword_policy: str = Field("none", alias="KEYWORD_POLICY")
    escape_comments: bool = Field(False, alias="ESCAPE_COMMENTS")
    strict_rebind: bool = Field(False, alias="STRICT_REBIND")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def entity_config(self) -> EntityConfig:
        """
        Project the settings onto the frozen EntityConfig read by descriptors.
        """
        return EntityConfig(
            column_naming=self.column_naming,
            strip_boolean_is_prefix=self.strip_boolean_is_prefix,
            always_annotate=self.always_annotate,
            capital_mode=self.capital_mode,
            version_property_name=self.version_property_name,
            version_column_name=self.version_column_name,
            logic_delete_property_name=self.logic_delete_property_name,
            logic_delete_column_name=self.logic_delete_column_name,
            fill_rules=list(self.fill_rules),
            type_overrides=list(self.type_overrides),
            escape_comments=self.escape_comments,
            strict_rebind=self.strict_rebind,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
