"""
Schema models for the bridge.

Provides:
- A read-only view of the source provider schema
- Tokens, field overrides and the ProviderMapping aggregate
"""

from .mapping import (
    AutoNameInfo,
    ConfigFieldDefault,
    DataSourceMapping,
    DefaultInfo,
    FieldOverride,
    FrozenResourceMapping,
    PackagingHints,
    PreConfigureCallback,
    ProviderMapping,
    ProviderMetadata,
    ResourceMapping,
    Token,
)
from .source import RawSchemaEntry, SourceField, SourceSchema, load_source_schema

__all__ = [
    # Source schema
    "SourceField",
    "RawSchemaEntry",
    "SourceSchema",
    "load_source_schema",
    # Mapping
    "Token",
    "AutoNameInfo",
    "DefaultInfo",
    "FieldOverride",
    "ResourceMapping",
    "FrozenResourceMapping",
    "DataSourceMapping",
    "ConfigFieldDefault",
    "ProviderMetadata",
    "PackagingHints",
    "PreConfigureCallback",
    "ProviderMapping",
]
