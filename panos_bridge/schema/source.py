"""
Read-only view of the source provider schema.

The source schema is owned by the Terraform provider. This module models the
small part of it the bridge needs (field names and their input/output flags)
and loads it from the document printed by ``terraform providers schema -json``
or from a simpler YAML/JSON layout:

    resources:
      panos_bgp_peer:
        name: {optional: true}
        peer_as: {required: true}
    data_sources:
      panos_system_info: {}
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from panos_bridge.core.constants import (
    SCHEMA_DATA_SOURCE_SCHEMAS,
    SCHEMA_PROVIDER_SCHEMAS,
    SCHEMA_RESOURCE_SCHEMAS,
)
from panos_bridge.core.errors import SchemaLoadError
from panos_bridge.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceField:
    """A single field of a source resource or data source."""

    name: str
    type: str = "string"
    required: bool = False
    optional: bool = False
    computed: bool = False
    description: str = ""

    @property
    def is_input(self) -> bool:
        """Whether callers can set this field (required or optional)."""
        return self.required or self.optional

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any] | None) -> SourceField:
        """Build a field from its schema attribute description."""
        data = data or {}
        field_type = data.get("type", "string")
        if not isinstance(field_type, str):
            # Terraform encodes collection types as nested lists
            field_type = json.dumps(field_type)
        return cls(
            name=name,
            type=field_type,
            required=bool(data.get("required", False)),
            optional=bool(data.get("optional", False)),
            computed=bool(data.get("computed", False)),
            description=str(data.get("description", "")),
        )


@dataclass(frozen=True)
class RawSchemaEntry:
    """One resource or data source as the source provider defines it."""

    name: str
    fields: Mapping[str, SourceField] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get_field(self, name: str) -> SourceField | None:
        """Return the named field, or None."""
        return self.fields.get(name)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any] | None) -> RawSchemaEntry:
        """
        Build an entry from a field map or a Terraform schema block.

        Accepts ``{"block": {"attributes": {...}, "block_types": {...}}}`` as
        well as a flat ``{field_name: {flags}}`` map.
        """
        data = data or {}
        if _is_terraform_entry(data):
            block = data["block"]
            attributes = dict(block.get("attributes") or {})
            for block_name, block_type in (block.get("block_types") or {}).items():
                # Nested blocks are inputs unless the provider says otherwise
                attributes.setdefault(
                    block_name,
                    {
                        "type": block_type.get("nesting_mode", "block"),
                        "required": block_type.get("min_items", 0) > 0,
                        "optional": block_type.get("min_items", 0) == 0,
                    },
                )
        else:
            attributes = dict(data)
        fields = {
            field_name: SourceField.from_dict(field_name, field_data)
            for field_name, field_data in attributes.items()
        }
        return cls(name=name, fields=fields)


def _is_terraform_entry(data: Mapping[str, Any]) -> bool:
    # A flat field map may itself have a field called "block"
    block = data.get("block")
    if not isinstance(block, Mapping):
        return False
    return "attributes" in block or "block_types" in block or "version" in data


class SourceSchema:
    """
    Queryable source schema keyed by flat resource/data-source name.

    Instances are read-only once constructed.
    """

    def __init__(
        self,
        resources: Mapping[str, RawSchemaEntry] | None = None,
        data_sources: Mapping[str, RawSchemaEntry] | None = None,
    ) -> None:
        self._resources = MappingProxyType(dict(resources or {}))
        self._data_sources = MappingProxyType(dict(data_sources or {}))

    @property
    def resources(self) -> Mapping[str, RawSchemaEntry]:
        return self._resources

    @property
    def data_sources(self) -> Mapping[str, RawSchemaEntry]:
        return self._data_sources

    def get_resource(self, name: str) -> RawSchemaEntry | None:
        """Look up a resource schema by flat name."""
        return self._resources.get(name)

    def get_data_source(self, name: str) -> RawSchemaEntry | None:
        """Look up a data source schema by flat name."""
        return self._data_sources.get(name)

    def has_resource(self, name: str) -> bool:
        return name in self._resources

    def has_data_source(self, name: str) -> bool:
        return name in self._data_sources

    def __repr__(self) -> str:
        return (
            f"SourceSchema(resources={len(self._resources)}, "
            f"data_sources={len(self._data_sources)})"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceSchema:
        """
        Build a schema from a ``resources``/``data_sources`` document.

        Args:
            data: Mapping with optional ``resources`` and ``data_sources``
                keys, each mapping a flat name to its fields.

        Returns:
            SourceSchema with one entry per name.

        """
        return cls(
            resources={
                name: RawSchemaEntry.from_dict(name, entry)
                for name, entry in (data.get("resources") or {}).items()
            },
            data_sources={
                name: RawSchemaEntry.from_dict(name, entry)
                for name, entry in (data.get("data_sources") or {}).items()
            },
        )

    @classmethod
    def from_terraform_json(
        cls, data: Mapping[str, Any], provider: str | None = None
    ) -> SourceSchema:
        """
        Build a schema from ``terraform providers schema -json`` output.

        Args:
            data: Parsed JSON document.
            provider: Provider address to select, for example
                ``registry.terraform.io/paloaltonetworks/panos``. Defaults to
                the only provider in the document, or the first whose address
                ends in ``/panos``.

        Returns:
            SourceSchema for the selected provider.

        Raises:
            ValueError: If no matching provider can be selected.

        """
        providers = data.get(SCHEMA_PROVIDER_SCHEMAS) or {}
        address = _select_provider(providers, provider)
        provider_schema = providers[address] or {}
        logger.debug(f"Using provider schema '{address}'")
        return cls(
            resources={
                name: RawSchemaEntry.from_dict(name, entry)
                for name, entry in (
                    provider_schema.get(SCHEMA_RESOURCE_SCHEMAS) or {}
                ).items()
            },
            data_sources={
                name: RawSchemaEntry.from_dict(name, entry)
                for name, entry in (
                    provider_schema.get(SCHEMA_DATA_SOURCE_SCHEMAS) or {}
                ).items()
            },
        )


def _select_provider(providers: Mapping[str, Any], provider: str | None) -> str:
    if not providers:
        raise ValueError("document contains no provider schemas")
    if provider is not None:
        if provider not in providers:
            raise ValueError(
                f"provider '{provider}' not found; available: "
                + ", ".join(sorted(providers))
            )
        return provider
    if len(providers) == 1:
        return next(iter(providers))
    candidates = sorted(name for name in providers if name.endswith("/panos"))
    if not candidates:
        raise ValueError(
            "document contains several providers; choose one of: "
            + ", ".join(sorted(providers))
        )
    return candidates[0]


def load_source_schema(path: str | Path, provider: str | None = None) -> SourceSchema:
    """
    Load a source schema document from disk.

    Files ending in ``.yaml`` or ``.yml`` are parsed with PyYAML, everything
    else as JSON. Documents with a top-level ``provider_schemas`` key are
    treated as Terraform schema dumps.

    Args:
        path: Schema document path.
        provider: Optional provider address for Terraform dumps.

    Returns:
        Loaded SourceSchema.

    Raises:
        SchemaLoadError: If the file is missing, unreadable or malformed.

    """
    schema_path = Path(path)
    try:
        with schema_path.open(encoding="utf-8") as f:
            if schema_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except FileNotFoundError as e:
        raise SchemaLoadError(str(path), "file not found") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SchemaLoadError(str(path), f"parse error: {e}") from e
    except UnicodeDecodeError as e:
        raise SchemaLoadError(str(path), f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise SchemaLoadError(str(path), f"cannot read file: {e.strerror or e}") from e

    if not isinstance(data, dict):
        raise SchemaLoadError(str(path), "expected a mapping at the top level")

    try:
        if SCHEMA_PROVIDER_SCHEMAS in data:
            schema = SourceSchema.from_terraform_json(data, provider)
        else:
            schema = SourceSchema.from_dict(data)
    except (ValueError, AttributeError, TypeError) as e:
        raise SchemaLoadError(str(path), str(e)) from e

    logger.info(f"Loaded source schema: {schema!r}")
    return schema
