"""
Loader for the static provider table.

The table lists every mapped resource and data source as plain records plus
provider metadata, config defaults and packaging hints. It is bundled as
``panos_bridge/data/provider.yaml`` and parsed with PyYAML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from panos_bridge.core.constants import AUTO_NAME_MAX_LENGTH, ENUMERATION_FILENAME
from panos_bridge.core.errors import EnumerationError
from panos_bridge.core.logging import get_logger
from panos_bridge.schema.mapping import (
    AutoNameInfo,
    ConfigFieldDefault,
    DefaultInfo,
    FieldOverride,
    PackagingHints,
    ProviderMetadata,
)
from panos_bridge.tokens import TokenConfig, make_type

logger = get_logger(__name__)

_ENTRY_KEYS = ("source", "module", "name")


def _as_mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise EnumerationError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _env_var_list(value: Any, where: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise EnumerationError(f"{where} lists no variables")
    return tuple(str(name) for name in value)


@dataclass(frozen=True)
class FieldSpec:
    """An explicit per-field override written in the table."""

    auto_name_max_length: int | None = None
    env_vars: tuple[str, ...] = ()
    default_value: Any = None
    type_ref: tuple[str, str] | None = None

    def to_override(self, field_name: str, config: TokenConfig) -> FieldOverride:
        """Build the FieldOverride for this table entry."""
        auto_name = None
        if self.auto_name_max_length is not None:
            auto_name = AutoNameInfo(field_name, self.auto_name_max_length)
        default = None
        if self.env_vars or self.default_value is not None:
            default = DefaultInfo(self.env_vars, self.default_value)
        type_token = None
        if self.type_ref is not None:
            type_token = make_type(config, *self.type_ref)
        return FieldOverride(auto_name=auto_name, default=default, type_token=type_token)

    @classmethod
    def from_dict(cls, owner: str, field_name: str, data: Any) -> FieldSpec:
        where = f"field '{field_name}' of {owner}"
        data = _as_mapping(data, where)

        max_length = None
        if data.get("auto_name") is not None:
            auto_name = _as_mapping(data["auto_name"], f"auto_name of {where}")
            try:
                max_length = int(auto_name.get("max_length", AUTO_NAME_MAX_LENGTH))
            except (TypeError, ValueError) as e:
                raise EnumerationError(
                    f"auto_name.max_length of {where} must be an integer"
                ) from e
            if max_length <= 0:
                raise EnumerationError(
                    f"auto_name.max_length of {where} must be positive"
                )

        default = _as_mapping(data.get("default"), f"default of {where}")
        env_vars: tuple[str, ...] = ()
        if "env_vars" in default:
            env_vars = _env_var_list(default["env_vars"], f"default of {where}")

        type_ref = None
        if "type" in data:
            type_data = data["type"] or {}
            try:
                type_ref = (str(type_data["module"]), str(type_data["name"]))
            except (KeyError, TypeError) as e:
                raise EnumerationError(
                    f"type of field '{field_name}' on {owner} needs module and name"
                ) from e
        return cls(
            auto_name_max_length=max_length,
            env_vars=env_vars,
            default_value=default.get("value"),
            type_ref=type_ref,
        )


@dataclass(frozen=True)
class TableEntry:
    """One resource or data source row of the table."""

    source: str
    module: str
    name: str
    fields: dict[str, FieldSpec] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> TableEntry:
        if not isinstance(data, dict):
            raise EnumerationError(f"entry {data!r} is not a mapping")
        missing = [key for key in _ENTRY_KEYS if not data.get(key)]
        if missing:
            raise EnumerationError(
                f"entry {data!r} is missing {', '.join(missing)}"
            )
        source = str(data["source"])
        fields = {
            str(field_name): FieldSpec.from_dict(source, str(field_name), spec)
            for field_name, spec in _as_mapping(
                data.get("fields"), f"fields of {source}"
            ).items()
        }
        return cls(
            source=source,
            module=str(data["module"]),
            name=str(data["name"]),
            fields=fields,
        )


@dataclass(frozen=True)
class ProviderTable:
    """Parsed contents of the provider table."""

    metadata: ProviderMetadata
    config: tuple[ConfigFieldDefault, ...]
    resources: tuple[TableEntry, ...]
    data_sources: tuple[TableEntry, ...]
    packaging: PackagingHints

    @classmethod
    def from_dict(cls, data: Any) -> ProviderTable:
        """
        Parse the table document.

        Raises:
            EnumerationError: If the document is malformed or a source name
                appears twice in the same section.

        """
        if not isinstance(data, dict):
            raise EnumerationError("expected a mapping at the top level")

        meta = _as_mapping(data.get("metadata"), "metadata")
        if not meta.get("name"):
            raise EnumerationError("metadata.name is required")
        metadata = ProviderMetadata(
            name=str(meta["name"]),
            description=str(meta.get("description", "")),
            keywords=tuple(meta.get("keywords") or ()),
            license=str(meta.get("license", "")),
            homepage=str(meta.get("homepage", "")),
            repository=str(meta.get("repository", "")),
        )

        config = []
        for key, env_vars in _as_mapping(data.get("config"), "config").items():
            names = _env_var_list(env_vars, f"config key '{key}'")
            config.append(ConfigFieldDefault(str(key), names))

        resources_ = _parse_entries(data.get("resources"), "resources")
        data_sources = _parse_entries(data.get("data_sources"), "data_sources")

        packaging = _as_mapping(data.get("packaging"), "packaging")
        javascript = _as_mapping(packaging.get("javascript"), "packaging.javascript")
        python = _as_mapping(packaging.get("python"), "packaging.python")
        hints = PackagingHints(
            javascript_dependencies=javascript.get("dependencies") or {},
            javascript_dev_dependencies=javascript.get("dev_dependencies") or {},
            python_requires=python.get("requires") or {},
        )
        return cls(metadata, tuple(config), resources_, data_sources, hints)


def _parse_entries(raw: Any, section: str) -> tuple[TableEntry, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise EnumerationError(f"'{section}' must be a list")
    entries = tuple(TableEntry.from_dict(item) for item in raw)
    seen: set[str] = set()
    for entry in entries:
        if entry.source in seen:
            raise EnumerationError(f"duplicate source name '{entry.source}' in {section}")
        seen.add(entry.source)
    return entries


def load_enumeration(path: str | Path | None = None) -> ProviderTable:
    """
    Load the provider table.

    Args:
        path: Optional table file; defaults to the bundled table.

    Returns:
        Parsed ProviderTable.

    Raises:
        EnumerationError: If the file cannot be parsed or is malformed.

    """
    try:
        if path is None:
            text = (
                resources.files("panos_bridge")
                .joinpath("data", ENUMERATION_FILENAME)
                .read_text(encoding="utf-8")
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except OSError as e:
        raise EnumerationError(f"cannot read table: {e}") from e
    except yaml.YAMLError as e:
        raise EnumerationError(f"cannot parse table: {e}") from e

    table = ProviderTable.from_dict(data)
    logger.debug(
        f"Loaded provider table '{table.metadata.name}': "
        f"{len(table.resources)} resources, {len(table.data_sources)} data sources"
    )
    return table
