"""
Mapping structures handed to the bridge runtime.

Defines tokens, per-field overrides, resource and data source mappings and
the ``ProviderMapping`` root aggregate. Resource mappings are mutable while
the mapping is being built; ``ProviderMapping`` is frozen and exposes its
tables as read-only mappings.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from panos_bridge.core.constants import SUBMODULE_SEPARATOR, TOKEN_SEPARATOR
from panos_bridge.core.errors import DuplicateOverrideError

# Signature of the hook run before the underlying provider is configured
PreConfigureCallback = Callable[[Mapping[str, Any], Any], None]


@dataclass(frozen=True)
class Token:
    """
    Structured identifier ``(package, module, name)`` for a target type.

    ``file`` is the per-resource unit derived from the name, when there is
    one; generated bindings place each resource in its own file under the
    module.
    """

    package: str
    module: str
    name: str
    file: str | None = None

    @property
    def submodule(self) -> str:
        """Module path including the per-resource file segment."""
        if self.file is None:
            return self.module
        return f"{self.module}{SUBMODULE_SEPARATOR}{self.file}"

    @property
    def qualified(self) -> str:
        """Module-member form addressed by the bridge runtime."""
        return TOKEN_SEPARATOR.join((self.package, self.submodule, self.name))

    def __str__(self) -> str:
        return TOKEN_SEPARATOR.join((self.package, self.module, self.name))


@dataclass(frozen=True)
class AutoNameInfo:
    """Generate a unique value for a field when the caller omits it."""

    field_name: str
    max_length: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.field_name, "maxLength": self.max_length}


@dataclass(frozen=True)
class DefaultInfo:
    """Environment variables checked, in order, for a field's default value."""

    env_vars: tuple[str, ...] = ()
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"envVars": list(self.env_vars)}
        if self.value is not None:
            data["value"] = self.value
        return data


@dataclass(frozen=True)
class FieldOverride:
    """Per-field behaviour attached to a mapped resource or config key."""

    auto_name: AutoNameInfo | None = None
    default: DefaultInfo | None = None
    type_token: Token | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.auto_name is not None:
            data["autoName"] = self.auto_name.to_dict()
        if self.default is not None:
            data["default"] = self.default.to_dict()
        if self.type_token is not None:
            data["type"] = self.type_token.qualified
        return data


@dataclass
class ResourceMapping:
    """Flat source resource name associated with its token and overrides."""

    source_name: str
    token: Token
    fields: dict[str, FieldOverride] = field(default_factory=dict)

    def has_override(self, field_name: str) -> bool:
        return field_name in self.fields

    def add_field_override(self, field_name: str, override: FieldOverride) -> None:
        """
        Attach an override to a field.

        Raises:
            DuplicateOverrideError: If the field already has an override.

        """
        if field_name in self.fields:
            raise DuplicateOverrideError(self.source_name, field_name)
        self.fields[field_name] = override

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tok": self.token.qualified}
        if self.fields:
            data["fields"] = {
                name: self.fields[name].to_dict() for name in sorted(self.fields)
            }
        return data


@dataclass(frozen=True)
class DataSourceMapping:
    """Flat source data source name associated with its token."""

    source_name: str
    token: Token

    def to_dict(self) -> dict[str, Any]:
        return {"tok": self.token.qualified}


@dataclass(frozen=True)
class ConfigFieldDefault:
    """Provider configuration key bound to candidate environment variables."""

    key: str
    env_vars: tuple[str, ...]


@dataclass(frozen=True)
class ProviderMetadata:
    """Identity and descriptive metadata of the generated package."""

    name: str
    description: str = ""
    keywords: tuple[str, ...] = ()
    license: str = ""
    homepage: str = ""
    repository: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "keywords": list(self.keywords),
            "license": self.license,
            "homepage": self.homepage,
            "repository": self.repository,
        }


@dataclass(frozen=True)
class PackagingHints:
    """Dependency constraints for generated client libraries (pass-through)."""

    javascript_dependencies: Mapping[str, str] = field(default_factory=dict)
    javascript_dev_dependencies: Mapping[str, str] = field(default_factory=dict)
    python_requires: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in (
            "javascript_dependencies",
            "javascript_dev_dependencies",
            "python_requires",
        ):
            object.__setattr__(
                self, name, MappingProxyType(dict(getattr(self, name)))
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "javascript": {
                "dependencies": dict(sorted(self.javascript_dependencies.items())),
                "devDependencies": dict(
                    sorted(self.javascript_dev_dependencies.items())
                ),
            },
            "python": {"requires": dict(sorted(self.python_requires.items()))},
        }


@dataclass(frozen=True)
class FrozenResourceMapping:
    """Read-only copy of a ResourceMapping held by ProviderMapping."""

    source_name: str
    token: Token
    fields: Mapping[str, FieldOverride] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def freeze(cls, resource: ResourceMapping) -> FrozenResourceMapping:
        return cls(resource.source_name, resource.token, resource.fields)

    def has_override(self, field_name: str) -> bool:
        return field_name in self.fields

    def to_dict(self) -> dict[str, Any]:
        return ResourceMapping(
            self.source_name, self.token, dict(self.fields)
        ).to_dict()


@dataclass(frozen=True)
class ProviderMapping:
    """
    Root aggregate consumed by the bridge runtime.

    Holds provider metadata, config default bindings, the resource and data
    source tables and packaging hints. Every table is read-only; rebuilding
    means constructing a new instance.
    """

    metadata: ProviderMetadata
    config: Mapping[str, FieldOverride]
    resources: Mapping[str, FrozenResourceMapping]
    data_sources: Mapping[str, DataSourceMapping]
    packaging: PackagingHints
    pre_configure_callback: PreConfigureCallback | None = None
    skipped: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("config", "resources", "data_sources"):
            object.__setattr__(
                self, name, MappingProxyType(dict(getattr(self, name)))
            )

    @property
    def name(self) -> str:
        return self.metadata.name

    def to_dict(self) -> dict[str, Any]:
        """Serialise the mapping with sorted keys for stable output."""
        data = self.metadata.to_dict()
        data["config"] = {
            key: self.config[key].to_dict() for key in sorted(self.config)
        }
        data["resources"] = {
            name: self.resources[name].to_dict() for name in sorted(self.resources)
        }
        data["dataSources"] = {
            name: self.data_sources[name].to_dict()
            for name in sorted(self.data_sources)
        }
        data.update(self.packaging.to_dict())
        if self.skipped:
            data["skipped"] = list(self.skipped)
        return data
