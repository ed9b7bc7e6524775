"""
Provider mapping build.

``build_mapping`` is the single entry point: it reads the static provider
table, checks every entry against the source schema, generates tokens, binds
configuration defaults, runs the auto-naming pass and returns a frozen
``ProviderMapping``.
"""

from panos_bridge.config import BridgeSettings
from panos_bridge.core.constants import KIND_DATA_SOURCE, KIND_RESOURCE
from panos_bridge.core.errors import SchemaLookupMismatchError
from panos_bridge.core.logging import LogContext, get_logger, log_operation
from panos_bridge.decorator import apply_auto_naming
from panos_bridge.defaults import bind_config_defaults, pre_configure_callback
from panos_bridge.enumeration import ProviderTable, TableEntry, load_enumeration
from panos_bridge.schema.mapping import (
    DataSourceMapping,
    FrozenResourceMapping,
    PreConfigureCallback,
    ProviderMapping,
    ResourceMapping,
)
from panos_bridge.schema.source import SourceSchema
from panos_bridge.tokens import (
    DEFAULT_TOKEN_CONFIG,
    TokenConfig,
    make_data_source,
    make_resource,
)

logger = get_logger(__name__)


def find_schema_drift(
    schema: SourceSchema, table: ProviderTable | None = None
) -> dict[str, list[str]]:
    """
    Compare the provider table with a source schema.

    Args:
        schema: Source schema to compare against.
        table: Provider table; defaults to the bundled one.

    Returns:
        Dictionary with sorted name lists:
        - "missing_resources": table resources absent from the schema
        - "missing_data_sources": table data sources absent from the schema
        - "unmapped_resources": schema resources the table does not map
        - "unmapped_data_sources": schema data sources the table does not map

    """
    table = table or load_enumeration()
    resource_names = {entry.source for entry in table.resources}
    data_source_names = {entry.source for entry in table.data_sources}
    return {
        "missing_resources": sorted(
            name for name in resource_names if not schema.has_resource(name)
        ),
        "missing_data_sources": sorted(
            name for name in data_source_names if not schema.has_data_source(name)
        ),
        "unmapped_resources": sorted(set(schema.resources) - resource_names),
        "unmapped_data_sources": sorted(set(schema.data_sources) - data_source_names),
    }


def _check_entries(
    schema: SourceSchema, table: ProviderTable, strict: bool
) -> tuple[list[TableEntry], list[TableEntry], list[str]]:
    missing_resources = [
        entry.source for entry in table.resources if not schema.has_resource(entry.source)
    ]
    missing_data_sources = [
        entry.source
        for entry in table.data_sources
        if not schema.has_data_source(entry.source)
    ]
    if strict:
        if missing_resources:
            raise SchemaLookupMismatchError(KIND_RESOURCE, missing_resources)
        if missing_data_sources:
            raise SchemaLookupMismatchError(KIND_DATA_SOURCE, missing_data_sources)

    for kind, names in (
        (KIND_RESOURCE, missing_resources),
        (KIND_DATA_SOURCE, missing_data_sources),
    ):
        for name in names:
            logger.warning(f"Skipping {kind} '{name}': not present in the source schema")

    # Resources and data sources may share a flat name, so filter each
    # section against its own missing list
    resources = [
        entry for entry in table.resources if entry.source not in missing_resources
    ]
    data_sources = [
        entry
        for entry in table.data_sources
        if entry.source not in missing_data_sources
    ]
    skipped = sorted(missing_resources + missing_data_sources)
    return resources, data_sources, skipped


@log_operation("build_mapping")
def build_mapping(
    schema: SourceSchema,
    settings: BridgeSettings | None = None,
    table: ProviderTable | None = None,
    token_config: TokenConfig = DEFAULT_TOKEN_CONFIG,
    pre_configure: PreConfigureCallback | None = pre_configure_callback,
) -> ProviderMapping:
    """
    Build the provider mapping for the bridge runtime.

    Args:
        schema: Read-only source provider schema.
        settings: Build settings; defaults to ``BridgeSettings()``.
        table: Provider table; defaults to the bundled one.
        token_config: Package and module names used for tokens.
        pre_configure: Hook run before the provider is configured.

    Returns:
        Frozen ProviderMapping.

    Raises:
        SchemaLookupMismatchError: If a table entry is missing from the
            schema and ``settings.strict`` is set.
        EnumerationError: If the provider table is malformed.

    """
    settings = settings or BridgeSettings()
    table = table or load_enumeration()

    with LogContext(provider=table.metadata.name):
        resource_entries, data_source_entries, skipped = _check_entries(
            schema, table, settings.strict
        )

        resources: dict[str, ResourceMapping] = {}
        for entry in resource_entries:
            resources[entry.source] = ResourceMapping(
                source_name=entry.source,
                token=make_resource(token_config, entry.module, entry.name),
                fields={
                    field_name: spec.to_override(field_name, token_config)
                    for field_name, spec in entry.fields.items()
                },
            )

        data_sources = {
            entry.source: DataSourceMapping(
                source_name=entry.source,
                token=make_data_source(token_config, entry.module, entry.name),
            )
            for entry in data_source_entries
        }

        config = bind_config_defaults(table.config)
        apply_auto_naming(resources, schema, settings.auto_name_max_length)

        mapping = ProviderMapping(
            metadata=table.metadata,
            config=config,
            resources={
                name: FrozenResourceMapping.freeze(resource)
                for name, resource in resources.items()
            },
            data_sources=data_sources,
            packaging=table.packaging,
            pre_configure_callback=pre_configure,
            skipped=tuple(skipped),
        )
        logger.info(
            f"Built mapping '{mapping.name}': {len(mapping.resources)} resources, "
            f"{len(mapping.data_sources)} data sources, {len(mapping.config)} config keys"
        )
        return mapping
