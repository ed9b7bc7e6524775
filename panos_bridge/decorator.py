"""
Auto-naming post-pass over the resource table.

Resources whose source schema accepts a ``name`` input get a generated
unique default for it, so repeated deployments do not collide. Explicit
overrides from the provider table are left alone.
"""

from collections.abc import Mapping

from panos_bridge.core.constants import (
    AUTO_NAME_MAX_LENGTH,
    KIND_RESOURCE,
    NAME_PROPERTY,
)
from panos_bridge.core.errors import SchemaLookupMismatchError
from panos_bridge.core.logging import get_logger
from panos_bridge.schema.mapping import AutoNameInfo, FieldOverride, ResourceMapping
from panos_bridge.schema.source import RawSchemaEntry, SourceSchema

logger = get_logger(__name__)


def auto_name(field_name: str, max_length: int) -> FieldOverride:
    """Build an override that auto-generates a field's value."""
    return FieldOverride(auto_name=AutoNameInfo(field_name, max_length))


def wants_auto_name(entry: RawSchemaEntry, resource: ResourceMapping) -> bool:
    """
    Check whether a resource should get the auto-name override.

    True only when the schema has a field literally named ``name`` that is
    required or optional, and the mapping has no override for it yet.
    """
    source_field = entry.get_field(NAME_PROPERTY)
    if source_field is None or not source_field.is_input:
        return False
    return not resource.has_override(NAME_PROPERTY)


def apply_auto_naming(
    resources: Mapping[str, ResourceMapping],
    schema: SourceSchema,
    max_length: int = AUTO_NAME_MAX_LENGTH,
) -> list[str]:
    """
    Inject auto-name overrides into a resource table in place.

    Safe to run repeatedly; a second pass finds every override already in
    place and changes nothing.

    Args:
        resources: Resource mappings keyed by flat source name.
        schema: Source schema to consult.
        max_length: Maximum generated name length.

    Returns:
        Source names decorated during this pass, sorted.

    Raises:
        SchemaLookupMismatchError: If a mapped resource is missing from the
            schema.

    """
    missing = sorted(name for name in resources if not schema.has_resource(name))
    if missing:
        raise SchemaLookupMismatchError(KIND_RESOURCE, missing)

    decorated = []
    for name in sorted(resources):
        resource = resources[name]
        entry = schema.get_resource(name)
        if entry is None or not wants_auto_name(entry, resource):
            continue
        resource.add_field_override(NAME_PROPERTY, auto_name(NAME_PROPERTY, max_length))
        decorated.append(name)
        logger.debug(f"Auto-naming '{NAME_PROPERTY}' on {name}")

    logger.info(f"Auto-naming applied to {len(decorated)} of {len(resources)} resources")
    return decorated
