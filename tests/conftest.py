"""Pytest configuration and fixtures for panos-bridge tests."""

import os
from typing import Any

import pytest

from panos_bridge.enumeration import ProviderTable, load_enumeration
from panos_bridge.schema.source import SourceSchema

# Resources whose schema has no `name` field at all
NAMELESS_RESOURCES = {"panos_bgp", "panos_dag_tags"}
# Resources whose `name` is required rather than optional
REQUIRED_NAME_RESOURCES = {"panos_bgp_auth_profile", "panos_address_object"}


def make_schema_document(table: ProviderTable) -> dict[str, Any]:
    """Build a schema document covering every entry of a provider table."""
    resources: dict[str, Any] = {}
    for entry in table.resources:
        fields: dict[str, Any] = {
            "id": {"computed": True},
            "vsys": {"optional": True, "computed": True},
        }
        if entry.source in REQUIRED_NAME_RESOURCES:
            fields["name"] = {"required": True}
        elif entry.source not in NAMELESS_RESOURCES:
            fields["name"] = {"optional": True}
        resources[entry.source] = fields
    data_sources = {
        entry.source: {"name": {"computed": True}} for entry in table.data_sources
    }
    return {"resources": resources, "data_sources": data_sources}


@pytest.fixture(scope="session")
def provider_table() -> ProviderTable:
    """Provide the bundled provider table."""
    return load_enumeration()


@pytest.fixture
def schema_document(provider_table: ProviderTable) -> dict[str, Any]:
    """Provide a schema document matching the bundled table."""
    return make_schema_document(provider_table)


@pytest.fixture
def source_schema(schema_document: dict[str, Any]) -> SourceSchema:
    """Provide a source schema matching the bundled table."""
    return SourceSchema.from_dict(schema_document)


@pytest.fixture(autouse=True)
def clean_bridge_env():
    """Keep PANOS_BRIDGE_* settings from the host out of tests."""
    saved = {
        key: os.environ.pop(key)
        for key in list(os.environ)
        if key.startswith("PANOS_BRIDGE_")
    }
    yield
    for key in list(os.environ):
        if key.startswith("PANOS_BRIDGE_"):
            os.environ.pop(key)
    os.environ.update(saved)
