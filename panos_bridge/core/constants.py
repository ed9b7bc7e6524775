"""Constants used throughout panos-bridge."""

# Token components
MAIN_PACKAGE = "panos"
MAIN_MODULE = "index"
PANORAMA_MODULE = "panorama"
FIREWALL_MODULE = "firewall"

MODULE_ALIASES = {
    "main": MAIN_MODULE,
    MAIN_MODULE: MAIN_MODULE,
    PANORAMA_MODULE: PANORAMA_MODULE,
    FIREWALL_MODULE: FIREWALL_MODULE,
}

TOKEN_SEPARATOR = ":"
SUBMODULE_SEPARATOR = "/"

# Auto-naming
NAME_PROPERTY = "name"
AUTO_NAME_MAX_LENGTH = 255

# Bundled data
ENUMERATION_FILENAME = "provider.yaml"

# Environment variables read by the tool itself
ENV_DEBUG = "PANOS_BRIDGE_DEBUG"
ENV_STRICT = "PANOS_BRIDGE_STRICT"
ENV_LOG_LEVEL = "PANOS_BRIDGE_LOG_LEVEL"
ENV_JSON_LOGS = "PANOS_BRIDGE_JSON_LOGS"

TRUTHY_VALUES = ("1", "true", "yes", "on")

# Source schema document keys (terraform providers schema -json)
SCHEMA_PROVIDER_SCHEMAS = "provider_schemas"
SCHEMA_RESOURCE_SCHEMAS = "resource_schemas"
SCHEMA_DATA_SOURCE_SCHEMAS = "data_source_schemas"

# Kinds of mapped entries
KIND_RESOURCE = "resource"
KIND_DATA_SOURCE = "data source"
