"""panos-bridge: Terraform PAN-OS provider schema mapping for Pulumi."""

from pathlib import Path

import tomllib


# Read version from pyproject.toml
def _get_version() -> str:
    """Get version from pyproject.toml."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
        version = data.get("tool", {}).get("poetry", {}).get("version")
        return str(version) if version else "unknown"
    except OSError:
        return "unknown"


__version__ = _get_version()

from panos_bridge.config import BridgeSettings  # noqa: E402
from panos_bridge.decorator import apply_auto_naming  # noqa: E402
from panos_bridge.defaults import (  # noqa: E402
    bind_config_defaults,
    pre_configure_callback,
    resolve_config,
    resolve_config_value,
    run_pre_configure,
    string_value,
)
from panos_bridge.enumeration import load_enumeration  # noqa: E402
from panos_bridge.provider import build_mapping, find_schema_drift  # noqa: E402
from panos_bridge.schema import (  # noqa: E402
    ProviderMapping,
    SourceSchema,
    Token,
    load_source_schema,
)
from panos_bridge.tokens import (  # noqa: E402
    TokenConfig,
    make_data_source,
    make_member,
    make_resource,
    make_type,
    submodule_path,
)

__all__ = [
    "BridgeSettings",
    "ProviderMapping",
    "SourceSchema",
    "Token",
    "TokenConfig",
    "apply_auto_naming",
    "bind_config_defaults",
    "build_mapping",
    "find_schema_drift",
    "load_enumeration",
    "load_source_schema",
    "make_data_source",
    "make_member",
    "make_resource",
    "make_type",
    "pre_configure_callback",
    "resolve_config",
    "resolve_config_value",
    "run_pre_configure",
    "string_value",
    "submodule_path",
]
