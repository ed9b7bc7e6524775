"""Core utilities for panos-bridge."""

from panos_bridge.core.constants import *  # noqa: F403
from panos_bridge.core.errors import (
    BridgeError,
    DuplicateOverrideError,
    EnumerationError,
    PreConfigurationError,
    SchemaLoadError,
    SchemaLookupMismatchError,
)

__all__ = [
    "BridgeError",
    "DuplicateOverrideError",
    "EnumerationError",
    "PreConfigurationError",
    "SchemaLoadError",
    "SchemaLookupMismatchError",
]
