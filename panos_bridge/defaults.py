"""
Environment-variable defaults for provider configuration.

Binding only records the policy on each configuration key. The lookup itself
is done by the bridge runtime at configure time; ``resolve_config_value``
implements that policy so it can be exercised and reused:

1. The first listed environment variable that is set and non-empty wins.
2. Otherwise the explicitly configured value is used unchanged.
"""

import os
from collections.abc import Iterable, Mapping
from typing import Any

from panos_bridge.core.errors import PreConfigurationError
from panos_bridge.core.logging import get_logger
from panos_bridge.schema.mapping import (
    ConfigFieldDefault,
    DefaultInfo,
    FieldOverride,
    ProviderMapping,
)

logger = get_logger(__name__)


def bind_config_defaults(
    entries: Iterable[ConfigFieldDefault],
) -> dict[str, FieldOverride]:
    """
    Attach environment-variable default policies to configuration keys.

    Args:
        entries: Configuration keys with their candidate variables, in
            probing order.

    Returns:
        Mapping of configuration key to its override.

    """
    config: dict[str, FieldOverride] = {}
    for entry in entries:
        config[entry.key] = FieldOverride(default=DefaultInfo(env_vars=entry.env_vars))
        logger.debug(
            f"Config key '{entry.key}' defaults from {', '.join(entry.env_vars)}"
        )
    return config


def resolve_config_value(
    default: DefaultInfo | None,
    explicit: Any = None,
    environ: Mapping[str, str] | None = None,
) -> Any:
    """
    Apply a default policy to one configuration value.

    Args:
        default: The key's default policy, if any.
        explicit: Value supplied through normal configuration.
        environ: Environment to read; defaults to ``os.environ``.

    Returns:
        The first set, non-empty environment variable's value, else
        ``explicit``.

    """
    if default is None:
        return explicit
    env = os.environ if environ is None else environ
    for var in default.env_vars:
        value = env.get(var)
        if value:
            return value
    if explicit is None and default.value is not None:
        return default.value
    return explicit


def resolve_config(
    config: Mapping[str, FieldOverride],
    explicit: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """
    Resolve every bound configuration key.

    Keys in ``explicit`` without a binding are passed through as-is.

    Returns:
        Resolved configuration values; keys that resolve to None are omitted.

    """
    explicit = dict(explicit or {})
    resolved = {key: value for key, value in explicit.items() if value is not None}
    for key, override in config.items():
        value = resolve_config_value(override.default, explicit.get(key), environ)
        if value is not None:
            resolved[key] = value
    return resolved


def string_value(values: Mapping[str, Any], key: str) -> str:
    """Get a string value from configuration values if present, else ""."""
    value = values.get(key)
    if isinstance(value, str):
        return value
    return ""


def pre_configure_callback(values: Mapping[str, Any], config: Any) -> None:  # noqa: ARG001
    """
    Validate configuration before the underlying provider is configured.

    Called with the resolved configuration values and the live connection
    configuration object. Reject a configuration by raising
    ``PreConfigurationError`` with an actionable message; read values with
    ``string_value(values, "hostname")``. No cross-field rules exist yet, so
    every configuration is accepted.
    """
    return None


def run_pre_configure(
    mapping: ProviderMapping, values: Mapping[str, Any], config: Any = None
) -> None:
    """
    Run a mapping's pre-configure hook.

    Raises:
        PreConfigurationError: If the hook rejects the configuration.

    """
    callback = mapping.pre_configure_callback
    if callback is None:
        return
    try:
        callback(values, config)
    except PreConfigurationError as e:
        logger.error(f"Pre-configure hook for '{mapping.name}' failed: {e.message}")
        raise
