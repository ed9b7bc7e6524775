"""Runtime settings for building provider mappings."""

import os
from dataclasses import asdict, dataclass
from typing import Any

from panos_bridge.core.constants import (
    AUTO_NAME_MAX_LENGTH,
    ENV_JSON_LOGS,
    ENV_LOG_LEVEL,
    ENV_STRICT,
    TRUTHY_VALUES,
)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.lower() in TRUTHY_VALUES


@dataclass
class BridgeSettings:
    """Settings for a mapping build."""

    # Fail the build when a table entry is missing from the source schema;
    # when False such entries are skipped and reported on the mapping
    strict: bool = True
    auto_name_max_length: int = AUTO_NAME_MAX_LENGTH
    log_level: str = "INFO"
    json_logs: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BridgeSettings":
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {key: value for key, value in data.items() if key in cls.__dataclass_fields__}
        return cls(**known)

    @classmethod
    def from_env(cls) -> "BridgeSettings":
        """Create settings from PANOS_BRIDGE_* environment variables."""
        return cls(
            strict=_env_flag(ENV_STRICT, True),
            log_level=os.getenv(ENV_LOG_LEVEL) or "INFO",
            json_logs=_env_flag(ENV_JSON_LOGS, False),
        )
