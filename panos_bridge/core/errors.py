"""Error types with actionable messages and recovery suggestions."""

import os
from pathlib import Path

from panos_bridge.core.constants import ENV_DEBUG, TRUTHY_VALUES


def _is_debug_mode() -> bool:
    """
    Check if panos-bridge is running in debug mode.

    Debug mode is enabled when PANOS_BRIDGE_DEBUG is set to any of:
    - "1", "true", "yes", "on" (case-insensitive)

    Returns:
        True if debug mode is enabled, False otherwise.

    """
    return os.getenv(ENV_DEBUG, "").lower() in TRUTHY_VALUES


def _sanitize_path(path: str | Path) -> str:
    """
    Sanitize a file path for error messages.

    In debug mode the full path is returned. Otherwise the path is made
    relative to the current directory, or replaced with a placeholder when
    it lies elsewhere or does not look like a path at all.

    Args:
        path: The file path to sanitize.

    Returns:
        Sanitized path string safe for user display.

    """
    if _is_debug_mode():
        return str(path)

    path_str = str(path)
    if any(
        [
            "\n" in path_str or "\r" in path_str,
            path_str.startswith("{") or path_str.startswith("["),
            "://" in path_str,
        ]
    ):
        return "<resource>"

    try:
        return str(Path(path_str).relative_to(Path.cwd()))
    except ValueError:
        return "<file>"


class BridgeError(Exception):
    """Base exception for panos-bridge with enhanced error messages."""

    def __init__(self, message: str, suggestion: str | None = None):
        """
        Initialize with message and optional recovery suggestion.

        Args:
            message: The error message describing what went wrong.
            suggestion: Optional suggestion for how to fix the error.

        """
        self.message = message
        self.suggestion = suggestion
        full_message = message
        if suggestion:
            full_message = f"{message}\n\nSuggestion: {suggestion}"
        super().__init__(full_message)


class SchemaLookupMismatchError(BridgeError):
    """Raised when enumerated names are missing from the source schema."""

    def __init__(self, kind: str, names: list[str]):
        """
        Initialize schema lookup mismatch error.

        Args:
            kind: What was looked up ('resource' or 'data source').
            names: Enumerated names with no source schema entry.

        """
        self.kind = kind
        self.names = sorted(names)
        listing = "\n  - ".join(self.names)
        message = (
            f"{len(self.names)} {kind} name(s) in the provider table are not "
            f"present in the source schema:\n  - {listing}"
        )
        suggestion = (
            "The provider was probably upgraded and renamed or removed these "
            "entries. Update panos_bridge/data/provider.yaml to match the "
            "schema, or regenerate the schema dump with "
            "'terraform providers schema -json'."
        )
        super().__init__(message, suggestion)


class DuplicateOverrideError(BridgeError):
    """Raised when a field override would replace an existing one."""

    def __init__(self, resource: str, field_name: str):
        """
        Initialize duplicate override error.

        Args:
            resource: Source name of the resource being decorated.
            field_name: The field that already carries an override.

        """
        self.resource = resource
        self.field_name = field_name
        message = (
            f"Resource '{resource}' already has an override for field "
            f"'{field_name}'"
        )
        suggestion = (
            "Explicit overrides in the provider table take precedence. "
            "Remove one of the two definitions."
        )
        super().__init__(message, suggestion)


class PreConfigurationError(BridgeError):
    """Raised when the pre-configure hook rejects provider configuration."""

    def __init__(self, reason: str, key: str | None = None):
        """
        Initialize pre-configuration error.

        Args:
            reason: Why the configuration was rejected.
            key: Optional configuration key at fault.

        """
        self.reason = reason
        self.key = key
        where = f" (config key '{key}')" if key else ""
        message = f"Provider configuration rejected{where}: {reason}"
        suggestion = (
            "Set the value in the stack configuration or export the matching "
            "PANOS_* environment variable before configuring the provider."
        )
        super().__init__(message, suggestion)


class EnumerationError(BridgeError):
    """Raised when the static provider table is malformed."""

    def __init__(self, reason: str):
        """
        Initialize enumeration error.

        Args:
            reason: What is wrong with the table.

        """
        message = f"Invalid provider table: {reason}"
        suggestion = (
            "Each resource and data source entry needs 'source', 'module' "
            "and 'name' keys, and source names must be unique."
        )
        super().__init__(message, suggestion)


class SchemaLoadError(BridgeError):
    """Raised when a source schema document cannot be read."""

    def __init__(self, path: str, reason: str):
        """
        Initialize schema load error.

        Args:
            path: The schema document path.
            reason: Why it could not be loaded.

        """
        sanitized_path = _sanitize_path(path)
        message = f"Could not load source schema from {sanitized_path}: {reason}"
        suggestion = (
            "Pass a JSON document produced by 'terraform providers schema "
            "-json', or a YAML file with 'resources' and 'data_sources' maps."
        )
        if _is_debug_mode():
            suggestion += f"\n\nDebug: Full path: {path}"
        super().__init__(message, suggestion)


def format_error_with_context(
    error: Exception, operation: str, file_path: str | None = None
) -> str:
    """
    Format an error message with operation context.

    Args:
        error: The exception that occurred.
        operation: Description of the operation that failed.
        file_path: Optional path to the file being processed.

    Returns:
        Formatted error message with context and suggestions.

    """
    if isinstance(error, BridgeError):
        return str(error)

    context = f"Error during {operation}"
    if file_path:
        context += f" for {_sanitize_path(file_path)}"

    if isinstance(error, FileNotFoundError):
        return str(SchemaLoadError(file_path or "unknown", "file not found"))
    elif isinstance(error, PermissionError):
        suggestion = "Check file permissions and ensure you have read access."
        if _is_debug_mode() and file_path:
            suggestion += f"\n\nDebug: Full path: {file_path}"
        return f"{context}: Permission denied\n\nSuggestion: {suggestion}"
    elif isinstance(error, (ValueError, TypeError)):
        return (
            f"{context}: {error}\n\nSuggestion: Check that input "
            "values are in the correct format and type."
        )
    else:
        debug_info = f"\n\nDebug: {error!r}" if _is_debug_mode() else ""
        return f"{context}: {error}{debug_info}"
