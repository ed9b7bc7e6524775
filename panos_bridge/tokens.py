"""
Token generation for resources, data sources and types.

Tokens are ``package:module:name`` identifiers. Resource and data source
tokens also carry a file segment derived from the name (first character
lower-cased) so generated bindings can place each one in its own unit while
keeping the type name as written.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from panos_bridge.core.constants import (
    MAIN_PACKAGE,
    MODULE_ALIASES,
    SUBMODULE_SEPARATOR,
)
from panos_bridge.core.logging import get_logger
from panos_bridge.schema.mapping import Token

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenConfig:
    """Package name and module aliases used when building tokens."""

    package: str = MAIN_PACKAGE
    modules: Mapping[str, str] = field(default_factory=lambda: dict(MODULE_ALIASES))

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", MappingProxyType(dict(self.modules)))

    def resolve_module(self, module: str) -> str:
        """Return the configured module for an alias, or the alias itself."""
        return self.modules.get(module, module)


DEFAULT_TOKEN_CONFIG = TokenConfig()


def _file_name(name: str) -> str:
    """Lower-case only the first character of a type name."""
    if not name or not name[0].isalpha():
        logger.warning(
            f"Type name {name!r} does not start with a letter; "
            "token casing will be unconventional"
        )
    return name[:1].lower() + name[1:]


def submodule_path(module: str, name: str) -> str:
    """
    Derive the per-resource submodule path for a type name.

    Example:
        >>> submodule_path("firewall", "BgpPeer")
        'firewall/bgpPeer'

    """
    return f"{module}{SUBMODULE_SEPARATOR}{_file_name(name)}"


def make_member(config: TokenConfig, module: str, member: str) -> Token:
    """Manufacture a member token for the package and the given module."""
    return Token(config.package, config.resolve_module(module), member)


def make_type(config: TokenConfig, module: str, type_name: str) -> Token:
    """Manufacture a type token for the package and the given module."""
    return make_member(config, module, type_name)


def make_resource(config: TokenConfig, module: str, name: str) -> Token:
    """
    Manufacture a resource token.

    The file segment is the resource name with its first character
    lower-cased; the member keeps the original name.

    Args:
        config: Token configuration.
        module: Module alias, for example ``firewall``.
        name: Resource type name, for example ``BgpPeer``.

    Returns:
        Token rendering as ``panos:firewall:BgpPeer`` with submodule
        ``firewall/bgpPeer``.

    """
    return Token(
        config.package, config.resolve_module(module), name, _file_name(name)
    )


def make_data_source(config: TokenConfig, module: str, name: str) -> Token:
    """Manufacture a data source token, laid out the same way as resources."""
    return Token(
        config.package, config.resolve_module(module), name, _file_name(name)
    )
