"""Tests for token generation."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from panos_bridge.schema.mapping import Token
from panos_bridge.tokens import (
    DEFAULT_TOKEN_CONFIG,
    TokenConfig,
    make_data_source,
    make_member,
    make_resource,
    make_type,
    submodule_path,
)

module_strategy = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=20)
type_name_strategy = st.builds(
    lambda head, tail: head + tail,
    st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
    st.text(
        alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789",
        max_size=40,
    ),
)


class TestToken:
    """Test the Token value type."""

    def test_text_form(self) -> None:
        """Test that str() joins package, module and name."""
        token = Token("panos", "firewall", "BgpPeer")
        assert str(token) == "panos:firewall:BgpPeer"

    def test_submodule_without_file(self) -> None:
        """Test that a plain member token's submodule is its module."""
        token = Token("panos", "index", "Provider")
        assert token.submodule == "index"
        assert token.qualified == "panos:index:Provider"

    def test_submodule_with_file(self) -> None:
        """Test that a file segment extends the submodule path."""
        token = Token("panos", "firewall", "BgpPeer", "bgpPeer")
        assert token.submodule == "firewall/bgpPeer"
        assert token.qualified == "panos:firewall/bgpPeer:BgpPeer"

    def test_tokens_are_immutable(self) -> None:
        """Test that tokens cannot be modified after construction."""
        token = Token("panos", "firewall", "BgpPeer")
        with pytest.raises(AttributeError):
            token.name = "Other"  # type: ignore[misc]

    def test_tokens_are_hashable(self) -> None:
        """Test that equal tokens hash alike."""
        assert len({Token("p", "m", "N"), Token("p", "m", "N")}) == 1


class TestMakeMember:
    """Test member and type token construction."""

    def test_make_member(self) -> None:
        """Test member tokens use the configured package."""
        token = make_member(DEFAULT_TOKEN_CONFIG, "firewall", "BgpPeer")
        assert str(token) == "panos:firewall:BgpPeer"
        assert token.file is None

    def test_make_type_matches_member(self) -> None:
        """Test type tokens render the same as member tokens."""
        assert make_type(DEFAULT_TOKEN_CONFIG, "index", "Tags") == make_member(
            DEFAULT_TOKEN_CONFIG, "index", "Tags"
        )

    def test_custom_package(self) -> None:
        """Test that the package comes from the config, not a global."""
        config = TokenConfig(package="other")
        assert str(make_member(config, "firewall", "Bgp")) == "other:firewall:Bgp"

    def test_module_alias_resolution(self) -> None:
        """Test that module aliases are resolved through the config."""
        config = TokenConfig(modules={"fw": "firewall"})
        assert str(make_member(config, "fw", "Bgp")) == "panos:firewall:Bgp"

    def test_unknown_module_passes_through(self) -> None:
        """Test that unknown modules are used as written."""
        token = make_member(DEFAULT_TOKEN_CONFIG, "network", "Zone")
        assert str(token) == "panos:network:Zone"


class TestMakeResource:
    """Test resource and data source token derivation."""

    def test_bgp_peer_example(self) -> None:
        """Test the canonical BGP peer mapping."""
        token = make_resource(DEFAULT_TOKEN_CONFIG, "firewall", "BgpPeer")
        assert str(token) == "panos:firewall:BgpPeer"
        assert token.submodule == "firewall/bgpPeer"
        assert token.qualified == "panos:firewall/bgpPeer:BgpPeer"

    def test_data_source_keeps_name_case(self) -> None:
        """Test data source tokens keep the original member name."""
        token = make_data_source(DEFAULT_TOKEN_CONFIG, "index", "getSystemInfo")
        assert token.name == "getSystemInfo"
        assert token.submodule == "index/getSystemInfo"
        assert token.qualified == "panos:index/getSystemInfo:getSystemInfo"

    def test_only_first_character_lowered(self) -> None:
        """Test that later capitals are preserved in the file segment."""
        assert submodule_path("firewall", "BGPPeer") == "firewall/bGPPeer"

    def test_empty_name_is_best_effort(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that an empty name yields a token and a warning."""
        with caplog.at_level(logging.WARNING, logger="panos_bridge.tokens"):
            token = make_resource(DEFAULT_TOKEN_CONFIG, "firewall", "")
        assert token.submodule == "firewall/"
        assert "does not start with a letter" in caplog.text

    def test_non_letter_name_is_best_effort(self) -> None:
        """Test that a digit-initial name is left unchanged."""
        token = make_resource(DEFAULT_TOKEN_CONFIG, "firewall", "3rdParty")
        assert token.submodule == "firewall/3rdParty"

    @given(module_strategy, type_name_strategy)
    @settings(max_examples=100)
    def test_resource_token_shape(self, module: str, name: str) -> None:
        """Test token text and submodule path for any valid pair."""
        token = make_resource(TokenConfig(modules={}), module, name)
        assert str(token) == f"panos:{module}:{name}"
        assert token.submodule == f"{module}/{name[0].lower()}{name[1:]}"
        assert submodule_path(module, name) == token.submodule

    @given(module_strategy, type_name_strategy)
    @settings(max_examples=50)
    def test_generation_is_deterministic(self, module: str, name: str) -> None:
        """Test that the same inputs always give the same token."""
        assert make_resource(DEFAULT_TOKEN_CONFIG, module, name) == make_resource(
            DEFAULT_TOKEN_CONFIG, module, name
        )
