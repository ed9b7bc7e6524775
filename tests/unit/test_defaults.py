"""Tests for configuration default bindings and the pre-configure hook."""

from unittest.mock import MagicMock

import pytest

from panos_bridge.core.errors import PreConfigurationError
from panos_bridge.defaults import (
    bind_config_defaults,
    pre_configure_callback,
    resolve_config,
    resolve_config_value,
    run_pre_configure,
    string_value,
)
from panos_bridge.schema.mapping import (
    ConfigFieldDefault,
    DefaultInfo,
    PackagingHints,
    ProviderMapping,
    ProviderMetadata,
)


def _mapping(callback=pre_configure_callback) -> ProviderMapping:
    return ProviderMapping(
        metadata=ProviderMetadata(name="panos"),
        config={},
        resources={},
        data_sources={},
        packaging=PackagingHints(),
        pre_configure_callback=callback,
    )


class TestBindConfigDefaults:
    """Test recording env-var policies on config keys."""

    def test_binds_each_key(self) -> None:
        """Test every entry becomes a default override."""
        config = bind_config_defaults(
            [
                ConfigFieldDefault("hostname", ("PANOS_HOSTNAME",)),
                ConfigFieldDefault("api_key", ("PANOS_API_KEY",)),
            ]
        )
        assert set(config) == {"hostname", "api_key"}
        assert config["hostname"].default == DefaultInfo(("PANOS_HOSTNAME",))
        assert config["hostname"].auto_name is None

    def test_keeps_variable_order(self) -> None:
        """Test that variable order is preserved."""
        config = bind_config_defaults([ConfigFieldDefault("region", ("A", "B"))])
        assert config["region"].default is not None
        assert config["region"].default.env_vars == ("A", "B")

    def test_does_not_read_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that binding records policy only."""
        monkeypatch.setenv("PANOS_HOSTNAME", "fw.example.com")
        config = bind_config_defaults([ConfigFieldDefault("hostname", ("PANOS_HOSTNAME",))])
        assert "fw.example.com" not in repr(config)


class TestResolveConfigValue:
    """Test the runtime resolution policy."""

    def test_second_variable_used_when_first_unset(self) -> None:
        """Test {A unset, B="x"} resolves to "x"."""
        default = DefaultInfo(("A", "B"))
        assert resolve_config_value(default, "explicit", {"B": "x"}) == "x"

    def test_explicit_value_kept_when_all_unset(self) -> None:
        """Test {A unset, B unset} keeps the explicit value."""
        default = DefaultInfo(("A", "B"))
        assert resolve_config_value(default, "explicit", {}) == "explicit"

    def test_first_variable_wins(self) -> None:
        """Test that probing stops at the first set variable."""
        default = DefaultInfo(("A", "B"))
        assert resolve_config_value(default, None, {"A": "a", "B": "b"}) == "a"

    def test_empty_variable_is_skipped(self) -> None:
        """Test that empty strings count as unset."""
        default = DefaultInfo(("A", "B"))
        assert resolve_config_value(default, None, {"A": "", "B": "b"}) == "b"

    def test_no_policy_returns_explicit(self) -> None:
        """Test keys without a binding pass through."""
        assert resolve_config_value(None, 42, {"A": "a"}) == 42

    def test_static_default_value(self) -> None:
        """Test a static default fills in when nothing else is set."""
        default = DefaultInfo(("A",), value="fallback")
        assert resolve_config_value(default, None, {}) == "fallback"
        assert resolve_config_value(default, "given", {}) == "given"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test os.environ is used when no mapping is passed."""
        monkeypatch.setenv("PANOS_USERNAME", "admin")
        default = DefaultInfo(("PANOS_USERNAME",))
        assert resolve_config_value(default) == "admin"


class TestResolveConfig:
    """Test resolving a whole configuration."""

    def test_resolves_bound_and_passes_unbound(self) -> None:
        """Test bound keys resolve and extra keys survive."""
        config = bind_config_defaults(
            [
                ConfigFieldDefault("hostname", ("PANOS_HOSTNAME",)),
                ConfigFieldDefault("password", ("PANOS_PASSWORD",)),
            ]
        )
        resolved = resolve_config(
            config,
            {"hostname": "explicit-host", "timeout": 10},
            {"PANOS_PASSWORD": "secret"},
        )
        assert resolved == {
            "hostname": "explicit-host",
            "password": "secret",
            "timeout": 10,
        }

    def test_unset_keys_omitted(self) -> None:
        """Test keys with no value anywhere are left out."""
        config = bind_config_defaults([ConfigFieldDefault("api_key", ("PANOS_API_KEY",))])
        assert resolve_config(config, {}, {}) == {}

    def test_explicit_none_omitted(self) -> None:
        """Test explicit None values are dropped for bound and unbound keys."""
        config = bind_config_defaults([ConfigFieldDefault("api_key", ("PANOS_API_KEY",))])
        resolved = resolve_config(config, {"api_key": None, "timeout": None}, {})
        assert resolved == {}


class TestStringValue:
    """Test reading string config values."""

    def test_present_string(self) -> None:
        assert string_value({"hostname": "fw"}, "hostname") == "fw"

    def test_missing_key(self) -> None:
        assert string_value({}, "hostname") == ""

    def test_non_string_value(self) -> None:
        assert string_value({"port": 443}, "port") == ""


class TestPreConfigure:
    """Test the pre-configure hook contract."""

    def test_default_hook_accepts_everything(self) -> None:
        """Test the default hook is a no-op."""
        assert pre_configure_callback({"hostname": "fw"}, object()) is None
        run_pre_configure(_mapping(), {}, None)

    def test_hook_receives_values_and_config(self) -> None:
        """Test the hook is called with resolved values and live config."""
        hook = MagicMock(return_value=None)
        live_config = object()
        run_pre_configure(_mapping(hook), {"hostname": "fw"}, live_config)
        hook.assert_called_once_with({"hostname": "fw"}, live_config)

    def test_rejection_propagates(self) -> None:
        """Test a rejecting hook aborts configuration with its message."""

        def require_hostname(values, _config):
            if not string_value(values, "hostname"):
                raise PreConfigurationError("hostname is required", key="hostname")

        with pytest.raises(PreConfigurationError, match="hostname is required") as exc:
            run_pre_configure(_mapping(require_hostname), {}, None)
        assert exc.value.key == "hostname"
        assert "PANOS_" in str(exc.value)

    def test_missing_hook_is_skipped(self) -> None:
        """Test mappings without a hook configure unconditionally."""
        run_pre_configure(_mapping(None), {}, None)
