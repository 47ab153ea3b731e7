# tests/test_configuration.py
"""
Tests for user configuration resolution and the global configuration.

Tests:
- Locating and parsing the configuration file
- Plugin locator resolution and the --plugins override
- Per-plugin extraction from the shared config map
- Global configuration validation and unknown-property diagnostics
"""

import json
import pytest
from pathlib import Path

from formatkit.arg_parser import CliArgs
from formatkit.config import AppSettings
from formatkit.configuration import (
    ConfigurationError,
    GetGlobalConfigOptions,
    GlobalConfiguration,
    get_global_config,
    resolve_config_from_args,
    resolve_plugin_locator,
    take_plugin_config_map,
)


def write_config(env, data, path="/project/formatkit.json"):
    env.write_file(Path(path), json.dumps(data))


class TestResolveConfigFromArgs:
    """Tests for reading the configuration file."""

    def test_default_config_file_in_cwd(self, memory_env):
        write_config(memory_env, {
            "$schema": "https://example.com/schema.json",
            "lineWidth": 80,
            "plugins": ["plugins/json.py"],
            "json": {"indentWidth": 2},
        })

        config = resolve_config_from_args(CliArgs(), memory_env)

        assert config.config_file_path == Path("/project/formatkit.json")
        assert config.plugins == ["/project/plugins/json.py"]
        assert config.config_map == {"lineWidth": 80, "json": {"indentWidth": 2}}

    def test_config_file_name_from_settings(self, memory_env):
        write_config(memory_env, {"plugins": []}, path="/project/.formatkitrc.json")
        settings = AppSettings(config_file_name=".formatkitrc.json")

        config = resolve_config_from_args(CliArgs(), memory_env, settings=settings)

        assert config.config_file_path == Path("/project/.formatkitrc.json")

    def test_explicit_config_path_resolves_plugins_relative_to_file(self, memory_env):
        write_config(memory_env, {"plugins": ["p.py", "/abs/q.py"]}, path="/project/conf/x.json")

        config = resolve_config_from_args(CliArgs(config="conf/x.json"), memory_env)

        assert config.plugins == ["/project/conf/p.py", "/abs/q.py"]

    def test_cli_plugins_replace_configured_plugins(self, memory_env):
        write_config(memory_env, {"plugins": ["a.py"], "a": {}})

        config = resolve_config_from_args(CliArgs(plugins=["tools/b.py"]), memory_env)

        assert config.plugins == ["/project/tools/b.py"]
        assert config.config_map == {"a": {}}

    def test_remote_locators_untouched(self, memory_env):
        url = "https://plugins.example.com/json-0.2.0.py"
        write_config(memory_env, {"plugins": [url]})

        assert resolve_config_from_args(CliArgs(), memory_env).plugins == [url]

    def test_missing_plugins_property_gives_empty_list(self, memory_env):
        write_config(memory_env, {"lineWidth": 80})

        assert resolve_config_from_args(CliArgs(), memory_env).plugins == []

    def test_missing_file(self, memory_env):
        with pytest.raises(ConfigurationError, match="Could not find configuration file"):
            resolve_config_from_args(CliArgs(), memory_env)

    def test_invalid_json(self, memory_env):
        memory_env.write_file(Path("/project/formatkit.json"), "{ lineWidth: 80 }")

        with pytest.raises(ConfigurationError, match="Error parsing configuration file"):
            resolve_config_from_args(CliArgs(), memory_env)

    def test_root_must_be_object(self, memory_env):
        write_config(memory_env, ["a.py"])

        with pytest.raises(ConfigurationError, match="to contain an object"):
            resolve_config_from_args(CliArgs(), memory_env)

    @pytest.mark.parametrize("plugins", ["a.py", [1, 2], {"a": "b"}])
    def test_plugins_must_be_string_array(self, memory_env, plugins):
        write_config(memory_env, {"plugins": plugins})

        with pytest.raises(ConfigurationError, match="array of strings"):
            resolve_config_from_args(CliArgs(), memory_env)


class TestResolvePluginLocator:
    """Tests for locator normalization."""

    def test_relative_path(self):
        assert resolve_plugin_locator("a/b.py", Path("/base")) == str(Path("/base/a/b.py"))

    def test_absolute_path(self):
        assert resolve_plugin_locator("/x/y.py", Path("/base")) == str(Path("/x/y.py"))

    def test_url(self):
        assert resolve_plugin_locator("http://host/p.py", Path("/base")) == "http://host/p.py"


class TestTakePluginConfigMap:
    """Tests for extracting one plugin's configuration."""

    def test_removes_and_returns_object(self):
        config_map = {"json": {"indentWidth": 2}, "lineWidth": 80}

        assert take_plugin_config_map("json", config_map) == {"indentWidth": 2}
        assert config_map == {"lineWidth": 80}

    def test_absent_key_gives_empty_map(self):
        config_map = {"lineWidth": 80}

        assert take_plugin_config_map("json", config_map) == {}
        assert config_map == {"lineWidth": 80}

    def test_non_object_value_is_an_error(self):
        with pytest.raises(ConfigurationError, match="'json' to be an object"):
            take_plugin_config_map("json", {"json": True})


class TestGetGlobalConfig:
    """Tests for the global configuration and its diagnostics."""

    def test_known_properties(self, memory_env):
        global_config = get_global_config(
            {"lineWidth": 100, "indentWidth": 4, "useTabs": True, "newLineKind": "lf"},
            memory_env,
        )

        assert global_config == GlobalConfiguration(
            line_width=100, indent_width=4, use_tabs=True, new_line_kind="lf"
        )

    def test_empty_map_gives_defaults(self, memory_env):
        assert get_global_config({}, memory_env) == GlobalConfiguration()

    def test_does_not_modify_input(self, memory_env):
        config_map = {"lineWidth": 100}

        get_global_config(config_map, memory_env)

        assert config_map == {"lineWidth": 100}

    def test_unknown_property_is_diagnosed(self, memory_env):
        with pytest.raises(ConfigurationError, match=r"Had 1 config diagnostic\(s\)") as exc_info:
            get_global_config({"lineWidth": 80, "typescript": {}}, memory_env)

        assert [d.property_name for d in exc_info.value.diagnostics] == ["typescript"]
        assert memory_env.take_logged_errors() == [
            "[typescript] Unknown property in configuration."
        ]

    def test_unknown_property_allowed_when_check_disabled(self, memory_env):
        global_config = get_global_config(
            {"lineWidth": 80, "typescript": {}},
            memory_env,
            GetGlobalConfigOptions(check_unknown_property_diagnostics=False),
        )

        assert global_config.line_width == 80
        assert memory_env.take_logged_errors() == []

    @pytest.mark.parametrize("config_map,property_name", [
        ({"lineWidth": "80"}, "lineWidth"),
        ({"lineWidth": 0}, "lineWidth"),
        ({"useTabs": "yes"}, "useTabs"),
        ({"newLineKind": "cr"}, "newLineKind"),
    ])
    def test_invalid_values_are_diagnosed(self, memory_env, config_map, property_name):
        with pytest.raises(ConfigurationError) as exc_info:
            get_global_config(config_map, memory_env)

        assert [d.property_name for d in exc_info.value.diagnostics] == [property_name]
        errors = memory_env.take_logged_errors()
        assert len(errors) == 1
        assert errors[0].startswith(f"[{property_name}] ")

    def test_invalid_values_diagnosed_even_when_unknown_check_disabled(self, memory_env):
        with pytest.raises(ConfigurationError):
            get_global_config(
                {"indentWidth": -1},
                memory_env,
                GetGlobalConfigOptions(check_unknown_property_diagnostics=False),
            )
