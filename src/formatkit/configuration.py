# src/formatkit/configuration.py
"""
User configuration resolution.

The configuration file is a JSON object:

    {
        "$schema": "...",
        "lineWidth": 100,
        "plugins": ["./plugins/json_plugin.py"],
        "json": { "indentWidth": 2 }
    }

`plugins` lists plugin locators. Each plugin claims the object stored under
its `config_key`; the known global properties form the GlobalConfiguration
and anything left over is reported as an unknown property.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from formatkit.arg_parser import CliArgs
from formatkit.config import AppSettings, get_settings
from formatkit.environment import Environment
from formatkit.models import CamelModel

logger = logging.getLogger(__name__)

ConfigMap = Dict[str, Any]


class ConfigurationError(Exception):
    """Raised when the user's configuration cannot be resolved."""

    def __init__(self, message: str, diagnostics: Optional[List["ConfigurationDiagnostic"]] = None):
        super().__init__(message)
        self.diagnostics = diagnostics or []


@dataclass
class ConfigurationDiagnostic:
    property_name: str
    message: str


@dataclass
class ResolvedConfig:
    """Configuration file contents after plugin locators are pulled out."""

    config_file_path: Optional[Path]
    plugins: List[str]
    # Everything except "$schema" and "plugins"
    config_map: ConfigMap = field(default_factory=dict)


@dataclass
class GetGlobalConfigOptions:
    check_unknown_property_diagnostics: bool = True


class GlobalConfiguration(CamelModel):
    """Settings shared by every plugin."""

    model_config = ConfigDict(strict=True, frozen=True)

    line_width: Optional[int] = Field(default=None, gt=0)
    indent_width: Optional[int] = Field(default=None, gt=0)
    use_tabs: Optional[bool] = None
    new_line_kind: Optional[Literal["auto", "lf", "crlf", "system"]] = None


GLOBAL_PROPERTY_NAMES = [to_camel(name) for name in GlobalConfiguration.model_fields]


def is_remote_locator(locator: str) -> bool:
    return "://" in locator


def resolve_plugin_locator(locator: str, base_dir: Path) -> str:
    """Make a local plugin path absolute; URLs are returned untouched."""
    if is_remote_locator(locator):
        return locator
    path = Path(locator)
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


def resolve_config_from_args(
    args: CliArgs,
    environment: Environment,
    settings: Optional[AppSettings] = None,
) -> ResolvedConfig:
    """
    Read and parse the configuration file selected by the CLI arguments.

    Plugin locators from the file are resolved against the file's directory;
    locators given with --plugins replace them and resolve against the cwd.

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    settings = settings or get_settings()
    cwd = environment.cwd()
    if args.config:
        config_path = Path(args.config)
        if not config_path.is_absolute():
            config_path = cwd / config_path
    else:
        config_path = cwd / settings.config_file_name

    try:
        text = environment.read_file(config_path)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Could not find configuration file at {config_path}") from e
    except OSError as e:
        raise ConfigurationError(f"Error reading configuration file {config_path}: {e}") from e

    try:
        config_map = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing configuration file {config_path}: {e}") from e

    if not isinstance(config_map, dict):
        raise ConfigurationError(
            f"Expected the configuration file {config_path} to contain an object."
        )

    config_map.pop("$schema", None)
    file_plugins = config_map.pop("plugins", [])
    if not isinstance(file_plugins, list) or not all(isinstance(p, str) for p in file_plugins):
        raise ConfigurationError("Expected 'plugins' to be an array of strings.")

    if args.plugins:
        plugins = [resolve_plugin_locator(p, cwd) for p in args.plugins]
    else:
        plugins = [resolve_plugin_locator(p, config_path.parent) for p in file_plugins]

    logger.debug(f"Resolved configuration {config_path} with {len(plugins)} plugin(s)")
    return ResolvedConfig(config_file_path=config_path, plugins=plugins, config_map=config_map)


def take_plugin_config_map(config_key: str, config_map: ConfigMap) -> ConfigMap:
    """
    Remove and return the object stored under `config_key`.

    A missing key gives an empty map.

    Raises:
        ConfigurationError: If the value is not an object
    """
    value = config_map.pop(config_key, None)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(
            f"Expected the configuration property '{config_key}' to be an object."
        )
    return value


def get_global_config(
    config_map: ConfigMap,
    environment: Environment,
    options: Optional[GetGlobalConfigOptions] = None,
) -> GlobalConfiguration:
    """
    Build the global configuration from what remains after plugin extraction.

    Every diagnostic is logged through the environment before raising.

    Raises:
        ConfigurationError: On invalid global values, or leftover properties
            when options.check_unknown_property_diagnostics is set
    """
    options = options or GetGlobalConfigOptions()
    remaining = dict(config_map)
    known = {name: remaining.pop(name) for name in GLOBAL_PROPERTY_NAMES if name in remaining}

    diagnostics: List[ConfigurationDiagnostic] = []
    global_config = None
    try:
        global_config = GlobalConfiguration.model_validate(known)
    except ValidationError as e:
        for error in e.errors():
            property_name = str(error["loc"][0]) if error["loc"] else ""
            diagnostics.append(ConfigurationDiagnostic(property_name, error["msg"]))

    if options.check_unknown_property_diagnostics:
        for property_name in remaining:
            diagnostics.append(
                ConfigurationDiagnostic(property_name, "Unknown property in configuration.")
            )

    if diagnostics:
        for diagnostic in diagnostics:
            environment.log_error(f"[{diagnostic.property_name}] {diagnostic.message}")
        raise ConfigurationError(
            f"Had {len(diagnostics)} config diagnostic(s).", diagnostics=diagnostics
        )

    return global_config
