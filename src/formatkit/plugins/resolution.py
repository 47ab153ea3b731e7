# src/formatkit/plugins/resolution.py
"""
Plugin resolution pipeline.

1. Materialize one plugin per configured locator (PluginResolver).
2. Pull each plugin's configuration object out of the shared config map.
3. Build the global configuration from what is left.
4. Hand every plugin its own config plus the global config.
"""

import copy
import logging
from typing import List, Tuple

from formatkit.arg_parser import CliArgs
from formatkit.configuration import (
    ConfigMap,
    ConfigurationError,
    GetGlobalConfigOptions,
    ResolvedConfig,
    get_global_config,
    resolve_config_from_args,
    take_plugin_config_map,
)
from formatkit.environment import Environment
from formatkit.plugins.errors import NoPluginsFoundError, ResolvePluginsError
from formatkit.plugins.plugin import Plugin
from formatkit.plugins.resolver import PluginResolver

logger = logging.getLogger(__name__)


def get_plugins_from_args(
    args: CliArgs,
    environment: Environment,
    plugin_resolver: PluginResolver,
) -> List[Plugin]:
    """
    Resolve plugins straight from CLI arguments.

    Configuration errors yield an empty list; they are reported by whichever
    command resolves the configuration itself.

    Raises:
        ResolvePluginsError: If plugin resolution fails
    """
    try:
        config = resolve_config_from_args(args, environment)
    except ConfigurationError as e:
        logger.debug(f"Ignoring configuration error: {e}")
        return []
    return resolve_plugins(args, config, environment, plugin_resolver)


def resolve_plugins_and_err_if_empty(
    args: CliArgs,
    config: ResolvedConfig,
    environment: Environment,
    plugin_resolver: PluginResolver,
) -> List[Plugin]:
    """
    Raises:
        ResolvePluginsError: If resolution fails
        NoPluginsFoundError: If resolution succeeds with no plugins
    """
    plugins = resolve_plugins(args, config, environment, plugin_resolver)
    if not plugins:
        raise NoPluginsFoundError()
    return plugins


def resolve_plugins(
    args: CliArgs,
    config: ResolvedConfig,
    environment: Environment,
    plugin_resolver: PluginResolver,
) -> List[Plugin]:
    """
    Materialize and configure the plugins named in `config`.

    `config.config_map` is not modified; the pipeline works on its own copy.

    Raises:
        ResolvePluginsError: Wrapping any resolver or configuration failure
    """
    try:
        plugins = plugin_resolver.resolve_plugins(list(config.plugins))
    except Exception as e:
        raise ResolvePluginsError(str(e)) from e

    config_map: ConfigMap = copy.deepcopy(config.config_map)

    try:
        plugins_with_config: List[Tuple[ConfigMap, Plugin]] = []
        for plugin in plugins:
            plugin_config = take_plugin_config_map(plugin.info.config_key, config_map)
            plugins_with_config.append((plugin_config, plugin))

        global_config = get_global_config(
            config_map,
            environment,
            GetGlobalConfigOptions(
                # Plugins passed on the command line filter the configured set,
                # so leftover properties may belong to unselected plugins.
                check_unknown_property_diagnostics=not args.plugins,
            ),
        )
    except Exception as e:
        raise ResolvePluginsError(str(e)) from e

    for plugin_config, plugin in plugins_with_config:
        plugin.set_config(plugin_config, global_config)

    logger.debug(f"Resolved {len(plugins_with_config)} plugin(s)")
    return [plugin for _, plugin in plugins_with_config]
