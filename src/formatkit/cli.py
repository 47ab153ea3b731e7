# src/formatkit/cli.py
"""
formatkit command-line interface.

Commands:
- resolve: resolve the configured plugins and print one line per plugin
- file-extensions: print the file extensions the configured plugins handle
- clear-cache: delete the plugin cache directory
"""

import logging
import sys
from typing import List, Optional, TextIO

from formatkit.arg_parser import CliArgs, parse_args
from formatkit.config import get_settings
from formatkit.configuration import ConfigurationError, resolve_config_from_args
from formatkit.environment import Environment, RealEnvironment
from formatkit.logging_setup import setup_logging
from formatkit.plugins import (
    LocalPluginResolver,
    NoPluginsFoundError,
    PluginResolver,
    ResolvePluginsError,
    get_plugins_from_args,
    resolve_plugins_and_err_if_empty,
)

logger = logging.getLogger(__name__)


def run(
    args: CliArgs,
    environment: Environment,
    plugin_resolver: Optional[PluginResolver] = None,
    out: Optional[TextIO] = None,
) -> int:
    """
    Execute one command and return the process exit code.

    Raises:
        ConfigurationError, ResolvePluginsError, NoPluginsFoundError
    """
    if out is None:
        out = sys.stdout
    if args.command == "clear-cache":
        cache_dir = environment.get_cache_dir()
        environment.remove_dir_all(cache_dir)
        print(f"Deleted {cache_dir}", file=out)
        return 0

    plugin_resolver = plugin_resolver or LocalPluginResolver(environment)

    if args.command == "file-extensions":
        plugins = get_plugins_from_args(args, environment, plugin_resolver)
        extensions = sorted({ext for plugin in plugins for ext in plugin.info.file_extensions})
        for ext in extensions:
            print(ext, file=out)
        return 0

    config = resolve_config_from_args(args, environment)
    plugins = resolve_plugins_and_err_if_empty(args, config, environment, plugin_resolver)
    for plugin in plugins:
        info = plugin.info
        print(
            f"{info.name} {info.version} [{info.config_key}] {', '.join(info.file_extensions)}",
            file=out,
        )
    return 0


def main(argv: Optional[List[str]] = None):
    """CLI entry point for formatkit."""
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings, level_override="DEBUG" if args.verbose else None)
    environment = RealEnvironment(settings.cache_dir)

    try:
        exit_code = run(args, environment)
    except (ConfigurationError, ResolvePluginsError, NoPluginsFoundError) as e:
        logger.error(str(e))
        exit_code = 1
    except OSError as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
