# src/formatkit/plugins/resolver.py
"""
Plugin resolvers: turn plugin locators into Plugin instances.

LocalPluginResolver loads plugins from Python source files. A plugin module
must define a `Handler` class deriving from Plugin:

    from formatkit.plugins import BasePlugin, PluginInfo

    class Handler(BasePlugin):
        INFO = PluginInfo(name="json", version="0.1.0", config_key="json", ...)
"""

import logging
import types
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from formatkit.configuration import is_remote_locator
from formatkit.environment import Environment
from formatkit.plugins.cache import PluginCache
from formatkit.plugins.errors import PluginResolutionError
from formatkit.plugins.plugin import Plugin
from formatkit.plugins.types import PluginInfo

logger = logging.getLogger(__name__)

HANDLER_ATTRIBUTE = "Handler"


class PluginResolver(ABC):
    """Materializes plugins, one instance per locator, in order."""

    @abstractmethod
    def resolve_plugins(self, locators: List[str]) -> List[Plugin]:
        """
        Raises:
            PluginResolutionError: If any locator cannot be materialized
        """
        pass


class LocalPluginResolver(PluginResolver):
    """
    Resolves local Python plugin files through the plugin cache.

    Modules are executed from the cached artifact's text (read through the
    environment) rather than imported from sys.path.
    """

    def __init__(self, environment: Environment, plugin_cache: Optional[PluginCache] = None):
        self.environment = environment
        self.plugin_cache = plugin_cache or PluginCache(environment)

    def resolve_plugins(self, locators: List[str]) -> List[Plugin]:
        try:
            return [self.resolve_plugin(locator) for locator in locators]
        finally:
            self.plugin_cache.save()

    def resolve_plugin(self, locator: str) -> Plugin:
        if is_remote_locator(locator):
            raise PluginResolutionError(f"Remote plugins are not supported: {locator}")

        loaded: Dict[str, Plugin] = {}

        def setup(source_text: str) -> PluginInfo:
            loaded["plugin"] = load_plugin_from_source(source_text, locator)
            return loaded["plugin"].info

        item = self.plugin_cache.get_plugin_cache_item(locator, setup)
        if "plugin" in loaded:
            return loaded["plugin"]

        # A broken artifact is forgotten so the next run rebuilds it from source
        try:
            source_text = self.environment.read_file(item.artifact_path)
        except OSError as e:
            self.plugin_cache.forget(locator)
            raise PluginResolutionError(f"Error reading cached plugin {locator}: {e}") from e

        try:
            return load_plugin_from_source(source_text, str(item.artifact_path))
        except PluginResolutionError:
            self.plugin_cache.forget(locator)
            raise


def load_plugin_from_source(source_text: str, origin: str) -> Plugin:
    """
    Execute plugin source and instantiate its Handler.

    Raises:
        PluginResolutionError: If the module fails to execute or has no valid Handler
    """
    module_name = f"formatkit_plugin_{Path(origin).stem}"
    module = types.ModuleType(module_name)
    module.__file__ = origin

    try:
        code = compile(source_text, origin, "exec")
        exec(code, module.__dict__)
    except Exception as e:
        raise PluginResolutionError(f"Failed to load plugin {origin}: {e}") from e

    # Convention check
    handler = getattr(module, HANDLER_ATTRIBUTE, None)
    if not (isinstance(handler, type) and issubclass(handler, Plugin)):
        raise PluginResolutionError(
            f"Plugin {origin} must define a '{HANDLER_ATTRIBUTE}' class deriving from Plugin"
        )

    try:
        plugin = handler()
        info = plugin.info
    except Exception as e:
        raise PluginResolutionError(f"Failed to initialize plugin {origin}: {e}") from e

    if not isinstance(info, PluginInfo):
        raise PluginResolutionError(f"Plugin {origin} reported invalid info: {info!r}")

    logger.debug(f"Loaded plugin {info.name} {info.version} from {origin}")
    return plugin
