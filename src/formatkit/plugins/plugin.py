# src/formatkit/plugins/plugin.py
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from formatkit.configuration import ConfigMap, GlobalConfiguration
from formatkit.plugins.types import PluginInfo


class Plugin(ABC):
    """
    A materialized formatting plugin.

    The resolution pipeline calls set_config() exactly once with the plugin's
    own configuration object and the shared global configuration.
    """

    @property
    @abstractmethod
    def info(self) -> PluginInfo:
        pass

    @abstractmethod
    def set_config(self, plugin_config: ConfigMap, global_config: GlobalConfiguration) -> None:
        pass

    @abstractmethod
    def get_config(self) -> Tuple[ConfigMap, GlobalConfiguration]:
        """
        Raises:
            RuntimeError: If called before set_config()
        """
        pass


class BasePlugin(Plugin):
    """
    Convenience base for plugin modules.

    Subclasses set the INFO class attribute:

        class Handler(BasePlugin):
            INFO = PluginInfo(name="json", version="0.1.0", config_key="json", ...)
    """

    INFO: Optional[PluginInfo] = None

    def __init__(self):
        self._plugin_config: Optional[ConfigMap] = None
        self._global_config: Optional[GlobalConfiguration] = None

    @property
    def info(self) -> PluginInfo:
        if self.INFO is None:
            raise NotImplementedError(f"{type(self).__name__} must define INFO")
        return self.INFO

    def set_config(self, plugin_config: ConfigMap, global_config: GlobalConfiguration) -> None:
        self._plugin_config = plugin_config
        self._global_config = global_config

    def get_config(self) -> Tuple[ConfigMap, GlobalConfiguration]:
        if self._plugin_config is None or self._global_config is None:
            raise RuntimeError("Config not loaded! Plugin not configured.")
        return self._plugin_config, self._global_config
