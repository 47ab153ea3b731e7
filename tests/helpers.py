"""
Shared builders for formatkit tests.
"""
from formatkit.plugins import BasePlugin, PluginInfo, PluginResolver


def make_info(name: str = "formatkit-plugin-json", config_key: str = "json", version: str = "0.2.0") -> PluginInfo:
    return PluginInfo(
        name=name,
        version=version,
        config_key=config_key,
        file_extensions=[f".{config_key}"],
        help_url="help url",
        config_schema_url="schema url",
    )


def make_plugin_source(name: str, config_key: str, extensions=(".txt",), version: str = "0.1.0") -> str:
    """Source of a plugin module the LocalPluginResolver can load."""
    return f'''
from formatkit.plugins import BasePlugin, PluginInfo


class Handler(BasePlugin):
    INFO = PluginInfo(
        name={name!r},
        version={version!r},
        config_key={config_key!r},
        file_extensions={list(extensions)!r},
        help_url="https://example.com/{name}",
        config_schema_url="https://example.com/{name}/schema.json",
    )
    origin = __file__
'''


class StubPlugin(BasePlugin):
    def __init__(self, info: PluginInfo):
        super().__init__()
        self.INFO = info


class StubResolver(PluginResolver):
    """Returns preset plugins (or raises) and records the locators it was given."""

    def __init__(self, plugins=None, error: Exception = None):
        self.plugins = list(plugins or [])
        self.error = error
        self.calls = []

    def resolve_plugins(self, locators):
        self.calls.append(list(locators))
        if self.error is not None:
            raise self.error
        return list(self.plugins)
