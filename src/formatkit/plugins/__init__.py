# src/formatkit/plugins/__init__.py
"""
Plugin metadata, caching and resolution.
"""

from formatkit.plugins.types import PluginInfo
from formatkit.plugins.cache_manifest import (
    PluginCacheManifest,
    PluginCacheManifestItem,
    read_manifest,
    write_manifest,
)
from formatkit.plugins.errors import (
    NoPluginsFoundError,
    PluginResolutionError,
    ResolvePluginsError,
)
from formatkit.plugins.plugin import BasePlugin, Plugin
from formatkit.plugins.cache import PluginCache, PluginCacheItem
from formatkit.plugins.resolver import LocalPluginResolver, PluginResolver
from formatkit.plugins.resolution import (
    get_plugins_from_args,
    resolve_plugins,
    resolve_plugins_and_err_if_empty,
)

__all__ = [
    "PluginInfo",
    "PluginCacheManifest",
    "PluginCacheManifestItem",
    "read_manifest",
    "write_manifest",
    "NoPluginsFoundError",
    "PluginResolutionError",
    "ResolvePluginsError",
    "BasePlugin",
    "Plugin",
    "PluginCache",
    "PluginCacheItem",
    "LocalPluginResolver",
    "PluginResolver",
    "get_plugins_from_args",
    "resolve_plugins",
    "resolve_plugins_and_err_if_empty",
]
