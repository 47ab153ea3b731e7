# src/formatkit/plugins/errors.py
"""
Errors raised while turning plugin locators into configured plugins.

- PluginResolutionError: a single plugin could not be read, cached or loaded
- ResolvePluginsError: any failure inside the resolution pipeline, wrapped
- NoPluginsFoundError: resolution succeeded but produced no plugins
"""

NO_PLUGINS_FOUND_MESSAGE = (
    "No formatting plugins found. Ensure at least one is specified in the "
    "'plugins' array of the configuration file."
)


class PluginResolutionError(Exception):
    """Raised when a plugin locator cannot be materialized."""
    pass


class ResolvePluginsError(Exception):
    """
    Wraps the underlying failure of a resolution run.

    The message is the cause's message; the cause itself is kept in
    __cause__.
    """
    pass


class NoPluginsFoundError(Exception):
    """Raised when resolution yields zero plugins."""

    def __init__(self, message: str = NO_PLUGINS_FOUND_MESSAGE):
        super().__init__(message)
