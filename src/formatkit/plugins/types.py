# src/formatkit/plugins/types.py
"""
Plugin metadata shared by the cache manifest and the resolver.
"""

from typing import List

from formatkit.models import CamelModel


class PluginInfo(CamelModel):
    """
    Descriptor a plugin reports about itself.

    `config_key` is the top-level property in the user's configuration
    whose object value holds this plugin's settings.
    """

    name: str
    version: str
    config_key: str
    file_extensions: List[str]
    help_url: str
    config_schema_url: str
