"""
formatkit: plugin cache manifest and plugin resolution for a code formatter.

Public surface:
- PluginCacheManifest / read_manifest / write_manifest: persisted plugin metadata
- resolve_plugins / resolve_plugins_and_err_if_empty / get_plugins_from_args
- Environment implementations (RealEnvironment, InMemoryEnvironment)
"""

__version__ = "0.1.0"
