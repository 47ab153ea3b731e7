# src/formatkit/plugins/cache_manifest.py
"""
Plugin Cache Manifest.

Persisted record of the plugins that have been resolved before, stored at
`<cache-root>/plugin-cache-manifest.json` next to the `plugins/` artifact
directory.

Loading never fails: a manifest that cannot be trusted is logged, the
cached state is discarded, and an empty manifest is returned.
- Unparseable JSON or a malformed structure: the whole cache root is removed.
- A well-formed manifest with an unknown schema version: only `plugins/` is removed.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, StrictInt, ValidationError

from formatkit.environment import Environment
from formatkit.models import CamelModel
from formatkit.plugins.types import PluginInfo

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
MANIFEST_FILE_NAME = "plugin-cache-manifest.json"
PLUGINS_DIR_NAME = "plugins"


class PluginCacheManifestItem(CamelModel):
    """Metadata for one cached plugin."""

    # Seconds since epoch
    created_time: StrictInt = Field(ge=0)
    # 64-bit hash of the plugin's source, absent when not computed
    file_hash: Optional[StrictInt] = Field(default=None, ge=0, lt=2**64)
    info: PluginInfo


class PluginCacheManifest(CamelModel):
    """
    In-memory manifest keyed by plugin identity (usually the resolved locator).
    """

    schema_version: StrictInt = Field(ge=0)
    plugins: Dict[str, PluginCacheManifestItem]

    @classmethod
    def new(cls) -> "PluginCacheManifest":
        """Empty manifest at the current schema version."""
        return cls(schema_version=SCHEMA_VERSION, plugins={})

    def add_item(self, key: str, item: PluginCacheManifestItem) -> None:
        """Insert or replace the entry stored under `key`."""
        self.plugins[key] = item

    def get_item(self, key: str) -> Optional[PluginCacheManifestItem]:
        return self.plugins.get(key)

    def remove_item(self, key: str) -> Optional[PluginCacheManifestItem]:
        return self.plugins.pop(key, None)


def get_manifest_file_path(environment: Environment) -> Path:
    return environment.get_cache_dir() / MANIFEST_FILE_NAME


def get_plugins_dir(environment: Environment) -> Path:
    return environment.get_cache_dir() / PLUGINS_DIR_NAME


def read_manifest(environment: Environment) -> PluginCacheManifest:
    """
    Load the manifest from the cache root.

    Returns:
        The stored manifest, or a fresh empty one when the file is missing
        or was discarded as corrupt.
    """
    file_path = get_manifest_file_path(environment)
    try:
        data = environment.read_file_bytes(file_path)
    except OSError:
        return PluginCacheManifest.new()

    # An interrupted write can cut a multi-byte character in half
    try:
        manifest = PluginCacheManifest.model_validate(json.loads(data.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError, ValidationError) as e:
        environment.log_error(
            f"Error deserializing plugin cache manifest, but ignoring: {e}"
        )
        _discard(environment, environment.get_cache_dir())
        return PluginCacheManifest.new()

    if manifest.schema_version != SCHEMA_VERSION:
        environment.log_error(
            "Error deserializing plugin cache manifest, but ignoring: "
            f"Schema version was {manifest.schema_version}, but expected {SCHEMA_VERSION}"
        )
        _discard(environment, get_plugins_dir(environment))
        return PluginCacheManifest.new()

    return manifest


def write_manifest(manifest: PluginCacheManifest, environment: Environment) -> None:
    """
    Overwrite the manifest file. Serialization and I/O errors propagate.
    """
    file_path = get_manifest_file_path(environment)
    serialized = manifest.model_dump_json(by_alias=True, exclude_none=True)
    environment.write_file(file_path, serialized)
    logger.debug(f"Wrote plugin cache manifest with {len(manifest.plugins)} item(s)")


def _discard(environment: Environment, dir_path: Path) -> None:
    """Remove cached state after corruption; failure only downgrades to a warning."""
    try:
        environment.remove_dir_all(dir_path)
    except OSError as e:
        logger.warning(f"Failed to remove corrupted cache directory {dir_path}: {e}")
