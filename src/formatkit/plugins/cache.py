# src/formatkit/plugins/cache.py
"""
Manifest-backed plugin artifact cache.

Layout under the cache root:
    plugin-cache-manifest.json
    plugins/{name}/{version}-{file_hash:016x}/plugin.py

A cached artifact is reused while the plugin source hashes to the value
recorded in the manifest. The manifest is loaded once per PluginCache and
written back by save().
"""

import hashlib
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from formatkit.environment import Environment
from formatkit.plugins.cache_manifest import (
    PluginCacheManifestItem,
    get_plugins_dir,
    read_manifest,
    write_manifest,
)
from formatkit.plugins.errors import PluginResolutionError
from formatkit.plugins.types import PluginInfo

logger = logging.getLogger(__name__)

ARTIFACT_FILE_NAME = "plugin.py"
_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@dataclass
class PluginCacheItem:
    artifact_path: Path
    info: PluginInfo


def compute_file_hash(data: bytes) -> int:
    """64-bit content hash: the first 8 bytes of SHA-256, big-endian."""
    return int.from_bytes(hashlib.sha256(data).digest()[:8], "big")


class PluginCache:
    """
    Tracks materialized plugins in the cache manifest.

    Keys are plugin locators as resolved by the configuration layer.
    """

    def __init__(self, environment: Environment):
        self.environment = environment
        self.manifest = read_manifest(environment)
        self._dirty = False

    def get_artifact_dir(self, info: PluginInfo, file_hash: int) -> Path:
        name = _UNSAFE_PATH_CHARS.sub("_", info.name)
        version = _UNSAFE_PATH_CHARS.sub("_", info.version)
        return get_plugins_dir(self.environment) / name / f"{version}-{file_hash:016x}"

    def get_plugin_cache_item(
        self,
        locator: str,
        setup: Callable[[str], PluginInfo],
    ) -> PluginCacheItem:
        """
        Return the cached artifact for `locator`, creating it on a miss.

        Args:
            locator: Path of the plugin source
            setup: Called with the source text on a miss; returns the plugin's info

        Raises:
            PluginResolutionError: If the source cannot be read or decoded
        """
        try:
            source = self.environment.read_file_bytes(Path(locator))
        except OSError as e:
            raise PluginResolutionError(f"Error reading plugin {locator}: {e}") from e

        file_hash = compute_file_hash(source)
        item = self.manifest.get_item(locator)
        if item is not None:
            if item.file_hash == file_hash:
                artifact_path = self.get_artifact_dir(item.info, file_hash) / ARTIFACT_FILE_NAME
                if self.environment.path_exists(artifact_path):
                    logger.debug(f"Plugin cache hit for {locator}")
                    return PluginCacheItem(artifact_path=artifact_path, info=item.info)
            logger.info(f"Cached plugin {locator} is stale, refreshing")
            self.forget(locator)

        try:
            source_text = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PluginResolutionError(f"Plugin {locator} is not valid UTF-8: {e}") from e

        info = setup(source_text)
        artifact_path = self.get_artifact_dir(info, file_hash) / ARTIFACT_FILE_NAME
        self.environment.write_file(artifact_path, source_text)
        self.manifest.add_item(
            locator,
            PluginCacheManifestItem(
                created_time=int(time.time()),
                file_hash=file_hash,
                info=info,
            ),
        )
        self._dirty = True
        logger.info(f"Cached plugin {info.name} {info.version} from {locator}")
        return PluginCacheItem(artifact_path=artifact_path, info=info)

    def forget(self, locator: str) -> None:
        """Drop the manifest entry for `locator` and delete its artifact."""
        item = self.manifest.remove_item(locator)
        if item is None:
            return
        self._dirty = True
        if item.file_hash is not None:
            self.environment.remove_dir_all(self.get_artifact_dir(item.info, item.file_hash))
        logger.debug(f"Forgot cached plugin {locator}")

    def save(self) -> None:
        """Persist the manifest if anything changed since it was loaded."""
        if not self._dirty:
            return
        write_manifest(self.manifest, self.environment)
        self._dirty = False
