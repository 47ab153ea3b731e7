# src/formatkit/environment/real.py
import logging
import shutil
from pathlib import Path
from typing import Optional

from formatkit.config import get_settings
from formatkit.environment.base import Environment

logger = logging.getLogger(__name__)


class RealEnvironment(Environment):
    """
    Environment backed by the local filesystem.

    The cache directory defaults to `AppSettings.cache_dir`.
    """

    def __init__(self, cache_dir: Optional[Path] = None):
        self._cache_dir = Path(cache_dir) if cache_dir else get_settings().cache_dir

    def read_file(self, file_path: Path) -> str:
        return Path(file_path).read_text(encoding="utf-8")

    def read_file_bytes(self, file_path: Path) -> bytes:
        return Path(file_path).read_bytes()

    def write_file(self, file_path: Path, text: str) -> None:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(text, encoding="utf-8")

    def path_exists(self, file_path: Path) -> bool:
        return Path(file_path).exists()

    def remove_dir_all(self, dir_path: Path) -> None:
        dir_path = Path(dir_path)
        if dir_path.exists():
            logger.debug(f"Removing directory {dir_path}")
            shutil.rmtree(dir_path)

    def get_cache_dir(self) -> Path:
        return self._cache_dir

    def cwd(self) -> Path:
        return Path.cwd()

    def log(self, message: str) -> None:
        logger.info(message)

    def log_error(self, message: str) -> None:
        logger.error(message)
