# src/formatkit/environment/base.py
"""
Environment Abstraction.

Everything formatkit does with the filesystem or the user-facing log goes
through an Environment so the manifest and resolution code can run against
either the real machine or an in-memory double.

Implementations:
- RealEnvironment: local filesystem, messages routed to `logging`
- InMemoryEnvironment: dict-backed files, messages recorded for assertions
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Environment(ABC):
    """Filesystem and logging capability consumed by formatkit."""

    @abstractmethod
    def read_file(self, file_path: Path) -> str:
        """
        Read a UTF-8 text file.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: For any other read failure
        """
        pass

    @abstractmethod
    def read_file_bytes(self, file_path: Path) -> bytes:
        """Read a file's raw bytes. Same errors as read_file."""
        pass

    @abstractmethod
    def write_file(self, file_path: Path, text: str) -> None:
        """Write (overwrite) a UTF-8 text file, creating parent directories."""
        pass

    @abstractmethod
    def path_exists(self, file_path: Path) -> bool:
        pass

    @abstractmethod
    def remove_dir_all(self, dir_path: Path) -> None:
        """Recursively delete a directory. A missing directory is not an error."""
        pass

    @abstractmethod
    def get_cache_dir(self) -> Path:
        """Root directory of the plugin cache."""
        pass

    @abstractmethod
    def cwd(self) -> Path:
        pass

    @abstractmethod
    def log(self, message: str) -> None:
        pass

    @abstractmethod
    def log_error(self, message: str) -> None:
        pass
