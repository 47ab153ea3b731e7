# src/formatkit/environment/memory.py
from pathlib import Path
from typing import Dict, List

from formatkit.environment.base import Environment


class InMemoryEnvironment(Environment):
    """
    Dict-backed environment that records every logged message.

    Used by tests; nothing touches the real filesystem.
    """

    def __init__(
        self,
        cache_dir: Path = Path("/cache"),
        cwd: Path = Path("/project"),
    ):
        self._cache_dir = Path(cache_dir)
        self._cwd = Path(cwd)
        self._files: Dict[Path, bytes] = {}
        self._logged_messages: List[str] = []
        self._logged_errors: List[str] = []

    def read_file(self, file_path: Path) -> str:
        return self.read_file_bytes(file_path).decode("utf-8")

    def read_file_bytes(self, file_path: Path) -> bytes:
        try:
            return self._files[Path(file_path)]
        except KeyError:
            raise FileNotFoundError(f"File not found: {file_path}") from None

    def write_file(self, file_path: Path, text: str) -> None:
        self._files[Path(file_path)] = text.encode("utf-8")

    def path_exists(self, file_path: Path) -> bool:
        file_path = Path(file_path)
        return any(
            path == file_path or file_path in path.parents for path in self._files
        )

    def remove_dir_all(self, dir_path: Path) -> None:
        dir_path = Path(dir_path)
        for path in list(self._files):
            if path == dir_path or dir_path in path.parents:
                del self._files[path]

    def get_cache_dir(self) -> Path:
        return self._cache_dir

    def cwd(self) -> Path:
        return self._cwd

    def log(self, message: str) -> None:
        self._logged_messages.append(message)

    def log_error(self, message: str) -> None:
        self._logged_errors.append(message)

    def take_logged_messages(self) -> List[str]:
        """Return and clear the recorded info messages."""
        messages, self._logged_messages = self._logged_messages, []
        return messages

    def take_logged_errors(self) -> List[str]:
        """Return and clear the recorded error messages."""
        errors, self._logged_errors = self._logged_errors, []
        return errors

    def file_paths(self) -> List[Path]:
        return sorted(self._files)
