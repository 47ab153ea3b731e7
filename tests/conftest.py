"""
Pytest fixtures and configuration for formatkit tests.
"""
import pytest
from pathlib import Path

from formatkit.config import reset_settings
from formatkit.environment import InMemoryEnvironment, RealEnvironment


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the user's settings file and FORMATKIT_* variables."""
    monkeypatch.setenv("FORMATKIT_SETTINGS_FILE", str(tmp_path / "missing-settings.toml"))
    for name in ("FORMATKIT_CACHE_DIR", "FORMATKIT_CONFIG_FILE_NAME", "FORMATKIT_LOGGING__LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def memory_env() -> InMemoryEnvironment:
    return InMemoryEnvironment(cache_dir=Path("/cache"), cwd=Path("/project"))


@pytest.fixture
def real_env(tmp_path) -> RealEnvironment:
    return RealEnvironment(cache_dir=tmp_path / "cache")
