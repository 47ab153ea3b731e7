# src/formatkit/config.py
"""
formatkit application settings.

Settings are loaded (highest priority first) from:
- keyword arguments passed to AppSettings()
- the TOML settings file (~/.config/formatkit/settings.toml or FORMATKIT_SETTINGS_FILE)
- FORMATKIT_* environment variables (nested with "__", e.g. FORMATKIT_LOGGING__LEVEL)
- .env file and secrets directory
"""
import os
from pathlib import Path
from typing import Callable, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    TomlConfigSettingsSource,
    InitSettingsSource,
    EnvSettingsSource,
    DotEnvSettingsSource,
    SecretsSettingsSource,
)

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "formatkit" / "settings.toml"
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "formatkit"


def get_settings_path() -> Path:
    """Location of the TOML settings file, overridable via FORMATKIT_SETTINGS_FILE."""
    override = os.environ.get("FORMATKIT_SETTINGS_FILE")
    if override:
        return Path(override)
    return DEFAULT_SETTINGS_PATH


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    log_to_file: bool = False
    log_file: str = "formatkit.log"
    rotation_size_mb: int = 10
    rotation_backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppSettings(BaseSettings):
    """
    Main settings class that loads configuration from various sources.
    Uses defaults if the file or keys are missing.
    """

    cache_dir: Path = DEFAULT_CACHE_DIR
    config_file_name: str = "formatkit.json"
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="FORMATKIT_",
        env_nested_delimiter="__",
        extra="forbid",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: InitSettingsSource,
        env_settings: EnvSettingsSource,
        dotenv_settings: DotEnvSettingsSource,
        file_secret_settings: SecretsSettingsSource,
    ) -> Tuple[Callable, ...]:
        """
        Define the priority order for loading settings sources.
        The TOML file sits right after explicit init arguments.
        """
        return (
            init_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=get_settings_path()),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )


# Singleton instance (lazy-loaded)
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get the singleton AppSettings instance, created on first access."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
