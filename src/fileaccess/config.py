"""Configuration management for the file access service."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOME_DIR_NAME = ".sip-communicator"


@runtime_checkable
class ConfigurationService(Protocol):
    """Supplies the fragments the home storage root is built from."""

    def sc_home_dir_location(self) -> str:
        """Platform home directory, e.g. ``/home/alice``."""

    def sc_home_dir_name(self) -> str:
        """Application sub-directory name, e.g. ``.sip-communicator``."""


@dataclass(frozen=True)
class StaticConfiguration:
    """Fixed fragments, handy for embedding and tests."""

    location: str
    name: str

    def sc_home_dir_location(self) -> str:
        return self.location

    def sc_home_dir_name(self) -> str:
        return self.name


class Settings(BaseSettings):
    """Centralised runtime configuration for the service."""

    model_config = SettingsConfigDict(
        env_prefix="FILEACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )

    # Home storage
    home_dir_location: Path = Field(
        default_factory=Path.home,
        description="Platform home directory the application root lives under.",
    )
    home_dir_name: str = Field(
        default=DEFAULT_HOME_DIR_NAME,
        description="Name of the application's sub-directory inside the home directory.",
    )

    # Temp artifacts
    temp_dir: Optional[Path] = Field(
        default=None,
        description="Directory for temp files; the OS default when unset.",
    )

    # HTTP surface
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    @field_validator("home_dir_location", "temp_dir", "log_file", mode="before")
    @classmethod
    def _expand_user(cls, value: Path | str | None) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value).expanduser()

    @field_validator("home_dir_name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("home_dir_name must not be blank.")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()

    def sc_home_dir_location(self) -> str:
        return str(self.home_dir_location)

    def sc_home_dir_name(self) -> str:
        return self.home_dir_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
