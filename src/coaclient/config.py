"""Configuration for coaclient.

Created: 2026-10-19

Settings are read from environment variables prefixed with ``COACLIENT_``
(or a local ``.env`` file). Stores take a ``Settings`` instance explicitly so
tests can point them at a temporary directory; ``get_settings()`` returns the
cached process-wide instance used by the CLI.
"""

import string
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE64_ALPHABET = set(string.ascii_letters + string.digits + "+/=")
_PATH_SEPARATORS = ("/", "\\", "\0")


class Settings(BaseSettings):
    """Storage layout and logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="COACLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage_dir: Path = Field(
        default_factory=lambda: Path.home() / ".coursera",
        description="Directory holding the config file and all token files",
    )
    config_file_name: str = Field(
        default="coaclient.csv",
        description="Shared file listing registered client applications",
    )
    token_file_suffix: str = Field(
        default="_aout2.csv",
        description="Suffix appended to a client name to form its token file name",
    )
    separator: str = Field(default=",", description="Field separator for all files")
    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    @field_validator("storage_dir")
    @classmethod
    def expand_storage_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        # Encoded tokens and joined scopes must never contain the separator.
        if len(v) != 1:
            raise ValueError("separator must be a single character")
        if v in _BASE64_ALPHABET or v in "\r\n":
            raise ValueError(f"separator {v!r} collides with encoded token text")
        return v

    @property
    def config_path(self) -> Path:
        return self.storage_dir / self.config_file_name

    def token_path(self, client_name: str) -> Path:
        """Path of the token file for ``client_name``.

        Raises ValueError if the name is empty or contains a path separator,
        so a token file can never land outside ``storage_dir``.
        """
        if not client_name or any(s in client_name for s in _PATH_SEPARATORS):
            raise ValueError(f"Invalid client name for a token file: {client_name!r}")
        return self.storage_dir / f"{client_name}{self.token_file_suffix}"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()

