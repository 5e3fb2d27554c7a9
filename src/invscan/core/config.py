# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from invscan.core.constants import OS, Network


def _split_csv(v: object) -> list[str]:
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v if isinstance(v, list) else []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INVSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Environment capabilities
    os: OS = OS.LINUX
    network: Network = Network.ONLINE
    direct_fs: bool = True
    running_system: bool = False
    extract_from_dirs: bool = True

    # Filesystem walk
    max_file_size: int = 0  # 0 disables the limit
    max_inodes: int = 0
    read_symlinks: bool = False
    store_absolute_path: bool = False
    error_on_fs_errors: bool = False
    # Comma separated in the environment, e.g. INVSCAN_DIRS_TO_SKIP=proc,sys
    dirs_to_skip: Annotated[list[str], NoDecode] = []

    @field_validator("dirs_to_skip", mode="before")
    @classmethod
    def _parse_dirs_to_skip(cls, v: object) -> list[str]:
        return _split_csv(v)

    # Plugins
    enabled_plugins: Annotated[list[str], NoDecode] = []
    plugin_module_paths: Annotated[list[str], NoDecode] = []

    @field_validator("enabled_plugins", mode="before")
    @classmethod
    def _parse_enabled_plugins(cls, v: object) -> list[str]:
        return _split_csv(v)

    @field_validator("plugin_module_paths", mode="before")
    @classmethod
    def _parse_plugin_module_paths(cls, v: object) -> list[str]:
        return _split_csv(v)

    # Package registries
    pypi_base_url: str = "https://pypi.org"
    http_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


def get_settings() -> Settings:
    return Settings()
