from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from core.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class StorageSettings(BaseModel):
    backend: Literal["s3", "local"] = "s3"
    bucket: str
    region: str | None = None
    # S3-compatible endpoint (MinIO, Ceph, ...); None means AWS
    endpoint_url: str | None = None
    path_style_access: bool = False
    max_attempts: int = Field(3, ge=1, le=20)
    local_root: Path = Path("data/storage")

    @field_validator("bucket")
    @classmethod
    def _bucket_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("bucket must not be blank")
        return value.strip()


class ApiSettings(BaseModel):
    public_url: str

    @field_validator("public_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("public_url must not be blank")
        return value


class Settings(BaseModel):
    storage: StorageSettings
    api: ApiSettings

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                SBOM_STORAGE_CONFIG environment variable or defaults to
                config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing or its content is invalid.
        """
        config_path = path or Path(os.getenv("SBOM_STORAGE_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        with config_path.open("r", encoding="utf-8") as fp:
            payload = yaml.safe_load(fp) or {}
        try:
            return cls(**payload)
        except (ValidationError, TypeError) as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc}",
                {"path": str(config_path)},
            ) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "ApiSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
