"""Runtime configuration for the photo album service.

Settings are read from environment variables once per process and
validated with pydantic. Any invalid or missing value fails fast with a
RuntimeError, before any request is handled.
"""

import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.utils.constants import (
    DEFAULT_ALLOWED_MIME_TYPES,
    DEFAULT_BUCKET_NAME,
    DEFAULT_MAX_FILE_SIZE_BYTES,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_DATABASE_URL,
    ENV_PHOTO_ALLOWED_MIME_TYPES,
    ENV_PHOTO_MAX_FILE_SIZE_BYTES,
    ENV_PHOTO_S3_BUCKET_NAME,
)


class PhotoAlbumSettings(BaseModel):
    """Validated configuration consumed by services and adapters."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    database_url: str = Field(..., min_length=1, description="SQLAlchemy database URL")
    bucket_name: str = Field(DEFAULT_BUCKET_NAME, min_length=3, max_length=63)
    endpoint_url: str | None = Field(None, description="Custom S3 endpoint (LocalStack, MinIO)")
    region_name: str | None = None

    max_file_size_bytes: int = Field(DEFAULT_MAX_FILE_SIZE_BYTES, gt=0)
    allowed_mime_types: tuple[str, ...] = DEFAULT_ALLOWED_MIME_TYPES

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def normalize_mime_types(cls, value: Any) -> tuple[str, ...]:
        """
        Accept a comma-separated string or a sequence of MIME types.

        Entries are lower-cased and de-duplicated; at least one is required.
        """
        if isinstance(value, str):
            raw = value.split(",")
        elif isinstance(value, (list, tuple, set, frozenset)):
            raw = [str(item) for item in value]
        else:
            raise ValueError("allowed_mime_types must be a string or list of strings")

        mime_types = tuple(dict.fromkeys(m.strip().lower() for m in raw if m.strip()))

        if not mime_types:
            raise ValueError("At least one allowed MIME type is required")

        return mime_types

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PhotoAlbumSettings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ

        database_url = env.get(ENV_DATABASE_URL)
        if not database_url:
            raise RuntimeError(f"{ENV_DATABASE_URL} environment variable is not set")

        values: dict[str, Any] = {"database_url": database_url}

        optional = {
            "bucket_name": ENV_PHOTO_S3_BUCKET_NAME,
            "endpoint_url": ENV_AWS_ENDPOINT_URL,
            "region_name": ENV_AWS_REGION,
            "max_file_size_bytes": ENV_PHOTO_MAX_FILE_SIZE_BYTES,
            "allowed_mime_types": ENV_PHOTO_ALLOWED_MIME_TYPES,
        }
        for field_name, env_name in optional.items():
            if env.get(env_name):
                values[field_name] = env[env_name]

        try:
            return cls(**values)
        except ValidationError as exc:
            raise RuntimeError(f"Invalid photo album configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> PhotoAlbumSettings:
    """Return process-wide settings, loading them on first use."""
    return PhotoAlbumSettings.from_env()
