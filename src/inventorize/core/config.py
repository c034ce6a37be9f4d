"""Application settings loaded from the environment."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from inventorize.utils.hash_utils import CHUNK_SIZE, HashAlgorithm


class InventorizeSettings(BaseSettings):
    """
    Settings for the inventorize command-line tool.

    Values are loaded from `INVENTORIZE_*` environment variables and/or a
    .env file in the working directory.
    """

    log_level: str | None = Field(
        default=None,
        description="Logging level used when no --verbose flag is given.",
    )
    chunk_size: int = Field(
        default=CHUNK_SIZE,
        gt=0,
        description="Size of the buffer used when hashing files, in bytes.",
    )
    default_hash_algorithm: HashAlgorithm = Field(
        default=HashAlgorithm.MD5,
        description="Hash algorithm used by `build` when none is specified.",
    )

    model_config = SettingsConfigDict(
        env_prefix="INVENTORIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> InventorizeSettings:
    """Return the cached application settings."""
    return InventorizeSettings()
