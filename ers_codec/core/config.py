"""
Codec configuration using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Codec settings loaded from environment variables.

    Decoding defaults are strict; the compatibility switches only relax
    checks that older encoders are known to violate.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Core Settings
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ==========================================================================
    # Evidence Record Decoding
    # ==========================================================================
    ers_allow_duplicate_optional_fields: bool = Field(
        default=False,
        description=(
            "Accept a repeated [0] cryptoInfos or [1] encryptionInfo element, "
            "keeping the last occurrence, instead of rejecting the record"
        ),
    )
    ers_strict_der: bool = Field(
        default=True,
        description="Reject trailing bytes after the outer EvidenceRecord SEQUENCE",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached codec settings.

    Using lru_cache ensures settings are loaded once and reused,
    avoiding repeated environment variable parsing.
    """
    return Settings()
