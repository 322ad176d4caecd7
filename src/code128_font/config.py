"""Configuration management for the Code 128 font encoder."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from code128_font.core.font import DEFAULT_SPACE_CHAR
from code128_font.core.models import Symbology


class EncoderSettings(BaseSettings):
    """Encoding defaults applied when a request does not say otherwise."""

    model_config = SettingsConfigDict(
        env_prefix="CODE128_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_symbology: Symbology = Symbology.CODE128
    allow_extended_charset: bool = False
    # Character the target font draws for symbol value 0
    font_space_char: str = DEFAULT_SPACE_CHAR
    # GS1 General Specifications: 48 data characters per GS1-128 symbol
    gs1_max_length: int = 48

    @field_validator("font_space_char")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("font_space_char must be exactly one character")
        return value


class ApiSettings(BaseSettings):
    """HTTP service settings."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    @property
    def encoder(self) -> EncoderSettings:
        """Get encoder defaults."""
        return EncoderSettings()

    @property
    def api(self) -> ApiSettings:
        """Get HTTP service settings."""
        return ApiSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
