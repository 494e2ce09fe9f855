from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MigrationSettings(BaseSettings):
    """Export tree migration configuration"""
    input_dir: Optional[Path] = Field(default=None, description="Root of the export tree to migrate")
    output_dir: Optional[Path] = Field(default=None, description="Root of the migrated tree")
    description_extension: str = Field(
        default=".ttl",
        description="File extension identifying resource description files"
    )
    rdf_format: str = Field(
        default="turtle",
        description="rdflib format used to read and re-write description files"
    )
    headers_suffix: str = Field(default=".headers", description="Suffix of sidecar header files")
    max_workers: int = Field(default=1, description="Parallel workers (1 = sequential)")

    model_config = SettingsConfigDict(
        env_prefix='MIGRATE_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    @field_validator("max_workers")
    @classmethod
    def _positive_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_workers must be at least 1")
        return value

    @field_validator("description_extension", "headers_suffix")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if not value.startswith("."):
            return f".{value}"
        return value

    def with_overrides(self, **overrides) -> "MigrationSettings":
        """Return a validated copy with the non-None overrides applied"""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **updates})


class AppSettings(BaseSettings):
    """Application settings"""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    migration: MigrationSettings = Field(default_factory=MigrationSettings)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


# Singleton instance
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get application settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings
