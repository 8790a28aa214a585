"""Configuration management for Pathfinder using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PATHFINDER_",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Echo SQL statements")

    # Storage
    data_dir: Path = Field(default=Path("./data"), description="Directory for stores and preferences")
    default_database_file: str = Field(
        default="default_adventure.db",
        description="File name of the store created when nothing else can be opened",
    )
    preferences_file: str = Field(
        default="preferences.yaml", description="File name of the remembered preferences"
    )

    # Game
    starting_health: int = Field(default=100, description="Health restored on game reset")
    layout_scale: int = Field(default=100, description="Grid-to-canvas factor for auto-layout")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")

    @property
    def default_database_path(self) -> Path:
        """Get the path of the default adventure store."""
        return self.data_dir / self.default_database_file

    @property
    def preferences_path(self) -> Path:
        """Get the path of the preferences file."""
        return self.data_dir / self.preferences_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
