"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SKETCHBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (console or json)")

    # Generation Configuration
    default_seed: str = Field(default="sketchbook", description="Seed for the shared PRNG")
    canvas_width: int = Field(default=800, description="Default canvas width")
    canvas_height: int = Field(default=600, description="Default canvas height")
    max_grid_size: int = Field(default=200, description="Largest room grid side accepted by the API")
    max_leaves: int = Field(default=5000, description="Most leaves a tree request may seed")
    max_ticks: int = Field(default=2000, description="Most growth ticks per request")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")


settings = Settings()
