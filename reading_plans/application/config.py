"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "reading-plans"
    app_version: str = "0.1.0"
    debug: bool = False
    
    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    
    # Logging
    log_level: str = "INFO"

    # Storage backend: in-memory stores or DynamoDB tables
    storage_backend: Literal["local", "dynamodb"] = "local"

    # AWS settings for the DynamoDB backend
    aws_region: str = "us-west-2"
    plans_table_name: str = "ReadingPlans"
    sessions_table_name: str = "ReadingSessions"
    books_table_name: str = "Books"
    
    # Rewards
    koach_points_per_page: int = Field(default=1, ge=0)


# Create a singleton instance
settings = Settings()
