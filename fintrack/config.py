"""Configuration management using Pydantic Settings"""

from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Store backend: "sql" (local database) or "supabase" (hosted REST API)
    store_backend: Literal["sql", "supabase"] = "sql"

    # Database
    database_url: str = "sqlite:///./fintrack.db"

    # Hosted backend
    supabase_url: str = "http://localhost:54321"
    supabase_key: str = ""

    # Service
    service_name: str = "fintrack"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Dashboard
    recent_transactions_limit: int = 5


settings = Settings()
