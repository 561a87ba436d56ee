"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "You360 Wellness"
    app_version: str = "1.0.0"
    debug: bool = True

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Storage
    storage_type: str = "local"
    local_storage_path: str = "./data"

    # Generative AI provider (Gemini)
    llm_provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash-latest"
    gemini_vision_model: str = "gemini-2.5-flash-preview-05-20"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_timeout: float = 60.0
    llm_max_retries: int = 5  # only HTTP 429 is retried
    llm_retry_initial_delay: float = 1.0  # seconds, doubled on every retry

    # Auth service the client talks to
    auth_base_url: str = "http://localhost:8000/api/auth"

    # Live dashboard sessions
    session_max_count: int = 1000
    session_idle_ttl: float = 12 * 60 * 60  # seconds

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/you360.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
