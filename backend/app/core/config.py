"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Wayfarer"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./wayfarer.db"
    DB_ECHO: bool = False

    # Identity provider tokens (verified, never issued, in production)
    IDENTITY_SECRET_KEY: str = "your-identity-secret-change-in-production"
    IDENTITY_ALGORITHM: str = "HS256"
    IDENTITY_ISSUER: Optional[str] = None  # When set, the "iss" claim must match
    IDENTITY_TOKEN_EXPIRE_MINUTES: int = 60

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Text generation (note summaries). Cohere is tried first.
    COHERE_API_KEY: str = ""
    COHERE_API_URL: str = "https://api.cohere.ai/v1/generate"
    COHERE_MODEL: str = "command"
    HUGGINGFACE_API_KEY: str = ""
    HUGGINGFACE_API_URL: str = "https://api-inference.huggingface.co/models/microsoft/DialoGPT-medium"
    SUMMARY_MAX_TOKENS: int = 500
    SUMMARY_TIMEOUT: float = 30.0  # seconds

    # Itinerary suggestions
    ITINERARY_MAX_DAYS: int = 14  # Days beyond this are summarized, not enumerated

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
