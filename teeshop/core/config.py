"""Checkout service configuration"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Teeshop Checkout"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Storefront API (products, orders, reviews)
    storefront_api_url: str = "http://localhost:5000"
    request_timeout: float = 30.0

    # Sessions
    session_max_age_hours: int = 24

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
