"""Configuration management using Pydantic Settings"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Keys
    gemini_api_key: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # CORS
    allowed_origins: str = "*"

    # Gemini models
    vision_model: str = "gemini-1.5-flash"
    text_model: str = "gemini-1.5-flash"
    generation_temperature: Optional[float] = None

    # Hard ceiling for a single upstream call, in seconds
    request_timeout_seconds: float = 60.0

    class Config:
        env_file = ".env"
        case_sensitive = False

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def gemini_configured(self) -> bool:
        """Check if a Gemini API key is available"""
        return bool(self.gemini_api_key)


# Global settings instance
settings = Settings()
