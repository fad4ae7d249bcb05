"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
This ensures consistent configuration across the application.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation."""
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )
    
    # Database Configuration
    # SQLite by default so a single-user install needs no server.
    DATABASE_URL: str = Field(default="sqlite:///./kitcast.db")
    
    # Database Pool Configuration (ignored for SQLite)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=10)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)  # 1 hour
    
    # Redis Configuration
    REDIS_URL: str = Field(default="redis://localhost:6379/0")
    CACHE_ENABLED: bool = Field(default=True)
    
    # Cache Configuration
    CACHE_TTL_DEFAULT: int = Field(default=300)  # 5 minutes
    WEATHER_CACHE_TTL: int = Field(default=300)  # 5 minutes
    
    # OpenWeatherMap Configuration
    OPENWEATHERMAP_API_KEY: Optional[str] = Field(default=None)
    OPENWEATHERMAP_BASE_URL: str = Field(default="https://api.openweathermap.org/data/2.5")
    
    # External API Configuration
    EXTERNAL_API_TIMEOUT: int = Field(default=10)
    
    # Session import
    MAX_IMPORT_BYTES: int = Field(default=10 * 1024 * 1024)  # 10MB
    
    # Recommendation defaults
    DEFAULT_THERMAL_PREFERENCE: str = Field(default="average")
    
    # API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    
    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")  # json or text
    
    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    
    # CORS - comma-separated list of allowed origins for production
    CORS_ORIGINS: Optional[str] = Field(default=None)


# Global settings instance
settings = Settings()
