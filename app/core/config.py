from functools import lru_cache
from typing import List, Optional
from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Configuration priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values

    Environment variables use uppercase names:
    e.g., APP_NAME -> app_name
    """

    # ============================================================================
    # ENVIRONMENT & APPLICATION INFO
    # ============================================================================
    app_name: str = "Same-Variety Drug Manager"
    app_version: str = "1.0.0"
    environment: str = Field(
        default="development",
        description="Current environment: development, staging, production",
    )
    debug: bool = Field(default=True, description="Enable debug mode")

    # ============================================================================
    # API CONFIGURATION
    # ============================================================================
    api_prefix: str = "/api/v1"
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"

    # ============================================================================
    # CORS CONFIGURATION
    # ============================================================================
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # ============================================================================
    # APPLICATION SUBMISSION RULES
    # ============================================================================
    link_min_products: int = Field(
        default=2, ge=2, description="Minimum product IDs in a LINK application"
    )
    unbind_min_products: int = Field(
        default=1, ge=1, description="Minimum product IDs in an UNBIND application"
    )
    application_max_products: int = Field(
        default=3, ge=2, le=50, description="Maximum product IDs in one application"
    )
    reason_max_length: int = Field(
        default=140, ge=1, le=2000, description="Maximum length of an application reason"
    )
    application_max_images: int = Field(
        default=9, ge=0, le=50, description="Maximum mocked image attachments"
    )

    # ============================================================================
    # GROUP RULES
    # ============================================================================
    group_min_members: int = Field(
        default=2, ge=2, description="Minimum members of a committed drug group"
    )
    group_page_size: int = Field(
        default=10, ge=1, le=100, description="Default page size of the group list"
    )
    default_group_name: str = "Same-variety group"

    # ============================================================================
    # SIMILARITY MATCHING CONFIGURATION
    # ============================================================================
    similarity_exact_score: int = Field(
        default=100, ge=0, le=100, description="Score when name and rx type match"
    )
    similarity_name_score: int = Field(
        default=80, ge=0, le=100, description="Score when only the name matches"
    )
    similarity_fuzzy_score: int = Field(
        default=50, ge=0, le=100, description="Score for a substring name match"
    )

    # ============================================================================
    # LOGGING CONFIGURATION
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path. None = stdout only"
    )
    log_file_level: Optional[str] = Field(
        default=None, description="File sink level. None = same as log_level"
    )
    log_format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    log_serialize: bool = Field(default=False, description="Emit logs as JSON")
    log_backtrace: bool = True
    log_diagnose: bool = False
    log_rotation: str = "10 MB"
    log_retention: str = "14 days"
    log_compression: str = Field(
        default="zip", description="Rotated file compression. Empty = none"
    )

    # ============================================================================
    # VALIDATORS
    # ============================================================================
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of the allowed values"""
        allowed = ["development", "staging", "production"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {', '.join(allowed)}")
        return v.lower()

    @field_validator("log_level", "log_file_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        """Ensure log level is valid"""
        if v is None:
            return v
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {', '.join(allowed)}")
        return v.upper()

    # ============================================================================
    # COMPUTED PROPERTIES
    # ============================================================================
    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == "production"

    @computed_field
    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == "development"

    @computed_field
    @property
    def effective_console_log_level(self) -> str:
        """Console sink level; DEBUG is forced while debugging in development"""
        if self.debug and self.is_development:
            return "DEBUG"
        return self.log_level

    @computed_field
    @property
    def effective_file_log_level(self) -> str:
        """File sink level, falling back to log_level"""
        return self.log_file_level or self.log_level

    @computed_field
    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from environment variable or list"""
        if isinstance(self.cors_origins, str):
            return [origin.strip() for origin in self.cors_origins.split(",")]
        return self.cors_origins

    @computed_field
    @property
    def fastapi_kwargs(self) -> dict:
        """FastAPI initialization arguments based on environment"""
        kwargs = {
            "title": self.app_name,
            "version": self.app_version,
            "debug": self.debug,
            "docs_url": self.docs_url,
            "redoc_url": self.redoc_url,
            "openapi_url": self.openapi_url,
        }

        # Disable docs in production
        if self.is_production:
            kwargs.update(
                {
                    "docs_url": None,
                    "redoc_url": None,
                    "openapi_url": None,
                }
            )

        return kwargs

    # ============================================================================
    # MODEL CONFIGURATION
    # ============================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",  # No prefix, directly use variable names
        case_sensitive=False,  # Environment variables are case-insensitive
        extra="ignore",  # Ignore extra environment variables
        validate_default=True,  # Validate default values
        str_strip_whitespace=True,  # Strip whitespace from string values
    )


# ============================================================================
# DEPENDENCY INJECTION PATTERN
# ============================================================================
@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance for dependency injection.

    Using lru_cache ensures settings are loaded once and reused.
    To reset cache (e.g., in tests): get_settings.cache_clear()

    Usage in FastAPI endpoints:
    ```
    from fastapi import Depends
    from app.core.config import Settings, get_settings

    @app.get("/info")
    async def info(settings: Settings = Depends(get_settings)):
        return {"app_name": settings.app_name}
    ```
    """
    return Settings()


# ============================================================================
# CONVENIENCE INSTANCE
# ============================================================================
settings = get_settings()
