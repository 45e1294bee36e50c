"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="MediFlow API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Relational schema target (not used by the in-memory repository)
    database_url: str = Field(default="sqlite://", alias="DATABASE_URL")

    # Repository
    seed_demo_data: bool = Field(
        default=True,
        alias="SEED_DEMO_DATA",
        description="Load demo patients and workflow templates on startup",
    )
    system_user_id: str = Field(
        default="system",
        alias="SYSTEM_USER_ID",
        description="User recorded in audit entries when no acting user is known",
    )
    strict_references: bool = Field(
        default=False,
        alias="STRICT_REFERENCES",
        description="Reject dependent records that reference an unknown patient",
    )
    audit_reads: bool = Field(
        default=False,
        alias="AUDIT_READS",
        description="Record a READ audit entry when a patient chart is opened",
    )

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        if isinstance(self.cors_origins_str, str):
            return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]
        return [self.cors_origins_str]

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
