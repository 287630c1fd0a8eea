from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./impact.db"
    DB_ECHO: bool = False

    # Token verification: JWT_SECRET (HS256) wins over JWKS_URL (RS256)
    JWT_SECRET: str | None = None
    JWKS_URL: str | None = None

    # Prefix for URIs minted for new organizations and resources
    RESOURCE_URI_PREFIX: str = "http://impact.local/resource#"

    FRONTEND_URL: str | None = None
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
