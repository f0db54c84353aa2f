"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """BlogSphere settings, read from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="BlogSphere API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(
        default="INFO",
        description="Minimum log level; DEBUG is forced when debug is on",
    )

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/blogsphere",
        description="PostgreSQL connection URL (plain postgresql:// is accepted)",
    )
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)

    # Supabase (identity provider)
    supabase_url: str = Field(
        default="",
        description="Supabase project URL (e.g. https://xyzabc.supabase.co)",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Shared secret for HS256 tokens (local tooling and tests)",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Content limits
    post_title_max_length: int = Field(default=255)
    post_content_max_length: int = Field(default=50000)
    comment_max_length: int = Field(default=2000)
    max_tags_per_post: int = Field(default=20)
    tag_max_length: int = Field(default=50)
    profile_name_max_length: int = Field(default=100)
    profile_bio_max_length: int = Field(default=1000)

    # Rate limiting (turned off in tests)
    rate_limit_enabled: bool = Field(default=True)

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_jwks_url(self) -> str:
        """JWKS endpoint used to verify ES256 access tokens."""
        if not self.supabase_url:
            return ""
        return f"{self.supabase_url.rstrip('/')}/auth/v1/.well-known/jwks.json"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """The database URL with the asyncpg driver scheme.

        Hosting providers hand out ``postgresql://`` URLs; the async engine
        needs ``postgresql+asyncpg://``.
        """
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def uses_supabase_pooler(self) -> bool:
        """Whether connections go through Supabase's transaction-mode pooler."""
        return "pooler.supabase.com" in self.database_url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
