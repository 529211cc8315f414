"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

SSO_TOKEN_TTL_DEFAULT = 3600
DB_POOL_SIZE_DEFAULT = 5
DB_MAX_OVERFLOW_DEFAULT = 10
DB_PORT_DEFAULT = 5432
DEV_JWT_SECRET = "leadtrack-dev-session-secret-change-me"


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection settings."""

    model_config = SettingsConfigDict(env_prefix="LEADTRACK_DB_")

    url: str = ""
    host: str = "localhost"
    port: int = DB_PORT_DEFAULT
    user: str = "leadtrack"
    password: str = "leadtrack"
    database: str = "leadtrack"
    pool_size: int = DB_POOL_SIZE_DEFAULT
    max_overflow: int = DB_MAX_OVERFLOW_DEFAULT

    @property
    def async_url(self) -> str:
        """Build async PostgreSQL connection URL, preferring an explicit url."""
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class AuthSettings(BaseSettings):
    """Session, SSO and HTTP settings.

    Variable names carry no prefix so that existing deployments keep their
    ``JWT_SECRET`` / ``SSO_PUBLIC_KEY`` / ``SSO_PRIVATE_KEY`` values. Key
    material is read as-is and only checked when an SSO route uses it.
    """

    model_config = SettingsConfigDict(env_prefix="")

    jwt_secret: str = DEV_JWT_SECRET
    sso_public_key: str = ""
    sso_private_key: str = ""
    sso_token_ttl: int = SSO_TOKEN_TTL_DEFAULT
    enable_dev_routes: bool = True
    cors_origins: str = ""
    log_level: str = "INFO"

    def get_cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        if not self.cors_origins:
            return []
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
