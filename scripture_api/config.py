"""Configuration management for the Scripture Reader API."""
import os
from urllib.parse import urlparse
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    app_name: str = Field(default="Scripture Reader API", env="APP_NAME")
    app_version: str = Field(default="1.0.0", env="APP_VERSION")
    debug: bool = Field(default=False, env="DEBUG")

    # Database Configuration (Heroku compatible)
    database_url: str = Field(default="", env="DATABASE_URL")
    db_name: str = Field(default="", env="DB_NAME")
    db_user: str = Field(default="", env="DB_USER")
    db_password: str = Field(default="", env="DB_PASSWORD")
    db_host: str = Field(default="localhost", env="DB_HOST")
    db_port: int = Field(default=5432, env="DB_PORT")
    db_pool_min: int = Field(default=1, env="DB_POOL_MIN")
    db_pool_max: int = Field(default=10, env="DB_POOL_MAX")

    # Authentication Configuration
    secret_key: str = Field(
        default="your-secret-key-change-this-in-production-use-openssl-rand-hex-32",
        env="SECRET_KEY"
    )
    auth_cookie_name: str = Field(default="scripture_auth", env="AUTH_COOKIE_NAME")
    auth_cookie_domain: str = Field(default="", env="AUTH_COOKIE_DOMAIN")
    auth_cookie_secure: bool = Field(default=False, env="AUTH_COOKIE_SECURE")
    auth_cookie_samesite: str = Field(default="lax", env="AUTH_COOKIE_SAMESITE")
    auth_cookie_max_age: int = Field(default=60 * 60 * 24 * 7, env="AUTH_COOKIE_MAX_AGE")
    password_reset_expire_minutes: int = Field(default=60, env="PASSWORD_RESET_EXPIRE_MINUTES")

    # CSRF Configuration
    csrf_cookie_name: str = Field(default="scripture_csrf", env="CSRF_COOKIE_NAME")
    csrf_cookie_secure: bool = Field(default=False, env="CSRF_COOKIE_SECURE")
    csrf_cookie_samesite: str = Field(default="strict", env="CSRF_COOKIE_SAMESITE")
    csrf_cookie_max_age: int = Field(default=60 * 60 * 6, env="CSRF_COOKIE_MAX_AGE")  # 6 hours
    csrf_header_name: str = Field(default="X-CSRF-Token", env="CSRF_HEADER_NAME")
    csrf_protection_enabled: bool = Field(default=True, env="CSRF_PROTECTION_ENABLED")

    # Google integrations
    google_client_id: str = Field(default="", env="GOOGLE_CLIENT_ID")
    google_search_api_key: str = Field(default="", env="GOOGLE_SEARCH_API_KEY")
    google_search_engine_id: str = Field(default="", env="GOOGLE_SEARCH_ENGINE_ID")
    external_request_timeout: float = Field(default=10.0, env="EXTERNAL_REQUEST_TIMEOUT")

    # Cache Configuration
    cache_enabled: bool = Field(default=True, env="CACHE_ENABLED")
    redis_url: str = Field(default="redis://localhost:6379/0", env="REDIS_URL")
    cache_ttl_books: int = Field(default=60 * 60 * 24, env="CACHE_TTL_BOOKS")
    cache_ttl_versions: int = Field(default=60 * 60, env="CACHE_TTL_VERSIONS")
    cache_ttl_word_search: int = Field(default=60 * 60 * 24, env="CACHE_TTL_WORD_SEARCH")

    # Bible content
    default_version_code: str = Field(default="KJV", env="DEFAULT_VERSION_CODE")
    presence_timeout_minutes: int = Field(default=5, env="PRESENCE_TIMEOUT_MINUTES")

    # Offline importers
    xml_bible_dir: str = Field(default="./xml-data", env="XML_BIBLE_DIR")
    xml_references_dir: str = Field(default="./xml-references", env="XML_REFERENCES_DIR")
    import_progress_interval: int = Field(default=1000, env="IMPORT_PROGRESS_INTERVAL")

    # CORS Configuration
    @computed_field
    @property
    def allowed_origins(self) -> list[str]:
        """Parse allowed origins from environment variable or use defaults."""
        allowed_origins_str = os.getenv(
            "ALLOWED_ORIGINS",
            "http://localhost:5173,http://localhost:3000"
        )
        return [origin.strip() for origin in allowed_origins_str.split(",") if origin.strip()]

    @computed_field
    @property
    def csrf_exempt_paths(self) -> list[str]:
        """List of path prefixes that are exempt from CSRF validation."""
        raw_paths = os.getenv(
            "CSRF_EXEMPT_PATHS",
            "/api/auth/login,/api/auth/register,/api/auth/google,"
            "/api/auth/forgot-password,/api/auth/reset-password",
        )
        return [path.strip() for path in raw_paths.split(",") if path.strip()]

    @property
    def web_search_configured(self) -> bool:
        return bool(self.google_search_api_key and self.google_search_engine_id)

    @property
    def db_config(self) -> dict:
        """Get database configuration, preferring DATABASE_URL for Heroku."""
        if self.database_url and self.database_url.strip():
            parsed = urlparse(self.database_url)
            return {
                'dbname': parsed.path[1:],  # Remove leading slash
                'user': parsed.username,
                'password': parsed.password,
                'host': parsed.hostname,
                'port': parsed.port or 5432
            }
        elif self.db_name.strip() and self.db_user.strip():
            return {
                'dbname': self.db_name,
                'user': self.db_user,
                'password': self.db_password,
                'host': self.db_host,
                'port': self.db_port
            }
        else:
            # Fallback configuration for development
            return {
                'dbname': 'scripture_reader',
                'user': 'postgres',
                'password': 'postgres',
                'host': 'localhost',
                'port': 5432
            }

    model_config = SettingsConfigDict(
        env_file=None,  # Don't load from .env file
        case_sensitive=False,
        extra="ignore"
    )

def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
