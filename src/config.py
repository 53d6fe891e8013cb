"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "Phasewise"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Supabase ---
    supabase_url: str  # e.g. https://<project>.supabase.co
    supabase_anon_key: str  # sent as the apikey header to GoTrue
    supabase_jwt_secret: str  # HS256 secret that signs user access tokens
    supabase_jwt_audience: str = "authenticated"
    supabase_db_url: str  # direct postgres connection string for asyncpg

    # --- Rate Limiting (login / signup only) ---
    auth_rate_limit_per_minute: int = 10
    # Only enable behind a proxy that appends the real client to X-Forwarded-For
    trust_forwarded_for: bool = False

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
