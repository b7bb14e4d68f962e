"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading. The YouTube API key is injected via environment,
never hard-coded.

To extend: add new fields here and document them in .env.example.
See https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── Server ────────────────────────────────────────────────────
    # Only used by `python -m ytstats`; uvicorn CLI users pass their own.
    host: str = "0.0.0.0"
    port: int = 3000

    # ─── YouTube Data API v3 ───────────────────────────────────────
    # Get from https://console.cloud.google.com/apis/credentials
    # Stats routes answer 500 "Server configuration error" while empty.
    youtube_api_key: str = ""
    youtube_api_base_url: str = "https://www.googleapis.com/youtube/v3"
    youtube_timeout_seconds: float = 15.0

    # ─── Proxy ─────────────────────────────────────────────────────
    # Base URL of another deployment of this API, e.g. https://<app>.vercel.app
    proxy_base_url: str = ""
    proxy_timeout_seconds: float = 10.0

    # ─── CORS ──────────────────────────────────────────────────────
    # Comma-separated allowed origins, plus a regex for preview deployments.
    cors_origins_str: str = "http://localhost:3000,http://localhost:5173"
    cors_origin_regex: str = r"https://.*\.vercel\.app"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    # ─── Rate limiting ─────────────────────────────────────────────
    # Every stats call costs YouTube quota units.
    rate_limit: str = "60/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton: import this everywhere instead of instantiating Settings()
settings = Settings()
