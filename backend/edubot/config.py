"""
Application configuration from environment variables.
Loads .env from the backend directory so DATABASE_URL is found regardless of cwd.
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Local store used when DATABASE_URL is not set (scripts and dev server share it).
_DEFAULT_DATABASE_URL = "sqlite:///./edutech_chatbot.db"

# .env next to backend/ (parent of edubot/); loaded explicitly so maintenance scripts run from repo root see it
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)
else:
    # Fallback: backend/.env relative to cwd (e.g. when running from repo root)
    import os
    _cwd_env = Path(os.getcwd()) / "backend" / ".env"
    if _cwd_env.exists():
        from dotenv import load_dotenv
        load_dotenv(_cwd_env, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",  # other services share the .env
    )

    # Store: sqlite file for local runs, postgresql for production
    database_url: str = _DEFAULT_DATABASE_URL
    # Connect timeout so an unreachable store fails a maintenance job instead of blocking it
    db_connect_timeout_seconds: int = 10

    # Environment: set ENV=production in production.
    env: str = ""

    # Base of the deep link encoded into every QR identifier: {qr_base_url}/chat/{qr_code}
    qr_base_url: str = "http://localhost:3000"

    # CORS: comma-separated origins
    cors_origins: str = "http://localhost:3000"

    log_level: str = "INFO"
    debug: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def _default_when_blank(cls, v: str | None) -> str:
        s = (v or "").strip() if isinstance(v, str) else ""
        return s or _DEFAULT_DATABASE_URL

    @field_validator("qr_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
