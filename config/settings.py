"""
Application settings loaded from environment variables.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = Field(..., min_length=1)   # HMAC secret for auth tokens, no default
    jwt_expiry_seconds: int = 3600               # 1 hour
    bcrypt_rounds: int = 12                      # bcrypt work factor

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./todo.db"

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:5173"]
    static_dir: str = "public"

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
