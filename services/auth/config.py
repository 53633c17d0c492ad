"""Auth Service — environment configuration."""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

# Fixed by design, not read from the environment.
TOKEN_EXPIRY_SECONDS = 3600
BCRYPT_ROUNDS = 12

DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "auth.db")


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    database_path: str = DEFAULT_DB_PATH
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8001


def _split_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    """Read settings from the environment. Refuses to run without a signing secret."""
    secret = os.getenv("JWT_SECRET", "")
    if not secret.strip():
        raise RuntimeError("JWT_SECRET environment variable is required")

    return Settings(
        jwt_secret=secret,
        database_path=os.getenv("AUTH_DB_PATH", DEFAULT_DB_PATH),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        host=os.getenv("AUTH_HOST", "0.0.0.0"),
        port=int(os.getenv("AUTH_PORT", "8001")),
    )
