import os

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list, "*" allows every origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Database
ENV = os.getenv("ENV", os.getenv("RENDER", "").lower() or "dev")
DATABASE_PATH = os.getenv("DATABASE_PATH", "./moods.db")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT", "30"))


def get_database_url() -> str:
    """Resolve the database URL from the environment.

    Falls back to a local SQLite file in development only.
    """
    url = os.getenv("DATABASE_URL")
    if not url:
        # Guard against SQLite fallback in production
        if ENV in ("prod", "production") or os.getenv("RENDER"):
            raise RuntimeError(
                "DATABASE_URL missing in production; refusing to start with SQLite. "
                "Please configure DATABASE_URL environment variable."
            )
        url = f"sqlite:///{DATABASE_PATH}"

    # Hosted Postgres often hands out postgres://, SQLAlchemy needs postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url
