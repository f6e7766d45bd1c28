# sitebuilder/core/config.py
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# ================== ENV ==================

ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / ".env")


def env(*names: str, default: Optional[str] = None) -> str:
    for n in names:
        v = os.environ.get(n)
        if v is not None and str(v).strip() != "":
            return v
    if default is not None:
        return default
    raise KeyError(f"Missing required env var. Tried: {', '.join(names)}")


LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ================== JWT ==================

JWT_SECRET = os.environ.get("JWT_SECRET", "default_secret_key")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")

# ================== AI GATEWAY ==================

AI_GATEWAY_BASE_URL = os.environ.get("AI_GATEWAY_BASE_URL", "https://ai.gateway.lovable.dev/v1")
AI_GATEWAY_MODEL = os.environ.get("AI_GATEWAY_MODEL", "google/gemini-2.5-flash")
AI_GATEWAY_TIMEOUT_SECONDS = float(os.environ.get("AI_GATEWAY_TIMEOUT_SECONDS", "120"))


def get_gateway_api_key() -> Optional[str]:
    """
    Read lazily: the server starts without a key.
    Only the generation endpoint needs it.
    """
    try:
        return env("AI_GATEWAY_API_KEY")
    except KeyError:
        return None

# ================== DATABASE ==================

DATABASE_URL = os.environ.get("DATABASE_URL", "")


def get_database_url() -> str:
    """Get database URL - supports SQLite or MySQL."""
    if DATABASE_URL:
        return DATABASE_URL

    mysql_host = os.environ.get("MYSQL_HOST")
    if mysql_host:
        mysql_port = int(os.environ.get("MYSQL_PORT", "3306"))
        mysql_user = os.environ.get("MYSQL_USER", "root")
        mysql_password = os.environ.get("MYSQL_PASSWORD", "")
        mysql_db = os.environ.get("MYSQL_DB", "sitebuilder")
        return f"mysql+aiomysql://{mysql_user}:{mysql_password}@{mysql_host}:{mysql_port}/{mysql_db}?charset=utf8mb4"

    db_path = ROOT_DIR / "sitebuilder.db"
    return f"sqlite+aiosqlite:///{db_path}"
