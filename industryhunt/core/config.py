import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./industryhunt.db")
DATABASE_ECHO = _get_bool(os.getenv("DATABASE_ECHO"), default=False)

# "sql" reads tables through SQLAlchemy, "rest" goes through PostgREST.
DATA_STORE = os.getenv("DATA_STORE", "sql").strip().lower()

SUPABASE_URL = os.getenv("SUPABASE_URL", os.getenv("NEXT_PUBLIC_SUPABASE_URL", "")).rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", os.getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", ""))
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "change-me")
SUPABASE_JWT_ALGORITHM = os.getenv("SUPABASE_JWT_ALGORITHM", "HS256")
SUPABASE_JWT_AUDIENCE = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")
SUPABASE_TIMEOUT_SECONDS = float(os.getenv("SUPABASE_TIMEOUT_SECONDS", "10"))

ACCESS_TOKEN_COOKIE = os.getenv("ACCESS_TOKEN_COOKIE", "sb-access-token")
REFRESH_TOKEN_COOKIE = os.getenv("REFRESH_TOKEN_COOKIE", "sb-refresh-token")
ACCESS_TOKEN_MAX_AGE = 60 * 60 * 24 * 7
REFRESH_TOKEN_MAX_AGE = 60 * 60 * 24 * 30

CORS_ALLOWED_ORIGINS = _get_list(os.getenv("CORS_ALLOWED_ORIGINS"), ["http://localhost:3000"])

def validate_runtime_config() -> None:
    if DATA_STORE not in {"sql", "rest"}:
        raise RuntimeError(f"DATA_STORE must be 'sql' or 'rest', got {DATA_STORE!r}.")
    if APP_ENV.lower() != "production":
        return
    if not SUPABASE_URL:
        raise RuntimeError("SUPABASE_URL must be set in production.")
    if not SUPABASE_ANON_KEY or not SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("SUPABASE_ANON_KEY and SUPABASE_SERVICE_ROLE_KEY must be set in production.")
    if SUPABASE_JWT_SECRET == "change-me":
        raise RuntimeError("SUPABASE_JWT_SECRET must be set in production.")
