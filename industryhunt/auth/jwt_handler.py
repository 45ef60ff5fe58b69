from datetime import datetime, timedelta, timezone

import jwt

from industryhunt.core import config


def create_access_token(subject: str, email: str | None = None, expires_minutes: int = 60) -> str:
    """Mint a token shaped like the ones Supabase issues (local development and tests)."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "email": email,
        "aud": config.SUPABASE_JWT_AUDIENCE,
        "role": "authenticated",
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, config.SUPABASE_JWT_SECRET, algorithm=config.SUPABASE_JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.SUPABASE_JWT_SECRET,
        algorithms=[config.SUPABASE_JWT_ALGORITHM],
        audience=config.SUPABASE_JWT_AUDIENCE,
    )
