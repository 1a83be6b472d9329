from datetime import datetime, timedelta, timezone
from typing import Iterable, List
import os

import jwt

JWT_ALGORITHM = "HS256"
DEFAULT_JWT_EXP_HOURS = 8


def _get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET is required")
    if len(secret) < 32:
        raise ValueError("JWT_SECRET must be at least 32 characters")
    return secret


def _get_exp_hours() -> int:
    raw = os.getenv("JWT_EXP_HOURS")
    if not raw:
        return DEFAULT_JWT_EXP_HOURS
    try:
        hours = int(raw)
    except ValueError as exc:
        raise ValueError("JWT_EXP_HOURS must be an integer") from exc
    if hours <= 0:
        raise ValueError("JWT_EXP_HOURS must be positive")
    return hours


def create_access_token(user_id: str, roles: Iterable[str]) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "roles": [str(r).upper() for r in roles],
        "iat": now,
        "exp": now + timedelta(hours=_get_exp_hours()),
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except Exception as exc:
        raise ValueError("Invalid or expired token") from exc

    if "sub" not in payload or not isinstance(payload.get("roles"), list):
        raise ValueError("Invalid token claims")

    return payload


def roles_from_claims(claims: dict) -> List[str]:
    return [str(r).upper() for r in claims.get("roles", [])]
