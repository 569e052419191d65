"""Password hashing and bearer tokens for the identity shim.

Tokens carry the user id as ``sub``. Signing parameters come from the
``Settings`` the app was built with, never from a module global, so an app
created with its own settings signs and verifies with its own key.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JWTError
from passlib.context import CryptContext

from liftoff.settings import Settings

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(plain: str) -> str:
    return pwd_ctx.hash(plain)

def verify_password(plain: str, hashed: str | None) -> bool:
    # rows created below the HTTP layer may carry no usable hash
    if not hashed:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except ValueError:
        return False

def create_access_token(settings: Settings, user_id: str, *, expires_minutes: Optional[int] = None) -> str:
    issued = datetime.now(timezone.utc)
    lifetime = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    claims: Dict[str, Any] = {
        "sub": user_id,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(minutes=lifetime)).timestamp()),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(settings: Settings, token: str) -> Dict[str, Any]:
    """Claims of a valid token. Raises ``ExpiredSignatureError`` or ``JWTError``."""
    claims = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"verify_signature": True, "verify_exp": True},
    )
    if "exp" not in claims:
        raise JWTError("Missing exp")
    return claims
