# liftoff/deps/auth.py
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from liftoff.db import get_db
from liftoff.models import User
from liftoff.security import decode_token
from liftoff.settings import Settings

# Exposes Bearer auth in Swagger; login endpoint issues the token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_current_user(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    token: str = Depends(oauth2_scheme),
) -> User:
    """The caller identity every workout/session route is scoped to."""
    try:
        claims = decode_token(settings, token)
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except JWTError:
        raise _unauthorized("Not authenticated")

    user_id = claims.get("sub")
    user = db.get(User, str(user_id)) if user_id else None
    if user is None:
        raise _unauthorized("Not authenticated")
    return user
