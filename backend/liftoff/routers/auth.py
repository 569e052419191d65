from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from liftoff.db import get_database, get_db, Database
from liftoff.models import User
from liftoff.schemas.user import UserRegister, UserLogin, UserRead
from liftoff.security import hash_password, verify_password, create_access_token
from liftoff.deps.auth import get_app_settings, get_current_user
from liftoff.settings import Settings
from liftoff.repositories.user_repo import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db), database: Database = Depends(get_database)):
    repo = UserRepository(db, database.backend)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail="email already registered")
    try:
        user = repo.create(email=payload.email, password_hash=hash_password(payload.password))
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail="email already registered")
        raise
    return user

@router.post("/login")
def login(
    payload: UserLogin,
    db: Session = Depends(get_db),
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    repo = UserRepository(db, database.backend)
    user = repo.get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")
    token = create_access_token(settings, user.id)
    return {"access_token": token, "token_type": "bearer"}

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
