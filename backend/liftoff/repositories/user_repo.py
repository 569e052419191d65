from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from liftoff.db import transaction
from liftoff.models import User
from liftoff.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create(self, *, email: str, password_hash: str) -> User:
        try:
            with transaction(self.db):
                user = self.insert(email=email.strip().lower(), password_hash=password_hash)
        except IntegrityError:
            # Re-raise a clean marker the router maps to 400
            raise ValueError("email_already_exists")
        return user
