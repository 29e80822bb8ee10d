import logging
from typing import Tuple

import jwt
from sqlalchemy.orm import Session

from inventory_api.errors import DuplicateKey, Unauthorized
from inventory_api.models.user import ROLE_USER, User
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from inventory_api.utils.time import utcnow
from inventory_api.utils.transactions import committing

log = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuance; the only place passwords are read."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def authenticate(self, username: str, password: str) -> Tuple[User, str]:
        user = self.users.get_by_username(username)
        # same message for unknown user, wrong password and disabled account
        if not user or not user.is_active or not verify_password(user.password_hash, password):
            log.info("Failed login for %r", username)
            raise Unauthorized("Invalid credentials")

        with committing(self.db):
            user.last_login = utcnow()
        self.db.refresh(user)
        return user, create_access_token(user.id, user.role)

    def verify(self, token: str) -> User:
        try:
            claims = decode_access_token(token)
            user_id = int(claims["sub"])
        except (jwt.PyJWTError, KeyError, ValueError):
            raise Unauthorized("Invalid or expired token")

        user = self.users.get(user_id)
        if not user or not user.is_active:
            raise Unauthorized("Invalid token or user is inactive")
        return user

    def register(self, username: str, password: str, role: str = ROLE_USER) -> User:
        message = f"User '{username}' already exists"
        if self.users.get_by_username(username):
            raise DuplicateKey(message)
        with committing(self.db, duplicate_message=message):
            user = self.users.create(username, hash_password(password), role)
        self.db.refresh(user)
        log.info("Registered user %r (%s)", username, role)
        return user
