from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inventory_api.db import get_db
from inventory_api.errors import Forbidden, Unauthorized
from inventory_api.models.user import User
from inventory_api.services.auth_service import AuthService

bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No token provided, authorization denied")
    return AuthService(db).verify(credentials.credentials)


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise Forbidden("Access denied. Admin privileges required")
    return user
