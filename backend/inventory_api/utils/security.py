from datetime import timedelta
from typing import Dict

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from inventory_api.config import settings
from inventory_api.utils.time import utcnow


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(user_id: int, role: str) -> str:
    iat = utcnow()
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": iat,
        "exp": iat + timedelta(seconds=settings.JWT_EXPIRES_SECONDS),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict:
    """Raises jwt.PyJWTError for malformed, tampered or expired tokens."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
