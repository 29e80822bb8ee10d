from datetime import datetime
from typing import Literal, Optional

from pydantic import ConfigDict, Field, StrictBool

from inventory_api.schemas.common import CamelModel

USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class UserRef(CamelModel):
    id: int
    username: str


class UserOut(CamelModel):
    """Public view of a user; the password hash is never part of it."""

    id: int
    username: str
    role: str
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class LoginIn(CamelModel):
    # passwords are taken verbatim
    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=6)


class RegisterIn(LoginIn):
    role: Literal["user", "admin"] = "user"


class UserStatusIn(CamelModel):
    is_active: StrictBool
