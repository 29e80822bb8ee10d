from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory_api.api.deps import get_current_user, require_admin
from inventory_api.db import get_db
from inventory_api.models.user import User
from inventory_api.schemas.common import ok
from inventory_api.schemas.user_schema import LoginIn, RegisterIn, UserOut
from inventory_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", summary="Log in and receive a bearer token")
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user, token = AuthService(db).authenticate(payload.username, payload.password)
    return ok({"user": UserOut.model_validate(user).dump(), "token": token}, "Login successful")


@router.get("/profile", summary="Current user's profile")
def profile(user: User = Depends(get_current_user)):
    return ok({"user": UserOut.model_validate(user).dump()})


@router.get("/verify", summary="Check that a token is still valid")
def verify(user: User = Depends(get_current_user)):
    return ok({"valid": True, "user": UserOut.model_validate(user).dump()}, "Token is valid")


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Create an account (admin only)")
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = AuthService(db).register(payload.username, payload.password, role=payload.role)
    return ok({"user": UserOut.model_validate(user).dump()}, "User registered successfully")
