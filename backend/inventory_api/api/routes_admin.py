from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventory_api.api.deps import require_admin
from inventory_api.db import get_db
from inventory_api.models.user import User
from inventory_api.schemas.common import Pagination, ok
from inventory_api.schemas.user_schema import UserOut, UserStatusIn
from inventory_api.services.admin_service import AdminService
from inventory_api.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/dashboard", summary="Admin dashboard")
def dashboard(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return ok(AnalyticsService(db).dashboard())


@router.get("/stats", summary="Database statistics")
def system_stats(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return ok(AdminService(db).system_stats())


@router.get("/users", summary="List all users")
def list_users(
    search: Optional[str] = Query(None, description="username contains"),
    role: Optional[Literal["user", "admin"]] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    users, total = AdminService(db).list_users(search=search, role=role, page=page, limit=limit)
    return ok(
        {
            "users": [UserOut.model_validate(u).dump() for u in users],
            "pagination": Pagination.build(page, limit, total).dump(),
        }
    )


@router.put("/users/{user_id}/status", summary="Activate or deactivate a user")
def update_user_status(
    user_id: int,
    payload: UserStatusIn,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = AdminService(db).set_user_status(admin, user_id, payload.is_active)
    verb = "activated" if payload.is_active else "deactivated"
    return ok({"user": UserOut.model_validate(user).dump()}, f"User {verb} successfully")
