import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from inventory_api.db import Base
from inventory_api.errors import InvalidOperation, NotFound
from inventory_api.models.user import User
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.utils.transactions import committing

log = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def list_users(
        self,
        search: Optional[str] = None,
        role: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        return self.users.search(q=search, role=role, page=page, limit=limit)

    def set_user_status(self, actor: User, user_id: int, is_active: bool) -> User:
        # checked before the lookup: an admin can never lock themselves out
        if user_id == actor.id:
            raise InvalidOperation("Cannot modify your own account status")
        user = self.users.get(user_id)
        if not user:
            raise NotFound("User not found")
        with committing(self.db):
            user.is_active = is_active
        self.db.refresh(user)
        log.info(
            "User %s %s by %s",
            user.username,
            "activated" if is_active else "deactivated",
            actor.username,
        )
        return user

    def system_stats(self) -> Dict:
        """Row and index counts for every table the application owns."""
        bind = self.db.get_bind()
        inspector = inspect(bind)
        collections = {}
        index_total = 0
        for name, table in Base.metadata.tables.items():
            rows = self.db.execute(select(func.count()).select_from(table)).scalar() or 0
            indexes = len(inspector.get_indexes(name))
            index_total += indexes
            collections[name] = {"count": rows, "indexes": indexes}

        return {
            "database": {
                "backend": bind.dialect.name,
                "collections": len(collections),
                "indexes": index_total,
            },
            "collections": collections,
            "performance": {
                f"{name}Indexes": c["indexes"] for name, c in collections.items()
            },
        }
