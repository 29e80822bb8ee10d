from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory_api.models.user import User
from inventory_api.repositories.product_query import contains_text


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def create(self, username: str, password_hash: str, role: str) -> User:
        u = User(username=username, password_hash=password_hash, role=role)
        self.db.add(u)
        self.db.flush()
        return u

    def count(
        self,
        role: Optional[str] = None,
        active_only: bool = True,
        since: Optional[datetime] = None,
    ) -> int:
        qry = self.db.query(func.count(User.id))
        if role:
            qry = qry.filter(User.role == role)
        if active_only:
            qry = qry.filter(User.is_active.is_(True))
        if since is not None:
            qry = qry.filter(User.created_at >= since)
        return qry.scalar() or 0

    def search(
        self,
        q: Optional[str] = None,
        role: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        query = self.db.query(User)
        if q:
            query = query.filter(contains_text(User.username, q))
        if role:
            query = query.filter(User.role == role)
        total = query.with_entities(func.count(User.id)).scalar() or 0
        items = (
            query.order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total
