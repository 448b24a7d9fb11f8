"""SQLAlchemy-backed implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from marketplace.domain.model.actor import Actor, Role
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.infrastructure.persistence.tables import UserRow


class SqlUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: str) -> Actor | None:
        row = self._session.get(UserRow, user_id)
        if row is None:
            return None
        return Actor(id=row.id, role=Role(row.role.lower()))
