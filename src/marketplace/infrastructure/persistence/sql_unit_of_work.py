"""SQLAlchemy-backed implementation of UnitOfWork.

One ``Session`` (and therefore one database transaction) per ``with``
block.  Repositories are rebuilt on every entry so a handler can reuse
the same unit of work object across calls.
"""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from marketplace.domain.repository.unit_of_work import UnitOfWork
from marketplace.infrastructure.persistence.sql_address_repository import SqlAddressRepository
from marketplace.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from marketplace.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from marketplace.infrastructure.persistence.sql_shop_repository import SqlShopRepository
from marketplace.infrastructure.persistence.sql_user_repository import SqlUserRepository


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.users = SqlUserRepository(self._session)
        self.shops = SqlShopRepository(self._session)
        self.carts = SqlCartRepository(self._session)
        self.addresses = SqlAddressRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(self, *args) -> None:
        super().__exit__(*args)
        self._session.close()
        self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
