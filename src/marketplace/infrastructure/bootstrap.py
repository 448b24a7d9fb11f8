"""Composition root: builds the engine, sessions and use-case handlers.

Only this module (and the CLI that calls it) knows which concrete
repositories back the domain interfaces.
"""

from __future__ import annotations

from datetime import timezone, tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from marketplace.application.claim_order import ClaimOrderHandler
from marketplace.application.create_order import CreateOrderHandler
from marketplace.application.delete_order import DeleteOrderHandler
from marketplace.application.list_orders import ListOrdersHandler
from marketplace.application.show_order import ShowOrderHandler
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.infrastructure.config import Settings, load_settings
from marketplace.infrastructure.media import OrderItemCoverLinks
from marketplace.infrastructure.persistence.fixtures import load_fixture
from marketplace.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from marketplace.infrastructure.persistence.tables import Base


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def engine() -> Engine:
    url = settings().database_url
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        Path(url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url)


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=engine(), expire_on_commit=False)


def init_db() -> None:
    Base.metadata.create_all(engine())


def unit_of_work() -> SqlUnitOfWork:
    return SqlUnitOfWork(session_factory())


def seed_from_file(file_path: Path) -> dict[str, int]:
    with session_factory()() as session:
        counts = load_fixture(session, file_path)
        session.commit()
    return counts


def cover_links() -> OrderItemCoverLinks:
    return OrderItemCoverLinks(settings().media_base_url)


def reference_timezone() -> tzinfo:
    name = settings().clock_timezone
    return timezone.utc if name.upper() == "UTC" else ZoneInfo(name)


# --- Use cases ------------------------------------------------------------------


def create_order_handler() -> CreateOrderHandler:
    return CreateOrderHandler(
        unit_of_work(),
        reference_tz=reference_timezone(),
        cover_links=cover_links(),
    )


def show_order_handler() -> ShowOrderHandler:
    return ShowOrderHandler(unit_of_work(), cover_links=cover_links())


def update_order_status_handler() -> UpdateOrderStatusHandler:
    return UpdateOrderStatusHandler(unit_of_work(), cover_links=cover_links())


def claim_order_handler() -> ClaimOrderHandler:
    return ClaimOrderHandler(unit_of_work(), cover_links=cover_links())


def delete_order_handler() -> DeleteOrderHandler:
    return DeleteOrderHandler(unit_of_work())


def list_orders_handler() -> ListOrdersHandler:
    return ListOrdersHandler(unit_of_work(), cover_links=cover_links())


def reset() -> None:
    """Forget cached settings and engine (used when the environment changes)."""
    if engine.cache_info().currsize:
        engine().dispose()
    settings.cache_clear()
    engine.cache_clear()
    session_factory.cache_clear()
