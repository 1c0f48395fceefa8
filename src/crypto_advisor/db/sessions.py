"""Database engine and session management."""
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from crypto_advisor.db.models import (  # noqa: F401  # pylint: disable=unused-import
    Feedback, User, UserPreferences)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the SQLModel engine for database_url.

    SQLite engines allow use across threads (FastAPI runs sync handlers in a
    threadpool); in-memory SQLite shares a single connection so every session
    sees the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    """Yield a database session; commits on success, rolls back on error."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create all tables. Safe to call on startup (idempotent for existing tables)."""
    SQLModel.metadata.create_all(engine)


def build_upsert(
    engine: Engine,
    table: Table,
    values: dict[str, Any],
    conflict_columns: Iterable[str],
    update_columns: Iterable[str],
):
    """INSERT ... ON CONFLICT (conflict_columns) DO UPDATE SET update_columns.

    The unique constraint on conflict_columns decides the winner when two
    writers race; the last write wins.
    """
    insert = _UPSERT_DIALECTS.get(engine.dialect.name)
    if insert is None:
        raise NotImplementedError(f"Upsert not supported for dialect '{engine.dialect.name}'")
    statement = insert(table).values(**values)
    return statement.on_conflict_do_update(
        index_elements=list(conflict_columns),
        set_={column: statement.excluded[column] for column in update_columns},
    )
