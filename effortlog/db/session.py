"""SQLAlchemy engine/session construction and the transactional unit of work."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ..core.errors import StorageError, ValidationError

# ``Base`` is the parent class for every SQLAlchemy model defined in effortlog/models.
Base = declarative_base()

# Upper bound for ids and paging values; INTEGER is 32-bit on PostgreSQL.
MAX_INTEGER = 2**31 - 1


def build_engine(url: str, *, echo: bool = False, pool_timeout: float | None = None) -> Engine:
    """Create the engine for ``url``; the caller owns it and must ``dispose()`` it."""

    kwargs: dict[str, object] = {"echo": echo}
    if url.startswith("sqlite"):
        # SQLite connections are shared by FastAPI worker threads.
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # Every checkout must see the same in-memory database.
            kwargs["poolclass"] = StaticPool
    elif pool_timeout is not None:
        kwargs["pool_timeout"] = pool_timeout
        kwargs["pool_pre_ping"] = True
    engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    # Rows returned from a committed unit of work stay readable without a reload.
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def unit_of_work(db: Session, action: str) -> Iterator[Session]:
    """Run a block as one transaction.

    Commits when the block finishes, rolls back on any exception. Database
    failures surface as :class:`StorageError` naming ``action``, integers the
    driver cannot bind as :class:`ValidationError`; service errors
    raised inside the block pass through untouched after the rollback.
    """

    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(f"Storage failure while {action}") from exc
    except OverflowError as exc:
        # The driver refuses to bind integers wider than its column type.
        db.rollback()
        raise ValidationError(f"Value out of range while {action}") from exc
    except Exception:
        db.rollback()
        raise
