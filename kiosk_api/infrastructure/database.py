"""
Database engine, sessions and error translation.

Builds one SQLAlchemy engine (with its bounded connection pool) from the
``database.sql`` configuration section. SQLAlchemy exceptions never leave
this layer as is: ``translate_database_errors`` turns them into
``DatabaseError`` with an explicit kind.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kiosk_api.core.config import ConfigStore
from kiosk_api.shared.errors.types import DatabaseError, DatabaseErrorKind

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base of every ORM model."""


@contextmanager
def translate_database_errors() -> Iterator[None]:
    """Re-raise SQLAlchemy errors as ``DatabaseError`` with their kind."""
    try:
        yield
    except PoolTimeoutError as exc:
        raise DatabaseError(DatabaseErrorKind.POOL_EXHAUSTED, str(exc)) from exc
    except (OperationalError, InterfaceError, DisconnectionError) as exc:
        raise DatabaseError(DatabaseErrorKind.CONNECTIVITY, str(exc)) from exc
    except IntegrityError as exc:
        raise DatabaseError(DatabaseErrorKind.CONSTRAINT, str(exc)) from exc
    except SQLAlchemyError as exc:
        raise DatabaseError(DatabaseErrorKind.QUERY, str(exc)) from exc


def blank_strings_to_null(session: Session, _flush_context: Any, _instances: Any) -> None:
    """Store blank or whitespace-only strings as NULL."""
    for instance in (*session.new, *session.dirty):
        for attr in inspect(instance).mapper.column_attrs:
            value = getattr(instance, attr.key)
            if isinstance(value, str) and not value.strip():
                setattr(instance, attr.key, None)


def build_url(sql: Mapping[str, Any]) -> URL:
    """Return the database URL from the ``database.sql`` section.

    ``url`` wins when set; otherwise the URL is assembled from
    ``dialect``, ``username``, ``password``, ``host``, ``port`` and ``database``.
    """
    if sql.get("url"):
        return make_url(sql["url"])
    port = sql.get("port")
    return URL.create(
        drivername=sql.get("dialect") or "sqlite",
        username=sql.get("username") or None,
        password=sql.get("password") or None,
        host=sql.get("host") or None,
        port=int(port) if port else None,
        database=sql.get("database") or None,
    )


def _engine_options(url: URL, sql: Mapping[str, Any]) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": bool(sql.get("echo", False))}
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    pool = sql.get("pool") or {}
    options.update(
        pool_pre_ping=True,
        pool_size=int(pool.get("size", 100)),
        max_overflow=0,
        pool_timeout=float(pool.get("acquire_timeout", 30)),
        pool_recycle=int(pool.get("recycle", 3600)),
    )
    return options


class Database:
    """Engine plus session factory shared by every repository."""

    def __init__(self, url: URL | str, **engine_options: Any) -> None:
        self.url = make_url(url)
        self.engine: Engine = create_engine(self.url, **engine_options)
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        event.listen(self.session_factory, "before_flush", blank_strings_to_null)

    @classmethod
    def from_configuration(cls, configuration: ConfigStore) -> "Database":
        sql = configuration.get("database.sql", {})
        url = build_url(sql)
        return cls(url, **_engine_options(url, sql))

    def create_all(self) -> None:
        """Create missing tables for every registered model."""
        from kiosk_api.infrastructure.role import models  # noqa: F401  registers tables

        with translate_database_errors():
            Base.metadata.create_all(self.engine)

    def verify(self) -> bool:
        """Check that a connection can be opened. Logs the outcome."""
        target = self.url.render_as_string(hide_password=True)
        try:
            with translate_database_errors(), self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except DatabaseError:
            logger.exception("Unable to connect to the database %s", target)
            return False
        logger.info("Connection to database %s has been established successfully.", target)
        return True

    def dispose(self) -> None:
        self.engine.dispose()
