# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from bookshelf.shared.config import DatabaseConfig
from bookshelf.shared.errors.base import InfrastructureError
from bookshelf.shared.logging import logger

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")
T = TypeVar("T")


class Base(DeclarativeBase):
    pass


def create_db_engine(config: DatabaseConfig) -> Engine:
    kwargs: dict[str, object] = {"echo": False, "future": True, "pool_pre_ping": True}
    connect_args: dict[str, object] = {}

    if config.is_sqlite():
        connect_args = {
            "check_same_thread": False,
            "timeout": config.statement_timeout,
        }
        if config.url in _MEMORY_URLS:
            # One shared connection, otherwise every checkout sees an empty database.
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )
        if config.url.startswith("postgresql"):
            timeout_ms = int(config.statement_timeout * 1000)
            connect_args = {"options": f"-c statement_timeout={timeout_ms}"}

    engine = create_engine(config.url, connect_args=connect_args, **kwargs)

    if config.is_sqlite():
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
    finally:
        cur.close()


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, InfrastructureError) and isinstance(exc.__cause__, OperationalError)


def _log_retry(retry_state) -> None:
    logger.warning(f"db.run: transient failure, attempt={retry_state.attempt_number}")


class Database:
    """Engine plus session factory for one configured database."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self.engine: Engine = create_db_engine(config)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope; driver errors leave as InfrastructureError."""

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            logger.exception("db.session: error, rolling back")
            session.rollback()
            raise InfrastructureError(context={"reason": type(exc).__name__}) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def run(self, work: Callable[[Session], T]) -> T:
        """Run ``work`` in its own transaction, retrying transient driver errors.

        Only ``OperationalError`` (locks, dropped connections) is retried;
        everything else surfaces on the first attempt.
        """

        retrying = Retrying(
            stop=stop_after_attempt(self._config.retry_attempts),
            wait=wait_exponential(
                multiplier=self._config.retry_backoff,
                max=self._config.retry_backoff_cap,
            ),
            retry=retry_if_exception(_is_transient),
            before_sleep=_log_retry,
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                with self.session_scope() as session:
                    return work(session)
        raise RuntimeError("db.run: retry loop exited without result")

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def check(self) -> None:
        with self.session_scope() as session:
            session.connection().exec_driver_sql("SELECT 1")

    def dispose(self) -> None:
        self.engine.dispose()
