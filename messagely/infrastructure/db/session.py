# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from messagely.shared.config import DatabaseConfig
from messagely.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


def create_db_engine(config: DatabaseConfig) -> Engine:
    if config.is_sqlite():
        engine = create_engine(
            config.url,
            echo=False,
            connect_args={
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            },
        )
        event.listen(engine, "connect", _set_sqlite_pragmas)
    else:
        engine = create_engine(
            config.url,
            echo=False,
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )
    logger.debug(f"db.engine: created dialect={engine.dialect.name}")
    return engine


def create_session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    from . import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
