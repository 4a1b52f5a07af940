from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseSettings:
    url: str
    pool_size: int = 5
    connect_timeout: int = 1

    @classmethod
    def from_env(cls, timeout_seconds: float = 1.0) -> DatabaseSettings:
        url = os.getenv("DATABASE_URL")
        if not url:
            raise RuntimeError("DATABASE_URL is not set")
        return cls(
            url=url,
            pool_size=max(1, int(os.getenv("DATABASE_POOL_SIZE", "5"))),
            connect_timeout=max(1, int(timeout_seconds)),
        )


@lru_cache(maxsize=8)
def engine_for(settings: DatabaseSettings) -> Engine:
    return create_engine(
        settings.url,
        pool_pre_ping=True,
        pool_size=settings.pool_size,
        connect_args={"connect_timeout": settings.connect_timeout},
    )


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    return engine_for(DatabaseSettings.from_env(timeout_seconds))


def ping_database(timeout_seconds: float = 1.0) -> bool:
    try:
        engine = get_engine(timeout_seconds)
        with engine.connect() as connection:
            connection.scalar(text("SELECT 1"))
    except (RuntimeError, SQLAlchemyError):
        logger.warning("database_ping_failed", exc_info=True)
        return False
    return True
