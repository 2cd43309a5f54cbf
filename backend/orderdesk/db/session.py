import os
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from orderdesk.core.config import settings


def async_database_url(uri: str) -> str:
    return uri.replace("sqlite:///", "sqlite+aiosqlite:///")


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite leaves foreign keys unenforced unless asked per connection"""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(uri: str, **kwargs) -> AsyncEngine:
    new_engine = create_async_engine(
        async_database_url(uri),
        echo=os.getenv("SQL_DEBUG", "false").lower() == "true",
        **kwargs,
    )
    enable_sqlite_foreign_keys(new_engine)
    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(settings.SQLITE_DATABASE_URI)

SessionLocal = build_sessionmaker(engine)
