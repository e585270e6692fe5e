import sqlite3

from sqlalchemy import Engine, event
from sqlmodel import SQLModel, create_engine

from app.core.config import settings

# Register table models on SQLModel.metadata before create_all.
from app import models  # noqa: F401


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.SQL_ECHO,
    connect_args=_connect_args(settings.SQLALCHEMY_DATABASE_URI),
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(db_engine: Engine | None = None) -> None:
    SQLModel.metadata.create_all(db_engine or engine)
