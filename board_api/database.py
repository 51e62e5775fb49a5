import logging
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from board_api.config import get_settings

logger = logging.getLogger(__name__)


def make_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(database_url, echo=echo, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE from users to boards is a no-op without this pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


_settings = get_settings()
engine = make_engine(_settings.database_url, echo=_settings.database_echo)


def create_db_and_tables(bind: Engine | None = None) -> None:
    # models must be imported so their tables are registered on the metadata
    from board_api import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database schema ready")


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session
