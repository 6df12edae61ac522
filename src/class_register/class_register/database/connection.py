from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


@dataclass
class DBConfig:
    url: str
    echo: bool = False


class Database:
    """Engine + session factory for the local sqlite store.

    Foreign keys are switched on for every new connection so that cascade
    deletes and FK checks happen in the storage layer.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self.engine: Engine = _build_engine(config)
        self._sessions = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    @property
    def url(self) -> str:
        return self._config.url

    def session(self) -> Session:
        return self._sessions()

    def dispose(self) -> None:
        self.engine.dispose()


def _build_engine(config: DBConfig) -> Engine:
    url = make_url(config.url)
    kwargs: dict = {"echo": config.echo}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise each thread sees its own empty DB.
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cur = dbapi_connection.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON")
    finally:
        cur.close()
