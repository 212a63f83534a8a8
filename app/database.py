import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.sql.expression import Executable

from app.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless the pragma is set on every connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


settings = get_settings()
engine = create_engine(settings.database_url, echo=settings.database_echo, future=True, pool_pre_ping=True)
enable_sqlite_foreign_keys(engine)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session, future=True)


@dataclass(frozen=True)
class RunResult:
    row_count: int
    last_id: int | None = None


class QueryExecutor:
    """Raw SQL access over one session.

    Every call is one-shot: driver errors propagate unchanged as
    ``sqlalchemy.exc.SQLAlchemyError`` and nothing is retried.
    Parameters are always bound (``:name`` placeholders).
    """

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def _statement(sql: str | Executable) -> Executable:
        return text(sql) if isinstance(sql, str) else sql

    def fetch_one(self, sql: str | Executable, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Return the first matching row as a dict, or None when nothing matched."""
        row = self.session.execute(self._statement(sql), params or {}).mappings().first()
        return dict(row) if row is not None else None

    def fetch_all(self, sql: str | Executable, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        rows = self.session.execute(self._statement(sql), params or {}).mappings().all()
        return [dict(row) for row in rows]

    def execute(self, sql: str | Executable) -> None:
        """Run a statement that yields no rows (DDL, pragma)."""
        self.session.connection().execute(self._statement(sql))

    def run(self, sql: str | Executable, params: dict[str, Any] | None = None) -> RunResult:
        """Run INSERT/UPDATE/DELETE.

        With a RETURNING clause the first returned column of the last row is
        reported as ``last_id``; otherwise the driver's ``lastrowid`` is used.
        """
        result = self.session.execute(self._statement(sql), params or {})
        if result.returns_rows:
            rows = result.all()
            return RunResult(row_count=len(rows), last_id=rows[-1][0] if rows else None)
        return RunResult(row_count=result.rowcount, last_id=result.lastrowid)

    def commit(self) -> None:
        self.session.commit()

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning("Transaction rolled back")
            raise


def get_executor():
    db = SessionLocal()
    try:
        yield QueryExecutor(db)
    finally:
        db.close()
