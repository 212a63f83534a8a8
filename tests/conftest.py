import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import QueryExecutor, enable_sqlite_foreign_keys
from app.services.archive_service import ArchiveService


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session, future=True)


@pytest.fixture()
def bare_executor(session_factory) -> QueryExecutor:
    session = session_factory()
    yield QueryExecutor(session)
    session.close()


@pytest.fixture()
def executor(bare_executor) -> QueryExecutor:
    ArchiveService(bare_executor).create_schema()
    return bare_executor


@pytest.fixture()
def archive(executor) -> ArchiveService:
    return ArchiveService(executor)
