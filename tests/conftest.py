# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator, Iterable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from patchql.api.v1.dependencies import get_pool
from patchql.db.pool import ConnectionPool
from patchql.db.session import Base
from patchql.main import app as fastapi_app
from patchql.models import Author, Contact, Key, Message, Thread
from patchql.models.author import CONTACT_STATE_FOLLOWING
from patchql.models.message import CONTENT_TYPE_POST
from patchql.repositories.memory import InMemoryThreadStore

TEST_DB_URL = "sqlite://"


class LogSeeder:
    """Writes authors, contacts and threads the way the log ingester would."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def author(self, name: str) -> Author:
        author = self.session.query(Author).filter(Author.author == name).first()
        if author is None:
            author = Author(author=name)
            self.session.add(author)
            self.session.flush()
        return author

    def follow(self, author: str, contact: str, state: int = CONTACT_STATE_FOLLOWING) -> None:
        self.session.add(
            Contact(
                author_id=self.author(author).id,
                contact_author_id=self.author(contact).id,
                state=state,
            )
        )
        self.session.commit()

    def key(self, key: str) -> Key:
        row = Key(key=key)
        self.session.add(row)
        self.session.flush()
        return row

    def thread(
        self,
        key: str,
        flume_seq: int,
        *,
        author: str | None = None,
        replies: Iterable[str] = (),
        is_decrypted: bool = False,
        content_type: str = CONTENT_TYPE_POST,
        root_key_id: int | None = None,
    ) -> int:
        """Insert a message and its thread rows; return the message id."""
        key_row = self.key(key)
        author_id = self.author(author).id if author else None
        self.session.add(
            Message(
                key_id=key_row.id,
                flume_seq=flume_seq,
                author_id=author_id,
                root_key_id=root_key_id,
                content_type=content_type,
                is_decrypted=is_decrypted,
            )
        )
        reply_ids = [self.author(name).id for name in replies] or [None]
        for reply_author_id in reply_ids:
            self.session.add(
                Thread(
                    key_id=key_row.id,
                    flume_seq=flume_seq,
                    author_id=author_id,
                    reply_author_id=reply_author_id,
                    root_key_id=root_key_id,
                    content_type=content_type,
                    is_decrypted=is_decrypted,
                )
            )
        self.session.commit()
        return key_row.id


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(engine: Engine, session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()

        # Ensure each test sees a clean database.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def seeder(db_session: Session) -> LogSeeder:
    """Return a helper for writing rows into the test database."""
    return LogSeeder(db_session)


@pytest.fixture()
def pool(session_factory: sessionmaker[Session]) -> Iterator[ConnectionPool]:
    """Provide a small connection pool over the test database."""
    pool = ConnectionPool(session_factory, size=2)
    try:
        yield pool
    finally:
        pool.close()


@pytest.fixture()
def memory_store() -> InMemoryThreadStore:
    """Provide an empty in-memory thread store."""
    return InMemoryThreadStore()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_pool_dependency(
    app: FastAPI,
    pool: ConnectionPool,
    db_session: Session,
) -> Iterator[None]:
    app.dependency_overrides[get_pool] = lambda: pool
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_pool, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
