"""
Shared fixtures: one in-memory SQLite store per test (StaticPool so every session sees the same
connection), a session factory for jobs, and a TestClient whose get_db reads that store.
"""
import uuid

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from edubot.database import get_db, init_db
from edubot.models import PassageSet, Textbook, TextbookPassageMapping
from edubot.services import qr


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _fk_on(dbapi_conn, _record):
        dbapi_conn.execute("PRAGMA foreign_keys=ON")

    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """TestClient without the startup hook (no `with`), so only the test store is touched."""
    from fastapi.testclient import TestClient
    from edubot.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


def make_textbook(db, title="수능특강 국어", subject="국어", level="고등", year=2024) -> Textbook:
    tb = Textbook(title=title, subject=subject, level=level, year=year)
    db.add(tb)
    db.commit()
    db.refresh(tb)
    return tb


def make_passage_set(db, title="지문", textbook_id=None, set_number=None) -> PassageSet:
    code = qr.generate_qr_code()
    ps = PassageSet(
        title=title,
        passage="지문 내용 " * 10,
        passage_comment="지문 해설",
        qr_code=code,
        qr_code_url=qr.qr_code_url(code),
        textbook_id=textbook_id,
        set_number=set_number,
    )
    db.add(ps)
    db.commit()
    db.refresh(ps)
    return ps


def make_raw_mapping(db, textbook, passage_set, order, qr_code=None, qr_code_url=None) -> TextbookPassageMapping:
    """Mapping written as-is (no generated QR), for rows the maintenance jobs must repair."""
    m = TextbookPassageMapping(
        id=uuid.uuid4(),
        textbook_id=textbook.id,
        passage_set_id=passage_set.id,
        order=order,
        qr_code=qr_code,
        qr_code_url=qr_code_url,
    )
    db.add(m)
    db.commit()
    db.refresh(m)
    return m
