import itertools
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set before the backend builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

from backend.db import get_session, init_db  # noqa: E402
from backend.main import app  # noqa: E402
from client.api import ApiError  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _session():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ann():
    return {"name": "Ann", "email": "a@b.com", "phone": "1234567890"}


class FakeApi:
    """In-memory stand-in for ContactsClient that records calls."""

    def __init__(self):
        self.rows = []
        self.calls = []
        self.fail = set()
        self._ids = itertools.count(1)

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise ApiError(f"{name} failed", status_code=500)

    def list_contacts(self):
        self._call("list")
        return [dict(r) for r in self.rows]

    def create_contact(self, fields):
        self._call("create", fields)
        row = {"id": str(next(self._ids)), **fields}
        self.rows.insert(0, row)
        return row

    def update_contact(self, contact_id, fields):
        self._call("update", contact_id, fields)
        for row in self.rows:
            if row["id"] == contact_id:
                row.update(fields)
                return row
        return None

    def delete_contact(self, contact_id):
        self._call("delete", contact_id)
        self.rows = [r for r in self.rows if r["id"] != contact_id]
        return {"message": "Contact deleted successfully"}


@pytest.fixture
def api():
    return FakeApi()
