import os
import tempfile
from pathlib import Path

# settings are read at import time, so the environment goes first
_DB_DIR = Path(tempfile.mkdtemp(prefix="consumer_integration_tests_"))
os.environ["ENV"] = "test"
os.environ["API_TOKEN"] = "secret123"
os.environ["SQLALCHEMY_DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from consumer_integration import models  # noqa: F401
from consumer_integration.database import engine

API_TOKEN = "secret123"


@pytest.fixture(autouse=True)
def setup_db():
    """Fresh tables for every test."""
    SQLModel.metadata.create_all(engine)

    yield

    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client():
    from consumer_integration.main import app

    return TestClient(app)


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {API_TOKEN}"}
