import os
from datetime import date

# in-memory app engine; the tests bind their own engine below
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from studio_api.main import app
from studio_api.db import get_session
from studio_api.deps import get_today
from studio_api.auth import hash_password, token_for_user
from studio_api.models import User, Studio

TODAY = date(2024, 6, 10)
PASSWORD = "s3cret-pass"


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides = {}


def make_user(session, username, email, role="user"):
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(PASSWORD),
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_studio(session, owner, **fields):
    values = {
        "name": "Studio Lumiere",
        "city": "Paris",
        "price_per_hour": 50.0,
        "services": "mariage,portrait",
        "equipments": "flash,fond blanc",
    }
    values.update(fields)
    studio = Studio(created_by=owner.id, **values)
    session.add(studio)
    session.commit()
    session.refresh(studio)
    return studio


def auth_headers(user):
    return {"Authorization": f"Bearer {token_for_user(user)}"}


@pytest.fixture
def owner(session):
    return make_user(session, "owner", "owner@example.com")


@pytest.fixture
def other_user(session):
    return make_user(session, "janedoe", "jane@example.com")


@pytest.fixture
def admin(session):
    return make_user(session, "admin", "admin@example.com", role="admin")


@pytest.fixture
def studio(session, owner):
    return make_studio(session, owner)
