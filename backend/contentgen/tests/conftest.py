from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from contentgen.main import create_app
from contentgen.models import Template
from contentgen.storage import Storage
from contentgen.tests.utils import auth_headers, make_llm


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def storage(engine) -> Storage:
    return Storage(engine)


@pytest.fixture()
def templates(engine) -> list[Template]:
    rows = [
        Template(
            name="Blog Template",
            description="For blog posts",
            content_type="blog",
            system_prompt="You are a blog writer",
            placeholders=["title", "topic"],
        ),
        Template(
            name="Tweet Template",
            content_type="social",
            system_prompt="You write tweets",
            placeholders=["topic"],
        ),
        Template(
            name="Private Blog Template",
            content_type="blog",
            system_prompt="Internal only",
            is_public=False,
        ),
    ]
    with Session(engine, expire_on_commit=False) as session:
        session.add_all(rows)
        session.commit()
    return rows


@pytest.fixture()
def llm():
    return make_llm()


@pytest.fixture()
def client(storage: Storage, llm) -> Generator[TestClient, None, None]:
    app = create_app(storage=storage, llm=llm)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def user_headers() -> dict[str, str]:
    return auth_headers("test-user-1", name="Test User 1", email="test1@example.com")


@pytest.fixture()
def other_user_headers() -> dict[str, str]:
    return auth_headers("test-user-2", name="Test User 2", email="test2@example.com")

