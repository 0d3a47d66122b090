import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.main import app, get_report_generator
from database.database import Base, get_db
from database import models  # noqa: F401
from fortune_calculator import SessionRegistry
from reports import ReportGenerator


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_report_generator] = lambda: ReportGenerator(page_url="https://fortune.example/")
    app.state.sessions = SessionRegistry()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def body_sample():
    return {"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5}
