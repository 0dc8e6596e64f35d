import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["APP_URL"] = "http://testserver"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["GEMINI_API_KEY"] = ""
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"

from app.core.security import USER_TOKEN, create_session_token
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import create_app
from app.models.user import User
from app.services.identity import USER_COOKIE

ADMIN_PASSWORD = "test-admin-password"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    path = Path("test.db")
    if path.exists():
        path.unlink()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db):
    def _make_user(google_id: str = "google-1", name: str = "Steve", is_admin: bool = False) -> User:
        user = User(
            google_id=google_id,
            email=f"{google_id}@example.com",
            name=name,
            picture=f"https://example.com/{google_id}.png",
            is_admin=is_admin,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def login_as():
    def _login_as(client: TestClient, user: User) -> None:
        client.cookies.set(USER_COOKIE, create_session_token(str(user.id), USER_TOKEN))

    return _login_as


@pytest.fixture()
def admin_client(client):
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return client
