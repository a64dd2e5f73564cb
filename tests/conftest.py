"""Shared pytest fixtures for the design agent API tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from design_agent.config import Settings
from design_agent.db.session import make_engine, make_session_factory, init_db
from design_agent.db.store import DocumentStore
from design_agent.main import create_app
from design_agent.utils.security import Role, hash_password


def make_settings(root: Path, **overrides) -> Settings:
    """Build settings isolated from the process environment and any .env file."""
    values = dict(
        app_env="test",
        secret_key="test-secret",
        access_token_expire_minutes=60,
        database_url=f"sqlite:///{root / 'test.db'}",
        openai_api_key=None,
        gemini_api_key=None,
        qwen_api_key=None,
        default_ai_provider="openai",
        upload_path=str(root / "uploads"),
        rate_limit_window_seconds=900,
        rate_limit_max_calls=10_000,
        fatal_async_errors=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory, removed after the test."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def store(temp_dir: Path) -> DocumentStore:
    """A document store backed by a fresh SQLite file."""
    engine = make_engine(f"sqlite:///{temp_dir / 'store.db'}")
    init_db(engine)
    yield DocumentStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    return make_settings(temp_dir)


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """TestClient with the application lifespan (directories, schema) run."""
    with TestClient(app) as c:
        yield c


def register(client: TestClient, email: str = "alice@x.com", password: str = "secret123", **extra) -> dict:
    payload = {"email": email, "password": password, "firstName": "Alice", "lastName": "Smith"}
    payload.update(extra)
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client: TestClient) -> str:
    return register(client)["token"]


@pytest.fixture
def admin_token(client: TestClient, app) -> str:
    """Token for a super_admin inserted straight into the store."""
    user_id = app.state.store.insert("users", {
        "email": "admin@x.com",
        "password_hash": hash_password("adminpass"),
        "first_name": "Ada",
        "last_name": "Admin",
        "role": Role.SUPER_ADMIN.value,
    })
    return app.state.credentials.issue(user_id, Role.SUPER_ADMIN)


def png_bytes(width: int = 64, height: int = 32, mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    Image.new(mode, (width, height), color).save(buf, format="PNG")
    return buf.getvalue()
