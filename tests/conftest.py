"""Pytest fixtures: in-memory DB, sample config, API client."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Ensure all tests use SQLite by default; ignore DATABASE_URL unless running
# the optional Postgres smoke test (which uses POSTGRES_TEST_URL only).
if "POSTGRES_TEST_URL" not in os.environ:
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("AOS_DATABASE_URL", None)

from fastapi.testclient import TestClient

from account_opening.api import app, create_app
from account_opening.config import get_config
from account_opening.db import init_db, session_scope

CONFIG_TEMPLATE = """
app:
  log_level: INFO
database:
  url: "{db_url}"
  echo: false
api:
  strict_status_codes: {strict}
cors:
  allowed_origins: ["http://localhost:3000", "http://localhost:3001"]
  services: [account, customer, notification]
"""


def _write_config(path: Path, db_url: str, strict: bool = False) -> str:
    path.write_text(CONFIG_TEMPLATE.format(db_url=db_url, strict=str(strict).lower()))
    return str(path)


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    """Return path to a temporary config dir with default.yaml (in-memory DB)."""
    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    return _write_config(cfg_dir / "default.yaml", "sqlite:///:memory:")


@pytest.fixture
def db_session(config_path: str):
    """Initialize a fresh in-memory DB and yield a session (committed on exit)."""
    config = get_config(config_path)
    init_db(config["database"]["url"], echo=False)
    with session_scope() as session:
        yield session


@pytest.fixture
def api_config_path(tmp_path: Path):
    """Config with a file DB so the app and the fixture share one database."""
    path = _write_config(tmp_path / "api_config.yaml", f"sqlite:///{tmp_path / 'api_test.db'}")
    os.environ["AOS_CONFIG_PATH"] = path
    try:
        yield path
    finally:
        os.environ.pop("AOS_CONFIG_PATH", None)


@pytest.fixture
def api_client(api_config_path: str) -> TestClient:
    """Combined app (all four services) with the historical 500 error mapping."""
    cfg = get_config(api_config_path)
    init_db(cfg["database"]["url"], echo=False)
    return TestClient(app)


@pytest.fixture
def strict_client(tmp_path: Path) -> TestClient:
    """Combined app with strict_status_codes: NotFound -> 404, DuplicateKey -> 409."""
    path = _write_config(
        tmp_path / "strict.yaml", f"sqlite:///{tmp_path / 'strict.db'}", strict=True
    )
    init_db(get_config(path)["database"]["url"], echo=False)
    return TestClient(create_app(config_path=path))


@pytest.fixture
def service_client(api_client: TestClient, api_config_path: str):
    """Factory for single-service apps sharing the api_client database."""

    def _make(*services: str) -> TestClient:
        return TestClient(create_app(list(services), config_path=api_config_path))

    return _make
