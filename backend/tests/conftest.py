from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings
from backend.db.database import Database

FIXED_NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Clock the app reads instead of the wall clock; tests move it by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(FIXED_NOW)


@pytest.fixture()
def database() -> Database:
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture()
def app(database: Database, clock: FrozenClock) -> Flask:
    settings = Settings(
        DATABASE_URL="sqlite://",
        AUTO_CREATE_TABLES=False,
        LOG_LEVEL="WARNING",
        MAX_PAGE_SIZE=50,
    )
    flask_app = create_app(settings=settings, database=database, clock=clock)
    flask_app.config["TESTING"] = True
    flask_app.extensions["investment_service"].seed_packages()
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def packages(app: Flask) -> dict:
    return {package.name: package for package in app.extensions["investment_service"].list_packages()}


@pytest.fixture()
def auth():
    def headers(user_id: int) -> dict:
        return {"X-User-Id": str(user_id)}

    return headers
