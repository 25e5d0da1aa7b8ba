"""
Shared pytest fixtures.

Provides:
  - ``make_profile``: factory for valid ``PlayerProfile`` instances.
  - ``store``: a ``SQLiteResultsStore`` backed by a temp file.
  - ``mailer``: a ``LoggingMailer`` that records outgoing messages.
  - ``client``: a ``TestClient`` with the store and mailer injected.
"""

import pytest
from fastapi.testclient import TestClient

import main
from config import Settings
from delivery.mailer import LoggingMailer
from delivery.storage import SQLiteResultsStore
from playability.models import PlayerProfile


@pytest.fixture
def make_profile():
    def _make(**overrides) -> PlayerProfile:
        values = {
            "swing_speed_mph": 95,
            "handicap_index": 15,
            "avg_driver_distance_yds": 220,
            "play_style": "balanced",
        }
        values.update(overrides)
        return PlayerProfile(**values)

    return _make


@pytest.fixture
def store(tmp_path) -> SQLiteResultsStore:
    return SQLiteResultsStore(str(tmp_path / "clubfinder.db"))


@pytest.fixture
def mailer() -> LoggingMailer:
    return LoggingMailer()


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_export_enabled=True)


@pytest.fixture
def client(store, mailer, settings):
    main.app.dependency_overrides[main.get_store] = lambda: store
    main.app.dependency_overrides[main.get_mailer] = lambda: mailer
    main.app.dependency_overrides[main.get_settings] = lambda: settings
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()
