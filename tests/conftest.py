"""
Shared fixtures for the worker queue demo tests.

Processing delays are shortened through ``Settings`` so the asynchronous
paths finish quickly.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from icecream import ic

from server.app import create_app
from tests.helpers import SLOW_DELAY, InProcessNotifications, make_settings

ic.disable()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def slow_client():
    """Client whose jobs stay pending for the whole test."""
    app = create_app(make_settings(worker_processing_delay=SLOW_DELAY))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_client_app(settings):
    """Minimal stand-in for ClientApp, holding the attributes services use."""
    app = SimpleNamespace(settings=settings, api_client=None)
    app.notification_service = InProcessNotifications(app)
    return app
