"""Tests for the ``main`` entrypoint dispatch."""

from unittest.mock import Mock

import main
from tests.helpers import make_settings


def test_server_mode_builds_server_app(monkeypatch):
    settings = make_settings()
    server_app = Mock()
    server_cls = Mock(return_value=server_app)

    monkeypatch.setattr(main, "get_settings", lambda: settings)
    monkeypatch.setattr("server.app.ServerApp", server_cls)

    main.main(["--mode", "server", "--port", "6001"])

    server_cls.assert_called_once_with(settings)
    server_app.run.assert_called_once_with()
    assert settings.server_port == 6001


def test_client_mode_passes_demo_options(monkeypatch):
    settings = make_settings()
    client_app = Mock()
    client_cls = Mock(return_value=client_app)

    monkeypatch.setattr(main, "get_settings", lambda: settings)
    monkeypatch.setattr("client.app.ClientApp", client_cls)

    main.main(["--demo", "users", "-n", "5"])

    client_cls.assert_called_once_with(settings, demo="users", batch_size=5)
    client_app.run.assert_called_once_with()
