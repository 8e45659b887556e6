"""HTTP and WebSocket surface of the worker queue."""

import time

import pytest
from fastapi.testclient import TestClient
from icecream import ic

from server.app import create_app
from tests.helpers import FAST_DELAY, make_settings


class FailingProcessor:
    async def process(self) -> str:
        raise RuntimeError("boom")


def wait_until_completed(client: TestClient, request_id: str, timeout: float = 2.0) -> dict:
    deadline = time.monotonic() + timeout
    while True:
        data = client.get(f"/api/worker/status/{request_id}").json()
        if data["status"] == "completed" or time.monotonic() > deadline:
            return data
        time.sleep(FAST_DELAY / 2)


@pytest.mark.integration
def test_submit_returns_pending(client):
    response = client.post("/api/worker/submit")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "pending"
    assert isinstance(data["requestId"], str)
    assert data["message"] == "Request queued for processing"
    assert isinstance(data["timestamp"], int)


@pytest.mark.integration
def test_submit_ignores_request_body(client):
    response = client.post("/api/worker/submit", json={"message": "Hello", "priority": "high"})

    assert response.status_code == 200
    assert response.json()["status"] == "pending"


@pytest.mark.integration
def test_submitted_request_eventually_completes(client):
    request_id = client.post("/api/worker/submit").json()["requestId"]

    data = wait_until_completed(client, request_id)

    assert data["requestId"] == request_id
    assert data["status"] == "completed"
    assert data["result"]


@pytest.mark.integration
def test_status_of_pending_request_has_no_result(slow_client):
    request_id = slow_client.post("/api/worker/submit").json()["requestId"]

    response = slow_client.get(f"/api/worker/status/{request_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "pending"
    assert "result" not in data


@pytest.mark.integration
def test_status_unknown_request_is_404(client):
    response = client.get("/api/worker/status/non-existent-id")

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Request not found"
    assert isinstance(data["timestamp"], int)


@pytest.mark.integration
def test_requests_empty(client):
    response = client.get("/api/worker/requests")

    assert response.status_code == 200
    assert response.json() == {"requests": [], "total": 0, "pending": 0, "completed": 0}


@pytest.mark.integration
def test_submitted_request_listed_as_pending(slow_client):
    request_id = slow_client.post("/api/worker/submit").json()["requestId"]

    data = slow_client.get("/api/worker/requests").json()

    assert data["total"] == 1
    assert data["pending"] == 1
    assert data["completed"] == 0
    assert data["requests"][0]["id"] == request_id
    assert data["requests"][0]["status"] == "pending"


@pytest.mark.integration
def test_clear_removes_everything(slow_client):
    for _ in range(3):
        slow_client.post("/api/worker/submit")

    response = slow_client.delete("/api/worker/clear")

    assert response.status_code == 200
    assert response.json()["message"] == "All requests cleared"
    assert isinstance(response.json()["timestamp"], int)
    assert slow_client.get("/api/worker/requests").json() == {
        "requests": [],
        "total": 0,
        "pending": 0,
        "completed": 0,
    }


@pytest.mark.integration
def test_clear_with_nothing_queued(client):
    response = client.delete("/api/worker/clear")

    assert response.status_code == 200
    assert response.json()["message"] == "All requests cleared"


@pytest.mark.integration
def test_completion_is_pushed_over_websocket(client):
    with client.websocket_connect("/ws/worker") as ws:
        request_id = client.post("/api/worker/submit").json()["requestId"]

        event = ws.receive_json()

    assert event["event"] == "request-completed"
    assert event["requestId"] == request_id
    assert event["result"]
    assert isinstance(event["timestamp"], int)


@pytest.mark.integration
def test_failure_is_pushed_as_request_error(app, client):
    app.state.worker_queue.processor = FailingProcessor()

    with client.websocket_connect("/ws/worker") as ws:
        request_id = client.post("/api/worker/submit").json()["requestId"]
        event = ws.receive_json()

    assert event["event"] == "request-error"
    assert event["requestId"] == request_id
    assert event["error"] == "Processing failed"

    status = client.get(f"/api/worker/status/{request_id}").json()
    assert status["status"] == "completed"
    assert status["result"] == "Error: Processing failed"


@pytest.mark.integration
def test_every_subscriber_gets_the_event(app, client):
    with client.websocket_connect("/ws/worker") as first:
        with client.websocket_connect("/ws/worker") as second:
            request_id = client.post("/api/worker/submit").json()["requestId"]

            assert first.receive_json()["requestId"] == request_id
            assert second.receive_json()["requestId"] == request_id


@pytest.mark.integration
def test_unexpected_error_returns_generic_500(app, monkeypatch):
    def explode():
        raise RuntimeError("store corrupted")

    monkeypatch.setattr(app.state.worker_queue, "list_all", explode)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/worker/requests")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


@pytest.mark.unit
def test_debug_traces_follow_server_debug():
    try:
        create_app(make_settings(server_debug=True))
        assert ic.enabled is True

        create_app(make_settings(server_debug=False))
        assert ic.enabled is False
    finally:
        ic.disable()
