import httpx
import pytest

from client.api import APIError, WorkerAPIClient
from server.app import create_app
from tests.helpers import make_settings


def api_for(app) -> WorkerAPIClient:
    transport = httpx.ASGITransport(app=app)
    return WorkerAPIClient(
        "testserver",
        use_ssl=False,
        client=httpx.AsyncClient(transport=transport, base_url="http://testserver"),
    )


@pytest.fixture
def server():
    return create_app(make_settings(worker_processing_delay=5.0))


@pytest.mark.unit
def test_base_url_scheme():
    assert WorkerAPIClient("example.com", use_ssl=True).base_url == "https://example.com"
    assert WorkerAPIClient("localhost:5001", use_ssl=False).base_url == "http://localhost:5001"


@pytest.mark.asyncio
async def test_worker_round_trip(server):
    api = api_for(server)
    try:
        submitted = await api.submit_request()
        status = await api.get_request_status(submitted.request_id)
        listing = await api.get_all_requests()
        cleared = await api.clear_all_requests()
    finally:
        await api.close()
        await server.state.worker_queue.shutdown()

    assert submitted.status == "pending"
    assert status.request_id == submitted.request_id
    assert status.status == "pending"
    assert status.result is None
    assert listing.total == 1
    assert listing.requests[0].id == submitted.request_id
    assert cleared.message == "All requests cleared"


@pytest.mark.asyncio
async def test_unknown_status_raises_api_error(server):
    api = api_for(server)
    try:
        with pytest.raises(APIError) as exc_info:
            await api.get_request_status("missing")
    finally:
        await api.close()

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Request not found"


@pytest.mark.asyncio
async def test_transport_errors_are_reraised():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = WorkerAPIClient(
        "testserver",
        use_ssl=False,
        client=httpx.AsyncClient(
            transport=httpx.MockTransport(refuse), base_url="http://testserver"
        ),
    )
    try:
        with pytest.raises(httpx.ConnectError):
            await api.submit_request()
    finally:
        await api.close()


@pytest.mark.asyncio
async def test_users_filters_and_health(server):
    api = api_for(server)
    try:
        users = await api.get_users(page=2, limit=10)
        filters = await api.get_filters()
        health = await api.health_check()
    finally:
        await api.close()

    assert len(users.data) == 10
    assert users.pagination.current_page == 2
    assert users.pagination.total_items == 50
    assert filters.top_nationalities
    assert health.status == "OK"


@pytest.mark.asyncio
async def test_stream_text_collects_characters(server):
    api = api_for(server)
    chars: list[str] = []
    completed: list[str] = []
    try:
        text = await api.stream_text(
            speed=1, on_character=chars.append, on_complete=completed.append
        )
    finally:
        await api.close()

    assert text
    assert "".join(chars) == text
    assert completed == [text]


@pytest.mark.asyncio
async def test_stream_text_reports_errors_instead_of_raising():
    def not_found(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Not Found"})

    api = WorkerAPIClient(
        "testserver",
        use_ssl=False,
        client=httpx.AsyncClient(
            transport=httpx.MockTransport(not_found), base_url="http://testserver"
        ),
    )
    errors: list[Exception] = []
    completed: list[str] = []
    try:
        text = await api.stream_text(speed=5, on_error=errors.append, on_complete=completed.append)
    finally:
        await api.close()

    assert text == ""
    assert len(errors) == 1
    assert isinstance(errors[0], APIError)
    assert completed == []
