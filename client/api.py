"""
API client for the worker queue demo server.

All calls are async (httpx.AsyncClient) so a batch of submissions can be
in flight at the same time.
"""

import logging
from collections.abc import Callable
from typing import Any, Literal

import httpx

from core.models.users import FiltersResponse, HealthResponse, UsersResponse
from core.models.worker import ClearResponse, RequestsResponse, StatusResponse, SubmitResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Non-2xx response from the server."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP error! status: {status_code} ({message})")
        self.status_code = status_code
        self.message = message


class WorkerAPIClient:
    """Async API client for the worker, users and streaming endpoints."""

    def __init__(
        self,
        endpoint: str,
        use_ssl: bool,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize a new instance of the WorkerAPIClient class.

        Args:
            endpoint: host[:port] of the server
            use_ssl: Whether to use SSL
            timeout: request timeout in seconds
            client: preconfigured httpx client (tests pass an ASGI transport)
        """
        protocol = "https" if use_ssl else "http"
        self.base_url = f"{protocol}://{endpoint}"
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"User-Agent": "Worker Queue Demo Client"},
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: Literal["GET", "POST", "DELETE"],
        endpoint: str,
        params: dict | None = None,
    ) -> Any:
        try:
            response = await self.client.request(method, endpoint, params=params)
            if response.is_error:
                raise APIError(response.status_code, _error_message(response))
            return response.json()
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Request failed for {method} {endpoint}: {e}")
            raise

    # ——— Worker queue ———
    async def submit_request(self) -> SubmitResponse:
        data = await self._request("POST", "/api/worker/submit")
        return SubmitResponse.model_validate(data)

    async def get_request_status(self, request_id: str) -> StatusResponse:
        data = await self._request("GET", f"/api/worker/status/{request_id}")
        return StatusResponse.model_validate(data)

    async def get_all_requests(self) -> RequestsResponse:
        data = await self._request("GET", "/api/worker/requests")
        return RequestsResponse.model_validate(data)

    async def clear_all_requests(self) -> ClearResponse:
        data = await self._request("DELETE", "/api/worker/clear")
        return ClearResponse.model_validate(data)

    # ——— Users ———
    async def get_users(
        self,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        nationality: str | None = None,
        hobbies: str | None = None,
    ) -> UsersResponse:
        params = {
            key: value
            for key, value in {
                "page": page,
                "limit": limit,
                "search": search,
                "nationality": nationality,
                "hobbies": hobbies,
            }.items()
            if value
        }
        data = await self._request("GET", "/api/users", params=params)
        return UsersResponse.model_validate(data)

    async def get_filters(self) -> FiltersResponse:
        data = await self._request("GET", "/api/filters")
        return FiltersResponse.model_validate(data)

    async def health_check(self) -> HealthResponse:
        data = await self._request("GET", "/api/health")
        return HealthResponse.model_validate(data)

    # ——— Streaming ———
    async def stream_text(
        self,
        speed: int = 50,
        on_character: Callable[[str], Any] | None = None,
        on_complete: Callable[[str], Any] | None = None,
        on_error: Callable[[Exception], Any] | None = None,
    ) -> str:
        """
        Read the streaming endpoint character by character.

        Errors are logged and passed to ``on_error`` instead of raised.

        Returns:
            The text received so far (the full text on success).
        """
        endpoint = "/api/stream-text" if speed == 50 else f"/api/stream-text/{speed}"
        full_text = ""

        try:
            async with self.client.stream("GET", endpoint, timeout=None) as response:
                if response.is_error:
                    raise APIError(response.status_code, "stream request failed")

                async for chunk in response.aiter_text():
                    for char in chunk:
                        full_text += char
                        if on_character:
                            on_character(char)
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Text streaming error: {e}")
            if on_error:
                on_error(e)
            return full_text

        if on_complete:
            on_complete(full_text)
        return full_text


def _error_message(response: httpx.Response) -> str:
    try:
        return str(response.json().get("error", response.reason_phrase))
    except (ValueError, AttributeError):
        return response.reason_phrase
