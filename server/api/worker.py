from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.constants import NOT_FOUND_MESSAGE
from core.models.worker import (
    ClearResponse,
    ErrorResponse,
    RequestsResponse,
    StatusResponse,
    SubmitResponse,
)
from server.api.dependencies import WorkerQueueDep
from server.services.request_store import RequestNotFoundError

router = APIRouter(tags=["Worker"])


@router.post("/submit", response_model=SubmitResponse)
async def submit_request(queue: WorkerQueueDep) -> SubmitResponse:
    """Queue a simulated job; the result arrives later over the WebSocket."""
    request = queue.submit()
    return SubmitResponse(request_id=request.id)


@router.get(
    "/status/{request_id}",
    response_model=StatusResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
async def get_request_status(request_id: str, queue: WorkerQueueDep):  # noqa: ANN201
    try:
        request = queue.status(request_id)
    except RequestNotFoundError:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error=NOT_FOUND_MESSAGE).model_dump(by_alias=True),
        )

    return StatusResponse(
        request_id=request.id,
        status=request.status,
        result=request.result,
        timestamp=request.timestamp,
    )


@router.get("/requests", response_model=RequestsResponse, response_model_exclude_none=True)
async def get_all_requests(queue: WorkerQueueDep) -> RequestsResponse:
    return queue.list_all()


@router.delete("/clear", response_model=ClearResponse)
async def clear_requests(queue: WorkerQueueDep) -> ClearResponse:
    return queue.clear_all()
