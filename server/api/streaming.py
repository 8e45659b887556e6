import asyncio
import logging
import re
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from core.constants import STREAM_ERROR_MESSAGE
from server.api.dependencies import SettingsDep
from server.utils.mock_data import generate_long_text

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Streaming"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}
LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_speed(raw: str | None, default: int) -> int:
    """
    Milliseconds per character, read from the leading integer of ``raw``
    (``"10ms"`` is 10). Missing, non-numeric or zero values use the default;
    negative values stream without delay.
    """
    match = LEADING_INT.match(raw) if raw is not None else None
    speed = int(match.group(1)) if match else 0
    if not speed:
        return default
    return max(speed, 0)


async def stream_characters(
    request: Request, paragraphs: int, speed_ms: int
) -> AsyncGenerator[str, None]:
    try:
        text = generate_long_text(paragraphs)
    except Exception as e:
        logger.error(f"Text streaming error: {e}")
        yield STREAM_ERROR_MESSAGE
        return

    delay = speed_ms / 1000
    for char in text:
        yield char
        await asyncio.sleep(delay)

        if await request.is_disconnected():
            logger.info("Streaming client disconnected")
            return


def _streaming_response(request: Request, paragraphs: int, speed_ms: int) -> StreamingResponse:
    return StreamingResponse(
        stream_characters(request, paragraphs, speed_ms),
        media_type="text/plain",
        headers=STREAM_HEADERS,
    )


@router.get("/stream-text")
async def stream_text(request: Request, settings: SettingsDep) -> StreamingResponse:
    """Stream a long lorem text one character at a time."""
    return _streaming_response(
        request, settings.stream_paragraphs, settings.stream_default_speed
    )


@router.get("/stream-text/{speed}")
async def stream_text_with_speed(
    speed: str, request: Request, settings: SettingsDep
) -> StreamingResponse:
    return _streaming_response(
        request,
        settings.stream_paragraphs,
        parse_speed(speed, settings.stream_default_speed),
    )
