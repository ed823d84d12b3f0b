# fails requests that run past the configured deadline with 504
# a retried booking gets the saved reservation back, not a conflict

import asyncio
import logging

from fastapi import Request
from starlette.responses import JSONResponse

from ..config import settings

logger = logging.getLogger(__name__)


async def timeout_middleware(request: Request, call_next):
    try:
        return await asyncio.wait_for(
            call_next(request), timeout=settings.request_timeout_seconds
        )
    except asyncio.TimeoutError:
        logger.error(
            f"Request timed out after {settings.request_timeout_seconds}s: "
            f"{request.method} {request.url.path}"
        )
        return JSONResponse(
            status_code=504,
            content={"error": "Request timed out", "code": "timeout"},
        )
