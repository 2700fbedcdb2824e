import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from ...domain.errors import MusicProgressError, Unauthenticated

logger = structlog.get_logger()


async def domain_error_handler(request: Request, exc: MusicProgressError) -> JSONResponse:
    logger.warning(
        "request_rejected",
        path=request.url.path,
        method=request.method,
        error=type(exc).__name__,
        status_code=exc.status_code,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)
