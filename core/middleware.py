import time
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from utils.logger import get_logger

logger = get_logger("Middleware")

class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Logs every request and turns anything unhandled into a 500."""
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Unhandled Exception on {request.method} {request.url.path}: {str(e)}", exc_info=True)
            return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms} ms)")
        return response
