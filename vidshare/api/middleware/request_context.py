"""
Request Context Middleware

Binds a request id (from X-Request-ID, or freshly generated) plus method and
path to the structlog context for the duration of each request, and echoes
the id back in the response header.
"""

from uuid import uuid4

from fastapi import FastAPI, Request

from vidshare.shared.core.logging import clear_log_context, log_context


REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context(app: FastAPI) -> None:
    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
