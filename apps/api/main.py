from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from everpage_api.dependencies import get_settings
from everpage_api.domain.errors import INTERNAL_ERROR, PageError
from everpage_api.interface.api.routes import router
from everpage_api.rendering import render_error_page
from everpage_api.util import redact_query


def create_app() -> FastAPI:
    app = FastAPI(title="Everpage", version="0.1.0")

    settings = get_settings()
    logger = logging.getLogger("everpage.api")

    @app.middleware("http")
    async def request_id_and_logging(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            dt_ms = (time.perf_counter() - start) * 1000.0
            logger.exception("request_error", extra={"rid": request_id, "path": request.url.path, "ms": dt_ms})
            error = PageError(kind=INTERNAL_ERROR, message="An unexpected error occurred.")
            return HTMLResponse(
                render_error_page(error),
                status_code=500,
                headers={"X-Request-ID": request_id},
            )

        dt_ms = (time.perf_counter() - start) * 1000.0
        extra = {
            "rid": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "ms": dt_ms,
        }
        if settings.api_debug_log:
            extra["query"] = redact_query(request.url.query)
        logger.info("request", extra=extra)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)
    return app


app = create_app()
