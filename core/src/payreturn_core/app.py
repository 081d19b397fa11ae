from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from payreturn_core import __version__
from payreturn_core.api.models import fail, status_to_code
from payreturn_core.config import load_core_config
from payreturn_core.home import ensure_payreturn_layout, resolve_payreturn_home
from payreturn_core.returnpage.router import router as return_page_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_payreturn_home()
        paths = ensure_payreturn_layout(home)
        config = load_core_config(paths)

        root = logging.getLogger()
        root.setLevel(logging.INFO)

        # __main__ installs its own rotating handler; only add one when nobody has.
        file_handler: RotatingFileHandler | None = None
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            file_handler = RotatingFileHandler(
                paths.log_file_path,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            )
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        logger.info("PayReturn Core starting up")
        logger.info("Logs directory: %s", paths.logs_dir)
        logger.info("Deep link base: %s", config.return_page.deep_link_base)

        app.state.payreturn_home = home
        app.state.payreturn_paths = paths
        app.state.payreturn_config = config

        try:
            yield
        finally:
            logger.info("PayReturn Core shutting down")
            if file_handler is not None:
                root.removeHandler(file_handler)
                file_handler.close()

    app = FastAPI(title="PayReturn Core", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=exc.errors(),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=str(exc.detail),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    app.include_router(return_page_router)

    @app.get("/")
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/docs", status_code=302)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
