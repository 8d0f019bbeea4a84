"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shapecanvas.config import settings
from shapecanvas.errors import (
    InvalidActionError,
    SessionNotFoundError,
    ShapeValidationError,
    UnknownShapeTypeError,
)
from shapecanvas.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ShapeCanvas",
        description="Annotated vector shapes over a background image — drawing state engine",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    from shapecanvas.api.router import api_router

    app.include_router(api_router)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Map canvas errors to HTTP responses."""

    @app.exception_handler(SessionNotFoundError)
    async def _session_not_found(request: Request, exc: SessionNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(detail=str(exc)).model_dump(),
        )

    @app.exception_handler(InvalidActionError)
    @app.exception_handler(ShapeValidationError)
    async def _invalid_payload(request: Request, exc: InvalidActionError | ShapeValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(detail=str(exc), errors=exc.errors).model_dump(mode="json"),
        )

    @app.exception_handler(UnknownShapeTypeError)
    async def _unknown_shape_type(request: Request, exc: UnknownShapeTypeError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(detail=str(exc)).model_dump(),
        )


app = create_app()
