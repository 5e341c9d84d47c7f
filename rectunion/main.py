"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rectunion import __version__
from rectunion.config import settings
from rectunion.engine.errors import (
    DegenerateTopology,
    InvalidInput,
    ResourceLimitExceeded,
    UnionBoundaryError,
)
from rectunion.engine.pipeline import load_transforms
from rectunion.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.rectunion_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)

_STATUS_CODES: dict[type[UnionBoundaryError], int] = {
    InvalidInput: 422,
    ResourceLimitExceeded: 413,
    DegenerateTopology: 500,
}


async def union_error_handler(request: Request, exc: UnionBoundaryError) -> JSONResponse:
    status = _STATUS_CODES.get(type(exc), 500)
    if status >= 500:
        logger.error("Union boundary failed at %s: %s", exc.stage, exc)
    body = ErrorResponse(error=exc.kind, detail=str(exc), stage=exc.stage)
    return JSONResponse(status_code=status, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title="rectunion",
        description="Polygonal boundary of a union of axis-aligned rectangles",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UnionBoundaryError, union_error_handler)

    # Import all stage modules to trigger registration
    load_transforms()

    from rectunion.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
