"""FastAPI application entry point for the CV Studio API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cv_studio.api.routes import cvs, exports, health, render, templates
from cv_studio.config import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize the database on startup."""
    from cv_studio.data.db import init_db

    init_db()
    logger.info("CV Studio API ready")
    yield


app = FastAPI(
    title="CV Studio API",
    description="Render CVs with layout templates and export them as PDF, PNG or DOCX",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(templates.router, prefix="/api")
app.include_router(render.router, prefix="/api")
app.include_router(cvs.router, prefix="/api")
app.include_router(cvs.public_router, prefix="/api")
app.include_router(exports.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    logging.basicConfig(level=get_settings().log_level)
    uvicorn.run(
        "cv_studio.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
