"""
DevConnect FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend import config, db
from backend.errors import ApiError
from backend.routes import auth_routes
from backend.routes import posts as post_routes
from backend.routes import profiles as profile_routes

logging.basicConfig(
    level=config.settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Opens the document store on startup and closes it on shutdown.
    """
    await db.init_store()
    yield
    await db.close_store()
    logger.info("Document store closed")


app = FastAPI(
    title="DevConnect",
    docs_url="/api/docs",
    redoc_url=None,
    lifespan=lifespan,
)

if config.settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Domain errors go out as their field-keyed mapping."""
    return JSONResponse(status_code=exc.status_code, content=exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are reported field-keyed, like every other validation error."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = loc[-1] if loc else "body"
        errors.setdefault(field, err.get("msg", "Invalid value"))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the real error; never expose store or driver internals to the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# Register routes
app.include_router(auth_routes.router)
app.include_router(profile_routes.router)
app.include_router(post_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
