"""FastAPI application entrypoint: lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import uvicorn
from sqlalchemy import text

from app.config import get_settings
from app.database import engine
from app.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from app.routes import auth, crops, equipment, farmers, farms, fertilization, sales, users

logger = logging.getLogger("farmhub")

_LOCATION_PREFIXES = {"body", "query", "path", "form", "header"}


async def _run_readiness_checks(_app: FastAPI) -> dict[str, dict[str, Any]]:
    """Probe backing services; each check reports ok + message."""
    checks: dict[str, dict[str, Any]] = {}
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        checks["database"] = {"ok": True, "message": "ok"}
    except Exception as exc:
        checks["database"] = {"ok": False, "message": str(exc)}
    return checks


def describe_validation_errors(errors: Sequence[Any]) -> str:
    """Flatten pydantic errors into one client-facing sentence."""
    parts: list[str] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        field = ".".join(location)
        if not field:
            parts.append("Request body is required" if error.get("type") == "missing" else str(error.get("msg")))
        elif error.get("type") == "missing":
            parts.append(f"{field} is required")
        else:
            parts.append(f"{field}: {error.get('msg')}")
    return "; ".join(parts) or "Invalid request"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the database is reachable
      3. Ensure the upload directory exists

    Shutdown:
      1. Dispose SQLAlchemy engine
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "FarmHub starting",
        extra={"log_level": settings.log_level, "upload_dir": settings.upload_dir},
    )

    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        raise

    yield

    logger.info("FarmHub shutting down")
    await engine.dispose()


app = FastAPI(
    title="FarmHub API",
    description=(
        "Farm management API for farmers, farms, crops, equipment, sales and "
        "fertilization records behind email/password accounts."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Error mapping ───────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed input is a client error (400), not 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": describe_validation_errors(exc.errors()),
            "errors": jsonable_encoder(exc.errors()),
        },
    )


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check: verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "farmhub",
        "version": "0.1.0",
    }


@app.get("/health/ready", tags=["system"])
async def readiness_check() -> JSONResponse:
    checks = await _run_readiness_checks(app)
    healthy = all(check["ok"] for check in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ok" if healthy else "degraded", "checks": checks},
    )


# ── Router registration ────────────────────────────────────────────────────
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(farmers.router)
app.include_router(farms.router)
app.include_router(crops.router)
app.include_router(equipment.router)
app.include_router(sales.router)
app.include_router(fertilization.router)

# ── Uploaded images ─────────────────────────────────────────────────────────
app.mount(
    "/uploads",
    StaticFiles(directory=get_settings().upload_dir, check_dir=False),
    name="uploads",
)


def run() -> None:
    """Serve the API on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
