"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from rest_api.core.cors import configure_cors
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.orders import router as orders_router
from shared.config.constants import ErrorMessages
from shared.config.settings import settings
from shared.config.logging import rest_api_logger as logger
from shared.infrastructure.db import SessionLocal
from shared.utils.schemas import HealthResponse


# Create FastAPI application
app = FastAPI(
    title="Restaurant Orders REST API",
    description="Order management for restaurants: placing, tracking and staffing orders",
    version="0.1.0",
    lifespan=lifespan,
)

register_middlewares(app, timeout_seconds=settings.request_timeout_seconds)
configure_cors(app)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are reported as 400."""
    logger.warning("Request validation failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={
            "detail": ErrorMessages.PROPERTIES_NOT_SET,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Anything that is not an HTTPException ends up here, including corrupt
    stored visit times and database failures.
    """
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": ErrorMessages.INTERNAL_ERROR.format(error=exc)},
    )


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "rest-api",
        "environment": settings.environment,
    }


@app.get("/health/detailed")
async def detailed_health_check():
    """
    Detailed health check that verifies connectivity to dependencies.
    Returns status of the PostgreSQL connection.
    """
    checks = {
        "service": "rest-api",
        "environment": settings.environment,
        "dependencies": {},
    }
    all_healthy = True

    # Check PostgreSQL
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["dependencies"]["postgresql"] = {"status": "healthy"}
    except Exception as e:
        checks["dependencies"]["postgresql"] = {"status": "unhealthy", "error": str(e)}
        all_healthy = False

    checks["status"] = "healthy" if all_healthy else "degraded"

    # Return 503 if any dependency is down
    if not all_healthy:
        return JSONResponse(content=checks, status_code=503)

    return checks


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(orders_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
