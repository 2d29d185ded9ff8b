"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coinfolio.config.settings import get_settings
from coinfolio.config.logging_config import setup_logging
from coinfolio.api.routers import holdings_router, rates_router
from coinfolio.core.exceptions import AppError

_STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNSUPPORTED_CURRENCY": 400,
    "UNSUPPORTED_SYMBOL": 404,
    "INSUFFICIENT_BALANCE": 409,
    "STORAGE_CONSISTENCY": 500,
    "RATE_UNAVAILABLE": 503,
    "PRICE_API_ERROR": 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    yield
    context = getattr(app.state, "context", None)
    if context is not None:
        context.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Virtual-currency holdings ledger with USD valuation",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(holdings_router)
app.include_router(rates_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_STATUS_BY_CODE.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
