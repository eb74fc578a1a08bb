"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wallet_aggregator.config.settings import get_settings
from wallet_aggregator.config.logging_config import setup_logging
from wallet_aggregator.repositories.sqlalchemy.database import init_db
from wallet_aggregator.api.deps import close_wallet_provider
from wallet_aggregator.api.routers import (
    portfolio_router,
    historical_router,
    transactions_router,
    categories_router,
)
from wallet_aggregator.core.exceptions import AppError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown
    await close_wallet_provider()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Combined portfolio, history and transactions across many wallets",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolio_router)
app.include_router(historical_router)
app.include_router(transactions_router)
app.include_router(categories_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=exc.status_code,
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
