"""FastAPI application entry point.

Shop Rank API - shops ranked by crowd-sourced up/down votes, with a
Bayesian correction for shops that have only a handful of votes.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shoprank.errors import ShopRankError
from shoprank.routes import api_router
from shoprank.schemas.common import error_payload
from shoprank.settings import get_settings
from shoprank.stores.postgres import init_db, close_db, ping_db
from shoprank.stores.redis import init_redis, close_redis

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()

    # Fail fast on a misconfigured prior (raises InvalidPriorError)
    prior = settings.prior
    logger.info(f"Bayesian prior alpha={prior.alpha} beta={prior.beta}, storage={settings.storage_backend}")

    # The memory backend needs no database
    if settings.storage_backend == "postgres":
        try:
            await init_db()
            await ping_db()
            logger.info("Postgres connected")
        except Exception:
            logger.exception("Postgres init failed")

    # Redis only backs the ranking cache; the API works without it
    if settings.ranking_cache_active:
        try:
            await init_redis()
        except Exception:
            logger.exception("Redis init failed, ranking cache disabled")

    yield

    # Shutdown
    await close_redis()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Shop ranking by simple average and Bayesian approval score",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ShopRankError)
    async def shop_rank_error_handler(request: Request, exc: ShopRankError) -> JSONResponse:
        """Invalid vote counts / priors are client errors."""
        return JSONResponse(
            status_code=422,
            content=error_payload(exc.code, str(exc)),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=error_payload(
                "INTERNAL_ERROR",
                str(exc) if settings.debug else "Internal server error",
            ),
        )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "shoprank.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
