"""Admin endpoints for storage management.

These endpoints are intended for setup and manual testing.
In production, consider adding authentication (API key or admin token).
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shoprank.schemas.common import error_payload
from shoprank.settings import get_settings
from shoprank.stores.postgres import create_tables
from shoprank.stores.redis import invalidate_ranking_cache
from shoprank.stores.shops import reset_memory_repository

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


class AdminResult(BaseModel):
    """Result of an admin operation."""

    result: str


@router.api_route("/create-table", methods=["GET", "POST"], response_model=AdminResult)
async def create_shops_table() -> AdminResult | JSONResponse:
    """Create the shops table if it does not exist yet."""
    settings = get_settings()
    if settings.storage_backend != "postgres":
        return JSONResponse(
            status_code=409,
            content=error_payload(
                "WRONG_STORAGE_BACKEND",
                "Table creation requires STORAGE_BACKEND=postgres",
                {"storage_backend": settings.storage_backend},
            ),
        )

    try:
        await create_tables()
    except Exception as e:
        logger.exception("Shops table creation failed")
        return JSONResponse(
            status_code=500,
            content=error_payload(
                "TABLE_CREATE_FAILED",
                f"Failed to create table: {e}" if settings.debug else "Failed to create table",
            ),
        )

    logger.info("Shops table ready")
    return AdminResult(result="Table created successfully")


@router.post("/reset-demo", response_model=AdminResult)
async def reset_demo_shops() -> AdminResult | JSONResponse:
    """Restore the in-memory shop list to the demo data."""
    settings = get_settings()
    if settings.storage_backend != "memory":
        return JSONResponse(
            status_code=409,
            content=error_payload(
                "WRONG_STORAGE_BACKEND",
                "Demo reset requires STORAGE_BACKEND=memory",
                {"storage_backend": settings.storage_backend},
            ),
        )

    reset_memory_repository()
    await invalidate_ranking_cache()
    logger.info("Demo shops restored")
    return AdminResult(result="Demo shops restored")
