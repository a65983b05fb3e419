"""API routes."""

from fastapi import APIRouter

from shoprank.routes import admin, shops

api_router = APIRouter()

# Shop listing, submission and rankings
api_router.include_router(shops.router, prefix="/v1/shops", tags=["shops"])

# Admin endpoints (table creation, demo reset)
api_router.include_router(admin.router, prefix="/v1/admin", tags=["admin"])
