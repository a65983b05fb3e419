"""Pydantic schemas for API request/response validation."""

from shoprank.schemas.common import ErrorDetail, ErrorResponse
from shoprank.schemas.shops import (
    ComparisonEntry,
    ComparisonResponse,
    PriorOut,
    RankedShopOut,
    RankingResponse,
    ShopCreate,
    ShopOut,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "ComparisonEntry",
    "ComparisonResponse",
    "PriorOut",
    "RankedShopOut",
    "RankingResponse",
    "ShopCreate",
    "ShopOut",
]
