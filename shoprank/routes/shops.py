"""Shop endpoints.

GET  /v1/shops            - All shops, newest first
POST /v1/shops            - Add a shop with initial vote counts
GET  /v1/shops/ranking    - Shops ranked by simple average or Bayesian score
GET  /v1/shops/comparison - Both rankings side by side

Routers are thin: call services for scoring and ranking.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status

from shoprank.schemas import (
    ComparisonEntry,
    ComparisonResponse,
    PriorOut,
    RankedShopOut,
    RankingResponse,
    ShopCreate,
    ShopOut,
)
from shoprank.services.ranking import get_rank_comparison, get_ranked_shops
from shoprank.services.scoring import PriorParameters, ScoringMethod
from shoprank.settings import get_settings
from shoprank.stores.redis import (
    get_ranking_cache,
    invalidate_ranking_cache,
    ranking_cache_key,
    set_ranking_cache,
)
from shoprank.stores.shops import ShopRepository, get_shop_repository

router = APIRouter()


def _resolve_prior(alpha: float | None, beta: float | None) -> PriorParameters:
    """Query overrides on top of the configured prior.

    Raises InvalidPriorError for non-positive values (mapped to 422).
    """
    configured = get_settings().prior
    return PriorParameters(
        alpha=configured.alpha if alpha is None else alpha,
        beta=configured.beta if beta is None else beta,
    )


@router.get("", response_model=list[ShopOut])
async def list_shops(
    repository: ShopRepository = Depends(get_shop_repository),
) -> list[ShopOut]:
    """List all shops, newest first."""
    records = await repository.list_shops()
    return [ShopOut.from_record(record) for record in records]


@router.post("", response_model=ShopOut, status_code=status.HTTP_201_CREATED)
async def create_shop(
    payload: ShopCreate,
    repository: ShopRepository = Depends(get_shop_repository),
) -> ShopOut:
    """Add a shop with its initial up/down vote counts."""
    record = await repository.add_shop(payload.name, payload.up_votes, payload.down_votes)
    await invalidate_ranking_cache()
    return ShopOut.from_record(record)


@router.get("/ranking", response_model=RankingResponse)
async def get_ranking(
    method: ScoringMethod = Query(
        default=ScoringMethod.BAYESIAN,
        description="Score to rank by",
    ),
    alpha: float | None = Query(
        default=None,
        description="Prior up-vote pseudo-count (default from settings)",
    ),
    beta: float | None = Query(
        default=None,
        description="Prior down-vote pseudo-count (default from settings)",
    ),
    limit: int | None = Query(
        default=None,
        ge=1,
        le=1000,
        description="Maximum number of ranked shops to return",
    ),
    repository: ShopRepository = Depends(get_shop_repository),
) -> RankingResponse:
    """Rank shops by descending score.

    Ties are broken by total votes (more first), then by listing order.
    """
    settings = get_settings()
    prior = _resolve_prior(alpha, beta)
    cache_key = ranking_cache_key(
        settings.storage_backend, method.value, prior.alpha, prior.beta, limit or "all"
    )

    if settings.ranking_cache_active:
        cached = await get_ranking_cache(cache_key)
        if cached is not None:
            return RankingResponse.model_validate(cached)

    ranked = await get_ranked_shops(repository, method=method, prior=prior, limit=limit)
    response = RankingResponse(
        method=method,
        prior=PriorOut.from_prior(prior),
        shops=[RankedShopOut.from_ranked(item) for item in ranked],
        count=len(ranked),
        generated_at=datetime.now(timezone.utc),
    )

    if settings.ranking_cache_active:
        await set_ranking_cache(cache_key, response.model_dump(mode="json", by_alias=True))
    return response


@router.get("/comparison", response_model=ComparisonResponse)
async def get_comparison(
    alpha: float | None = Query(default=None, description="Prior up-vote pseudo-count"),
    beta: float | None = Query(default=None, description="Prior down-vote pseudo-count"),
    repository: ShopRepository = Depends(get_shop_repository),
) -> ComparisonResponse:
    """Compare the simple and Bayesian rankings for every shop.

    Entries are ordered by Bayesian rank; `rankShift` is positive for shops
    that move up once small samples are shrunk toward the prior.
    """
    prior = _resolve_prior(alpha, beta)
    comparison = await get_rank_comparison(repository, prior=prior)
    return ComparisonResponse(
        prior=PriorOut.from_prior(prior),
        shops=[ComparisonEntry.from_comparison(item) for item in comparison],
        count=len(comparison),
        generated_at=datetime.now(timezone.utc),
    )
