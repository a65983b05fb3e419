"""Ranking service for shop leaderboards.

Ranking logic:
1. Sort by the selected score DESC (simple average or Bayesian)
2. Then by total votes DESC (more evidence breaks ties)
3. Then by input order (stable sort)

Ranks are 1-based and consecutive; equal scores never share a rank.
Ranking never mutates the input records or sequence, and the same input
always produces the same order.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from shoprank.services.scoring import (
    DEFAULT_PRIOR,
    PriorParameters,
    ScoringMethod,
    score_record,
)
from shoprank.services.votes import VoteRecord
from shoprank.stores.shops import ShopRepository


@dataclass(frozen=True)
class RankedShop:
    """A vote record with its position and both scores."""

    record: VoteRecord
    rank: int
    method: ScoringMethod
    simple_score: float
    bayesian_score: float

    @property
    def score(self) -> float:
        """Score under the method the ranking was ordered by."""
        if self.method is ScoringMethod.SIMPLE:
            return self.simple_score
        return self.bayesian_score


@dataclass(frozen=True)
class RankComparison:
    """Position of one shop under both rankings."""

    record: VoteRecord
    simple_rank: int
    bayesian_rank: int
    simple_score: float
    bayesian_score: float

    @property
    def rank_shift(self) -> int:
        """Places gained (positive) or lost (negative) under the Bayesian ranking."""
        return self.simple_rank - self.bayesian_rank


def rank_records(
    records: Sequence[VoteRecord],
    method: ScoringMethod,
    prior: PriorParameters | None = None,
    limit: int | None = None,
) -> list[RankedShop]:
    """Order vote records by descending score.

    Args:
        records: Records to rank (left untouched).
        method: Score to order by.
        prior: Beta prior for the Bayesian score (default Beta(2, 2)).
        limit: Keep only the first `limit` ranked shops.

    Returns:
        New list of RankedShop, rank 1 first.
    """
    method = ScoringMethod(method)
    ordered = _ordered_positions(records, method, prior or DEFAULT_PRIOR)
    if limit is not None:
        ordered = ordered[: max(limit, 0)]

    return [
        RankedShop(
            record=records[position],
            rank=rank,
            method=method,
            simple_score=simple,
            bayesian_score=bayes,
        )
        for rank, (position, simple, bayes) in enumerate(ordered, start=1)
    ]


def _ordered_positions(
    records: Sequence[VoteRecord],
    method: ScoringMethod,
    prior: PriorParameters,
) -> list[tuple[int, float, float]]:
    """Return (input position, simple score, Bayesian score) in ranked order."""
    scored = [
        (
            position,
            score_record(record, ScoringMethod.SIMPLE),
            score_record(record, ScoringMethod.BAYESIAN, prior),
        )
        for position, record in enumerate(records)
    ]
    key_index = 1 if method is ScoringMethod.SIMPLE else 2
    return sorted(
        scored,
        key=lambda item: (-item[key_index], -records[item[0]].total_votes),
    )


def compare_rankings(
    records: Sequence[VoteRecord],
    prior: PriorParameters | None = None,
) -> list[RankComparison]:
    """Rank records under both methods and report each shop's movement.

    Returns:
        One RankComparison per record, ordered by Bayesian rank.
    """
    prior = prior or DEFAULT_PRIOR
    simple = _ordered_positions(records, ScoringMethod.SIMPLE, prior)
    bayesian = _ordered_positions(records, ScoringMethod.BAYESIAN, prior)

    # Matched by input position; shop ids are not assumed unique here.
    simple_ranks = {position: rank for rank, (position, _, _) in enumerate(simple, start=1)}

    return [
        RankComparison(
            record=records[position],
            simple_rank=simple_ranks[position],
            bayesian_rank=rank,
            simple_score=simple_value,
            bayesian_score=bayes_value,
        )
        for rank, (position, simple_value, bayes_value) in enumerate(bayesian, start=1)
    ]


async def get_ranked_shops(
    repository: ShopRepository,
    *,
    method: ScoringMethod,
    prior: PriorParameters | None = None,
    limit: int | None = None,
) -> list[RankedShop]:
    """Load all shops from storage and rank them."""
    records = await repository.list_shops()
    return rank_records(records, method, prior, limit)


async def get_rank_comparison(
    repository: ShopRepository,
    *,
    prior: PriorParameters | None = None,
) -> list[RankComparison]:
    """Load all shops from storage and compare both rankings."""
    records = await repository.list_shops()
    return compare_rankings(records, prior)
