"""Schemas for the shop endpoints (/v1/shops)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from shoprank.services.ranking import RankComparison, RankedShop
from shoprank.services.scoring import PriorParameters, ScoringMethod
from shoprank.services.votes import MAX_VOTE_COUNT, VoteRecord


def format_percent(score: float) -> str:
    """Format a 0-1 score as a percentage with one decimal, e.g. "93.3%"."""
    return f"{score * 100:.1f}%"


class ShopCreate(BaseModel):
    """Request body for POST /v1/shops."""

    name: str = Field(min_length=1, max_length=255)
    up_votes: int = Field(alias="upVotes", default=0, ge=0, le=MAX_VOTE_COUNT)
    down_votes: int = Field(alias="downVotes", default=0, ge=0, le=MAX_VOTE_COUNT)

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class ShopOut(BaseModel):
    """A stored shop with its raw vote counts."""

    id: int
    name: str
    up_votes: int = Field(alias="upVotes", ge=0)
    down_votes: int = Field(alias="downVotes", ge=0)
    total_votes: int = Field(alias="totalVotes", ge=0)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_record(cls, record: VoteRecord) -> "ShopOut":
        return cls(
            id=record.id,
            name=record.name,
            up_votes=record.up_votes,
            down_votes=record.down_votes,
            total_votes=record.total_votes,
        )


class PriorOut(BaseModel):
    """Beta prior used for the Bayesian score."""

    alpha: float = Field(gt=0)
    beta: float = Field(gt=0)
    mean: float = Field(ge=0, le=1)

    @classmethod
    def from_prior(cls, prior: PriorParameters) -> "PriorOut":
        return cls(alpha=prior.alpha, beta=prior.beta, mean=prior.mean)


class RankedShopOut(ShopOut):
    """A shop in the ranking with both scores.

    `score` is the score under the ranking's method; the other one is
    returned as well so clients can show them side by side.
    """

    rank: int = Field(ge=1)
    score: float = Field(ge=0, le=1)
    simple_score: float = Field(alias="simpleScore", ge=0, le=1)
    bayesian_score: float = Field(alias="bayesianScore", ge=0, le=1)
    simple_percent: str = Field(alias="simplePercent")
    bayesian_percent: str = Field(alias="bayesianPercent")

    @classmethod
    def from_ranked(cls, ranked: RankedShop) -> "RankedShopOut":
        record = ranked.record
        return cls(
            id=record.id,
            name=record.name,
            up_votes=record.up_votes,
            down_votes=record.down_votes,
            total_votes=record.total_votes,
            rank=ranked.rank,
            score=ranked.score,
            simple_score=ranked.simple_score,
            bayesian_score=ranked.bayesian_score,
            simple_percent=format_percent(ranked.simple_score),
            bayesian_percent=format_percent(ranked.bayesian_score),
        )


class RankingResponse(BaseModel):
    """Response payload for GET /v1/shops/ranking."""

    method: ScoringMethod
    prior: PriorOut
    shops: list[RankedShopOut]
    count: int = Field(ge=0)
    generated_at: datetime = Field(alias="generatedAt")

    model_config = {"populate_by_name": True}


class ComparisonEntry(ShopOut):
    """One shop's position under both rankings."""

    simple_rank: int = Field(alias="simpleRank", ge=1)
    bayesian_rank: int = Field(alias="bayesianRank", ge=1)
    rank_shift: int = Field(alias="rankShift")
    simple_score: float = Field(alias="simpleScore", ge=0, le=1)
    bayesian_score: float = Field(alias="bayesianScore", ge=0, le=1)

    @classmethod
    def from_comparison(cls, item: RankComparison) -> "ComparisonEntry":
        record = item.record
        return cls(
            id=record.id,
            name=record.name,
            up_votes=record.up_votes,
            down_votes=record.down_votes,
            total_votes=record.total_votes,
            simple_rank=item.simple_rank,
            bayesian_rank=item.bayesian_rank,
            rank_shift=item.rank_shift,
            simple_score=item.simple_score,
            bayesian_score=item.bayesian_score,
        )


class ComparisonResponse(BaseModel):
    """Response payload for GET /v1/shops/comparison.

    Entries are ordered by Bayesian rank.
    """

    prior: PriorOut
    shops: list[ComparisonEntry]
    count: int = Field(ge=0)
    generated_at: datetime = Field(alias="generatedAt")

    model_config = {"populate_by_name": True}
