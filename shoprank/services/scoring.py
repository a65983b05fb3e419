"""Approval score calculation.

Two scores are computed for every shop:
- Simple average: up / (up + down), 0 when there are no votes
- Bayesian score: posterior mean of a Beta(alpha, beta) prior updated with
  the observed votes, (alpha + up) / (alpha + beta + up + down)

The Bayesian score shrinks shops with few votes toward the prior mean
(0.5 for the default Beta(2, 2)), so a single up-vote no longer beats a shop
with hundreds of mostly positive votes.
"""

from dataclasses import dataclass
from enum import Enum
import math

from shoprank.errors import InvalidPriorError
from shoprank.services.votes import VoteRecord


class ScoringMethod(str, Enum):
    """Score used to order the ranking."""

    SIMPLE = "simple"
    BAYESIAN = "bayesian"


DEFAULT_PRIOR_ALPHA = 2.0
DEFAULT_PRIOR_BETA = 2.0


@dataclass(frozen=True)
class PriorParameters:
    """Beta prior pseudo-counts (prior up-votes, prior down-votes)."""

    alpha: float = DEFAULT_PRIOR_ALPHA
    beta: float = DEFAULT_PRIOR_BETA

    def __post_init__(self) -> None:
        for field, value in (("alpha", self.alpha), ("beta", self.beta)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidPriorError(f"Prior {field} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidPriorError(f"Prior {field} must be positive and finite, got {value}")
        object.__setattr__(self, "alpha", float(self.alpha))
        object.__setattr__(self, "beta", float(self.beta))

    @property
    def mean(self) -> float:
        """Score of a shop with no votes."""
        return self.alpha / (self.alpha + self.beta)


DEFAULT_PRIOR = PriorParameters()


def simple_average_score(up_votes: int, down_votes: int) -> float:
    """Naive approval rate.

    Returns 0.0 when there are no votes at all.
    """
    total = up_votes + down_votes
    if total == 0:
        return 0.0
    return up_votes / total


def bayesian_score(
    up_votes: int,
    down_votes: int,
    alpha: float = DEFAULT_PRIOR_ALPHA,
    beta: float = DEFAULT_PRIOR_BETA,
) -> float:
    """Shrinkage-corrected approval rate (Beta posterior mean).

    Args:
        up_votes: Observed up-votes (successes).
        down_votes: Observed down-votes (failures).
        alpha: Prior up-vote pseudo-count (> 0).
        beta: Prior down-vote pseudo-count (> 0).

    Returns:
        Score strictly between 0 and 1.

    Raises:
        InvalidPriorError: alpha or beta is not positive and finite.
    """
    return _posterior_mean(up_votes, down_votes, PriorParameters(alpha, beta))


def _posterior_mean(up_votes: int, down_votes: int, prior: PriorParameters) -> float:
    posterior_alpha = prior.alpha + up_votes
    posterior_beta = prior.beta + down_votes
    return posterior_alpha / (posterior_alpha + posterior_beta)


def score_record(
    record: VoteRecord,
    method: ScoringMethod,
    prior: PriorParameters = DEFAULT_PRIOR,
) -> float:
    """Score a vote record with the selected method."""
    if ScoringMethod(method) is ScoringMethod.SIMPLE:
        return simple_average_score(record.up_votes, record.down_votes)
    return _posterior_mean(record.up_votes, record.down_votes, prior)
