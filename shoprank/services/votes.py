"""Vote records consumed by the scoring core.

A VoteRecord is the only input the scorers and the ranker read. Counts are
validated here, at construction time, so scoring itself stays exception-free.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

from shoprank.errors import InvalidVoteCountError

# Upper bound of the shops.upvotes / shops.downvotes INT columns.
MAX_VOTE_COUNT = 2_147_483_647

def validate_vote_count(value: Any, field: str = "votes") -> int:
    """Return `value` as a non-negative int or raise InvalidVoteCountError.

    Integral floats (e.g. 3.0 from a JSON payload) are accepted and coerced.
    Booleans, NaN/inf, fractional and negative values are rejected, as are
    counts above MAX_VOTE_COUNT.
    """
    if isinstance(value, bool):
        raise InvalidVoteCountError(f"{field} must be an integer, got bool")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidVoteCountError(f"{field} must be finite, got {value}")
        if not value.is_integer():
            raise InvalidVoteCountError(f"{field} must be a whole number, got {value}")
        value = int(value)
    if not isinstance(value, int):
        raise InvalidVoteCountError(f"{field} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidVoteCountError(f"{field} must be >= 0, got {value}")
    if value > MAX_VOTE_COUNT:
        raise InvalidVoteCountError(f"{field} must be <= {MAX_VOTE_COUNT}")
    return value


@dataclass(frozen=True)
class VoteRecord:
    """Up/down vote counts for a single shop."""

    id: int
    name: str
    up_votes: int = 0
    down_votes: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "up_votes", validate_vote_count(self.up_votes, "up_votes"))
        object.__setattr__(self, "down_votes", validate_vote_count(self.down_votes, "down_votes"))

    @property
    def total_votes(self) -> int:
        return self.up_votes + self.down_votes
