"""Domain errors.

Raised where vote records and priors are constructed, never inside the
scorers themselves. Routes map them to the structured error envelope.
"""


class ShopRankError(ValueError):
    """Base class for invalid ranking input."""

    code = "INVALID_INPUT"


class InvalidVoteCountError(ShopRankError):
    """Vote count is negative, non-integer or non-finite."""

    code = "INVALID_VOTE_COUNT"


class InvalidPriorError(ShopRankError):
    """Prior pseudo-count is not a positive finite number."""

    code = "INVALID_PRIOR"
