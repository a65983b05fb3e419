import math

import pytest

from shoprank.errors import InvalidVoteCountError
from shoprank.services.votes import MAX_VOTE_COUNT, VoteRecord, validate_vote_count


def test_vote_record_total_votes() -> None:
    record = VoteRecord(id=1, name="Shop C", up_votes=18, down_votes=2)
    assert record.total_votes == 20


def test_vote_record_defaults_to_no_votes() -> None:
    record = VoteRecord(id=7, name="New shop")
    assert (record.up_votes, record.down_votes, record.total_votes) == (0, 0, 0)


def test_vote_record_is_immutable() -> None:
    record = VoteRecord(id=1, name="Shop A", up_votes=95, down_votes=5)
    with pytest.raises(AttributeError):
        record.up_votes = 100  # type: ignore[misc]


@pytest.mark.parametrize("bad", [-1, -1.0, 1.5, math.nan, math.inf, True, "3", None])
def test_vote_record_rejects_malformed_counts(bad: object) -> None:
    with pytest.raises(InvalidVoteCountError):
        VoteRecord(id=1, name="Shop", up_votes=bad)  # type: ignore[arg-type]
    with pytest.raises(InvalidVoteCountError):
        VoteRecord(id=1, name="Shop", down_votes=bad)  # type: ignore[arg-type]


def test_integral_floats_are_coerced() -> None:
    record = VoteRecord(id=1, name="Shop", up_votes=3.0, down_votes=0.0)  # type: ignore[arg-type]
    assert record.up_votes == 3
    assert isinstance(record.up_votes, int)
    assert isinstance(record.down_votes, int)


def test_error_names_the_field() -> None:
    with pytest.raises(InvalidVoteCountError, match="down_votes"):
        validate_vote_count(-4, "down_votes")


def test_counts_are_bounded_by_the_column_range() -> None:
    assert validate_vote_count(MAX_VOTE_COUNT) == MAX_VOTE_COUNT
    record = VoteRecord(id=1, name="Busy", up_votes=MAX_VOTE_COUNT, down_votes=MAX_VOTE_COUNT)
    assert record.total_votes == 2 * MAX_VOTE_COUNT


@pytest.mark.parametrize("huge", [MAX_VOTE_COUNT + 1, 10**400, 1e300])
def test_oversized_counts_rejected(huge: object) -> None:
    with pytest.raises(InvalidVoteCountError, match="up_votes must be <="):
        VoteRecord(id=1, name="Shop", up_votes=huge)  # type: ignore[arg-type]
