"""Tests for the ranking service (no database)."""

import pytest

from shoprank.services.ranking import (
    compare_rankings,
    get_rank_comparison,
    get_ranked_shops,
    rank_records,
)
from shoprank.services.scoring import PriorParameters, ScoringMethod, score_record
from shoprank.services.votes import VoteRecord
from shoprank.stores.shops import InMemoryShopRepository


@pytest.fixture
def demo_records() -> list[VoteRecord]:
    return [
        VoteRecord(id=1, name="A", up_votes=95, down_votes=5),
        VoteRecord(id=2, name="B", up_votes=1, down_votes=0),
        VoteRecord(id=3, name="C", up_votes=18, down_votes=2),
        VoteRecord(id=4, name="D", up_votes=300, down_votes=100),
    ]


def _names(ranked) -> list[str]:
    return [item.record.name for item in ranked]


def test_simple_ranking_puts_single_vote_shop_first(demo_records: list[VoteRecord]) -> None:
    ranked = rank_records(demo_records, ScoringMethod.SIMPLE)
    assert _names(ranked) == ["B", "A", "C", "D"]
    assert [item.score for item in ranked] == pytest.approx([1.0, 0.95, 0.9, 0.75])


def test_bayesian_ranking_drops_single_vote_shop(demo_records: list[VoteRecord]) -> None:
    ranked = rank_records(demo_records, ScoringMethod.BAYESIAN)
    assert _names(ranked) == ["A", "C", "D", "B"]
    assert [item.score for item in ranked] == pytest.approx([97 / 104, 20 / 24, 302 / 404, 0.6])


def test_ranks_are_one_based_and_consecutive(demo_records: list[VoteRecord]) -> None:
    ranked = rank_records(demo_records, ScoringMethod.BAYESIAN)
    assert [item.rank for item in ranked] == [1, 2, 3, 4]


def test_both_scores_reported_regardless_of_method(demo_records: list[VoteRecord]) -> None:
    ranked = rank_records(demo_records, ScoringMethod.SIMPLE)
    top = ranked[0]
    assert top.record.name == "B"
    assert top.simple_score == 1.0
    assert top.bayesian_score == pytest.approx(0.6)
    assert top.score == top.simple_score


def test_ranking_is_deterministic_and_does_not_mutate(demo_records: list[VoteRecord]) -> None:
    snapshot = list(demo_records)
    first = rank_records(demo_records, ScoringMethod.BAYESIAN)
    second = rank_records(demo_records, ScoringMethod.BAYESIAN)
    assert first == second
    assert demo_records == snapshot
    assert first is not demo_records


def test_accepts_method_as_string(demo_records: list[VoteRecord]) -> None:
    ranked = rank_records(demo_records, "simple")  # type: ignore[arg-type]
    assert ranked[0].method is ScoringMethod.SIMPLE


def test_tie_broken_by_total_votes() -> None:
    records = [
        VoteRecord(id=1, name="small", up_votes=1, down_votes=1),
        VoteRecord(id=2, name="large", up_votes=2, down_votes=2),
    ]
    # Both score exactly 0.5 under either method
    assert _names(rank_records(records, ScoringMethod.SIMPLE)) == ["large", "small"]
    assert _names(rank_records(records, ScoringMethod.BAYESIAN)) == ["large", "small"]


def test_full_tie_keeps_input_order() -> None:
    records = [
        VoteRecord(id=10, name="first", up_votes=3, down_votes=1),
        VoteRecord(id=11, name="second", up_votes=3, down_votes=1),
        VoteRecord(id=12, name="third", up_votes=3, down_votes=1),
    ]
    assert _names(rank_records(records, ScoringMethod.BAYESIAN)) == ["first", "second", "third"]
    assert _names(rank_records(list(reversed(records)), ScoringMethod.BAYESIAN)) == [
        "third",
        "second",
        "first",
    ]


def test_zero_vote_shops_rank_last_under_simple_average() -> None:
    records = [
        VoteRecord(id=1, name="empty", up_votes=0, down_votes=0),
        VoteRecord(id=2, name="all-down", up_votes=0, down_votes=5),
        VoteRecord(id=3, name="one-up", up_votes=1, down_votes=3),
    ]
    ranked = rank_records(records, ScoringMethod.SIMPLE)
    # empty and all-down both score 0; more votes first
    assert _names(ranked) == ["one-up", "all-down", "empty"]


def test_custom_prior_changes_shrinkage(demo_records: list[VoteRecord]) -> None:
    # A very weak prior behaves almost like the simple average
    weak = rank_records(demo_records, ScoringMethod.BAYESIAN, PriorParameters(0.01, 0.01))
    assert _names(weak) == ["B", "A", "C", "D"]

    strong = rank_records(demo_records, ScoringMethod.BAYESIAN, PriorParameters(50, 50))
    assert _names(strong)[0] == "A"


def test_ranking_reuses_the_given_prior(
    demo_records: list[VoteRecord], monkeypatch: pytest.MonkeyPatch
) -> None:
    prior = PriorParameters(3, 1)
    built: list[PriorParameters] = []
    original = PriorParameters.__post_init__

    def counting_post_init(self: PriorParameters) -> None:
        built.append(self)
        original(self)

    monkeypatch.setattr(PriorParameters, "__post_init__", counting_post_init)
    ranked = rank_records(demo_records, ScoringMethod.BAYESIAN, prior)
    compare_rankings(demo_records, prior)

    assert built == []
    for item in ranked:
        assert item.score == score_record(item.record, ScoringMethod.BAYESIAN, prior)


def test_limit_truncates_after_ranking(demo_records: list[VoteRecord]) -> None:
    ranked = rank_records(demo_records, ScoringMethod.BAYESIAN, limit=2)
    assert _names(ranked) == ["A", "C"]
    assert rank_records(demo_records, ScoringMethod.BAYESIAN, limit=0) == []


def test_empty_input() -> None:
    assert rank_records([], ScoringMethod.SIMPLE) == []
    assert compare_rankings([]) == []


def test_compare_rankings_reports_rank_shift(demo_records: list[VoteRecord]) -> None:
    comparison = compare_rankings(demo_records)
    assert [(c.record.name, c.simple_rank, c.bayesian_rank, c.rank_shift) for c in comparison] == [
        ("A", 2, 1, 1),
        ("C", 3, 2, 1),
        ("D", 4, 3, 1),
        ("B", 1, 4, -3),
    ]


def test_compare_rankings_handles_duplicate_records() -> None:
    record = VoteRecord(id=1, name="same", up_votes=2, down_votes=1)
    comparison = compare_rankings([record, record])
    assert sorted(c.simple_rank for c in comparison) == [1, 2]
    assert [c.bayesian_rank for c in comparison] == [1, 2]


@pytest.mark.asyncio
async def test_get_ranked_shops_reads_repository() -> None:
    repo = InMemoryShopRepository.with_demo_shops()
    ranked = await get_ranked_shops(repo, method=ScoringMethod.BAYESIAN)
    assert ranked[0].record.name.startswith("Shop A")
    assert ranked[-1].record.name.startswith("Shop B")


@pytest.mark.asyncio
async def test_get_rank_comparison_reads_repository() -> None:
    repo = InMemoryShopRepository.with_demo_shops()
    comparison = await get_rank_comparison(repo, prior=PriorParameters(2, 2))
    assert len(comparison) == 4
    assert comparison[-1].rank_shift == -3
