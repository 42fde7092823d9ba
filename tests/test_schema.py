"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from mamma_me.schema import FoodSummary, SourceEntry, Verdict, verdict_rank, verdict_score


def test_source_entry_minimal():
    """SourceEntry should only need name, verdict and reliability."""
    entry = SourceEntry(source_name="식약처", verdict=Verdict.CAUTION, reliability=4.0)

    assert entry.note is None
    assert entry.url is None


@pytest.mark.parametrize("reliability", [0.4, 5.1])
def test_source_entry_rejects_out_of_range_reliability(reliability):
    """Reliability must stay within [0.5, 5.0]."""
    with pytest.raises(ValidationError):
        SourceEntry(source_name="x", verdict=Verdict.SAFE, reliability=reliability)


def test_source_entry_accepts_verdict_string():
    entry = SourceEntry(source_name="x", verdict="avoid", reliability=1.0)

    assert entry.verdict is Verdict.AVOID


def test_models_are_frozen():
    entry = SourceEntry(source_name="x", verdict=Verdict.SAFE, reliability=1.0)

    with pytest.raises(ValidationError):
        entry.verdict = Verdict.AVOID


def test_verdict_orderings_are_inverse():
    """Score grows with safety while rank grows with severity."""
    for verdict in Verdict:
        assert verdict_score(verdict) + verdict_rank(verdict) == 3
    assert verdict_score(Verdict.SAFE) == 3
    assert verdict_rank(Verdict.AVOID) == 3


def test_food_summary_scores():
    """Weighted score should be the reliability-weighted mean of verdict scores."""
    summary = FoodSummary(
        name="커피",
        entries=(
            SourceEntry(source_name="a", verdict=Verdict.SAFE, reliability=3.0),
            SourceEntry(source_name="b", verdict=Verdict.CAUTION, reliability=1.0),
        ),
    )

    assert summary.count == 2
    assert summary.weighted_score == pytest.approx(2.5)
    assert summary.score_rounded == 2


def test_score_rounded_rounds_half_to_even():
    summary = FoodSummary(
        name="x",
        entries=(
            SourceEntry(source_name="a", verdict=Verdict.SAFE, reliability=1.0),
            SourceEntry(source_name="b", verdict=Verdict.CONDITIONAL, reliability=1.0),
        ),
    )

    assert summary.weighted_score == pytest.approx(2.5)
    assert summary.score_rounded == 2


def test_empty_food_summary_scores_zero():
    summary = FoodSummary(name="비타민")

    assert summary.count == 0
    assert summary.weighted_score == 0.0
    assert summary.score_rounded == 0


def test_food_summary_dump_includes_computed_fields():
    summary = FoodSummary(
        name="팥",
        entries=(SourceEntry(source_name="a", verdict=Verdict.SAFE, reliability=3.0),),
    )

    data = summary.model_dump(mode="json")

    assert data["count"] == 1
    assert data["weighted_score"] == 3.0
    assert data["score_rounded"] == 3
    assert data["entries"][0]["verdict"] == "safe"
