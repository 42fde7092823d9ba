"""Tests for dataset aggregation and synonym parsing."""

import pytest

from mamma_me.dataset.aggregate import aggregate, dedupe_entries, parse_foods, parse_synonyms
from mamma_me.exceptions import DatasetLoadError
from mamma_me.schema import FoodSummary, SourceEntry, Verdict

HEADER = "food_kr,source_reliability,source_name,rule_source,임산부_정보유무,임산부_주의\n"


def _row(food, reliability="gov", source="식약처", url="https://a.kr", flag="TRUE", verdict="safe"):
    return {
        "food_kr": food,
        "source_reliability": reliability,
        "source_name": source,
        "rule_source": url,
        "임산부_정보유무": flag,
        "임산부_주의": verdict,
    }


def test_weighted_score():
    summary = FoodSummary(
        name="커피",
        entries=(
            SourceEntry(source_name="a", verdict=Verdict.SAFE, reliability=3.0),
            SourceEntry(source_name="b", verdict=Verdict.AVOID, reliability=1.0),
        ),
    )

    assert summary.weighted_score == pytest.approx(2.25)
    assert summary.score_rounded == 2
    assert summary.count == 2


def test_weighted_score_without_entries():
    summary = FoodSummary(name="비타민")

    assert summary.weighted_score == 0.0
    assert summary.score_rounded == 0


def test_aggregate_same_row_twice_yields_one_entry():
    rows = [_row("커피"), _row("커피")]

    summaries = aggregate(rows)

    assert len(summaries) == 1
    assert len(summaries[0].entries) == 1


def test_dedupe_keeps_most_severe_verdict():
    rows = [
        _row("커피", reliability="high", verdict="safe"),
        _row("커피", reliability="low", verdict="주의"),
    ]

    (summary,) = aggregate(rows)

    assert [entry.verdict for entry in summary.entries] == [Verdict.CAUTION]
    assert summary.entries[0].reliability == 1.0


def test_dedupe_prefers_higher_reliability_for_same_verdict():
    entries = [
        SourceEntry(source_name="a", verdict=Verdict.SAFE, reliability=1.0, url="u"),
        SourceEntry(source_name="b", verdict=Verdict.SAFE, reliability=4.0, url="u"),
    ]

    assert dedupe_entries(entries) == [entries[1]]


def test_dedupe_falls_back_to_source_name_without_url():
    rows = [
        _row("커피", source="맘카페", url=""),
        _row("커피", source="맘카페 ", url="  "),
        _row("커피", source="블로그", url=""),
    ]

    (summary,) = aggregate(rows)

    assert sorted(entry.source_name for entry in summary.entries) == ["맘카페", "블로그"]


def test_aggregate_drops_unflagged_and_unknown_verdict_rows():
    rows = [
        _row("커피", flag="FALSE", url="https://a.kr"),
        _row("커피", verdict="maybe", url="https://b.kr"),
        _row("커피", verdict="조건부", url="https://c.kr"),
        _row("  ", url="https://d.kr"),
    ]

    summaries = aggregate(rows)

    assert [summary.name for summary in summaries] == ["커피"]
    assert [entry.url for entry in summaries[0].entries] == ["https://c.kr"]
    assert summaries[0].entries[0].note == "조건부"


def test_aggregate_keeps_food_with_no_usable_rows():
    summaries = aggregate([_row("비타민", verdict="unknown")])

    assert summaries == [FoodSummary(name="비타민")]


def test_aggregate_sorts_entries_and_foods():
    rows = [
        _row("커피", reliability="blog", url="https://1.kr"),
        _row("커피", reliability="4.5", url="https://2.kr"),
        _row("커피", reliability="news", url="https://3.kr"),
        _row("녹차"),
    ]

    summaries = aggregate(rows)

    assert [summary.name for summary in summaries] == ["녹차", "커피"]
    assert [entry.reliability for entry in summaries[1].entries] == [4.5, 2.0, 1.0]


def test_parse_foods_from_csv_text():
    text = HEADER + '커피,gov,"식약처 ""공식""",https://a.kr,TRUE,주의\n'

    (summary,) = parse_foods(text)

    assert summary.entries[0].source_name == '식약처 "공식"'
    assert summary.entries[0].verdict is Verdict.CAUTION


def test_parse_foods_missing_name_column():
    with pytest.raises(DatasetLoadError):
        parse_foods("name,verdict\n커피,safe\n")


def test_parse_synonyms():
    text = 'key,aliases\n라떼,"커피우유| 카페라떼 |라떼|"\n,무시\n빙수\n'

    assert parse_synonyms(text) == {"라떼": ["커피우유", "카페라떼"]}


def test_parse_synonyms_requires_header_columns():
    assert parse_synonyms("name,alias\n라떼,커피우유\n") == {}
    assert parse_synonyms("") == {}
