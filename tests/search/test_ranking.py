"""Tests for relevance scoring and bucketed rank keys."""

import pytest

from mamma_me.schema import FoodSummary, SourceEntry, Verdict
from mamma_me.search.expand import expand_query
from mamma_me.search.hints import extract_hints
from mamma_me.search.index import build_token_index
from mamma_me.search.ranking import (
    BUCKET_EXACT,
    BUCKET_FALLBACK,
    BUCKET_HINT_IN_NAME,
    BUCKET_HINT_IS_NAME,
    BUCKET_SUBSTRING,
    BUCKET_SYNONYM_BOUNDARY,
    rank_key,
    relevance,
    sort_key,
)


def _food(name: str, verdict: Verdict = Verdict.SAFE, reliability: float = 2.0) -> FoodSummary:
    return FoodSummary(
        name=name,
        entries=(SourceEntry(source_name="src", verdict=verdict, reliability=reliability),),
    )


def _keys(foods: list[FoodSummary], query: str, synonyms: dict | None = None) -> dict:
    index = build_token_index(foods)
    expanded = expand_query(query, synonyms or {})
    hints = extract_hints(query, index)
    return {food.name: rank_key(food, query, expanded, hints) for food in foods}


def test_relevance_exact_match():
    assert relevance("커피", " 커 피 ", 2.0) == 1002.0


def test_relevance_prefix_containment_and_length():
    assert relevance("커피우유", "커피", 0.0) == pytest.approx(200 + 120 + 80 / 3)


def test_relevance_token_overlap_and_dataset_quality():
    score = relevance("green tea latte", "Green Tea", 1.0)

    assert score == pytest.approx(200 + 120 + 100 + 80 / 6 + 10)


def test_relevance_no_containment():
    assert relevance("녹차", "커피", 3.0) == pytest.approx(80 + 30)


def test_exact_match_lands_in_bucket_zero():
    foods = [_food("커피"), _food("커피우유")]

    keys = _keys(foods, "커피")

    assert keys["커피"].bucket == BUCKET_EXACT
    assert keys["커피"].score == 1_000_000 + foods[0].score_rounded
    assert keys["커피우유"].bucket > BUCKET_EXACT


def test_hint_equal_to_name_uses_bucket_one():
    foods = [_food("빙수"), _food("팥빙수"), _food("팥빙수라떼")]

    keys = _keys(foods, "팥빙수 주세요")

    # hints: ["팥빙수", "팥빙", "빙수"]
    assert keys["팥빙수"].bucket == BUCKET_HINT_IS_NAME
    assert keys["팥빙수"].score == 500_000 + 10_000 + 3 * 50 + 3
    assert keys["빙수"].bucket == BUCKET_HINT_IS_NAME
    assert keys["빙수"].score == 500_000 + (10_000 - 2 * 500) + 2 * 50 + 3
    assert keys["팥빙수라떼"].bucket == BUCKET_HINT_IN_NAME


def test_hint_in_name_boundary_bonus():
    foods = [_food("커피"), _food("디카페인 커피"), _food("커피우유")]

    keys = _keys(foods, "커피")

    assert keys["디카페인 커피"].bucket == BUCKET_HINT_IN_NAME
    assert keys["커피우유"].bucket == BUCKET_HINT_IN_NAME
    boundary = 200_000 + 5_000 + 2 * 200 + 2_000 + relevance("디카페인 커피", "커피", 3)
    embedded = 200_000 + 5_000 + 2 * 200 + relevance("커피우유", "커피", 3)
    assert keys["디카페인 커피"].score == pytest.approx(boundary)
    assert keys["커피우유"].score == pytest.approx(embedded)


def test_synonym_boundary_bucket_and_fallback():
    foods = [_food("커피"), _food("아이스 커피"), _food("커피우유")]

    keys = _keys(foods, "아메리카노", {"아메리카노": ["커피"]})

    assert keys["커피"].bucket == BUCKET_SYNONYM_BOUNDARY
    assert keys["아이스 커피"].bucket == BUCKET_SYNONYM_BOUNDARY
    assert keys["커피"].score == pytest.approx(80_000 + relevance("커피", "아메리카노", 3))
    # The alias only appears inside a longer word, so nothing structural matches.
    assert keys["커피우유"].bucket == BUCKET_FALLBACK


def test_raw_substring_bucket_penalizes_trailing_hangul():
    foods = [_food("생굴"), _food("굴전")]

    keys = _keys(foods, "굴")

    assert keys["생굴"].bucket == BUCKET_SUBSTRING
    assert keys["굴전"].bucket == BUCKET_SUBSTRING
    assert keys["생굴"].score == pytest.approx(10_000 + 120 + 40 + 30)
    assert keys["굴전"].score == pytest.approx(10_000 + 200 + 120 + 40 + 30 - 120)


def test_sort_key_orders_bucket_then_score_then_shorter_name():
    foods = [_food("아이스 커피"), _food("커피우유"), _food("커피")]
    query = "아메리카노"
    synonyms = {"아메리카노": ["커피"]}
    index = build_token_index(foods)
    expanded = expand_query(query, synonyms)
    hints = extract_hints(query, index)

    ordered = sorted(foods, key=lambda food: sort_key(food, query, expanded, hints))

    assert [food.name for food in ordered] == ["커피", "아이스 커피", "커피우유"]


def test_sort_key_prefers_safer_food_within_bucket():
    risky = _food("참치회", Verdict.AVOID)
    safe = _food("연어회", Verdict.SAFE)

    risky_key = sort_key(risky, "사시미", ["사시미", "참치회", "연어회"], [])
    safe_key = sort_key(safe, "사시미", ["사시미", "참치회", "연어회"], [])

    # Relevance includes the verdict score, so the safer food also scores higher.
    assert safe_key < risky_key


def test_exact_match_outranks_every_other_bucket():
    foods = [_food("팥빙수"), _food("팥"), _food("팥죽"), _food("빙수")]
    query = "팥"
    index = build_token_index(foods)
    expanded = expand_query(query, {"팥": ["팥빙수"]})
    hints = extract_hints(query, index)

    exact = rank_key(foods[1], query, expanded, hints)
    others = [rank_key(food, query, expanded, hints) for food in foods if food.name != "팥"]

    assert all(exact.bucket < other.bucket for other in others)
