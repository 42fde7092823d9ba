"""Tests for token index building, hint extraction and query expansion."""

from mamma_me.schema import FoodSummary
from mamma_me.search import index as index_module
from mamma_me.search.expand import expand_query
from mamma_me.search.hints import extract_hints
from mamma_me.search.index import TokenIndex, TokenIndexCache, build_token_index


def _foods(*names: str) -> list[FoodSummary]:
    return [FoodSummary(name=name) for name in names]


def test_build_token_index_collects_2_to_4_substrings():
    index = build_token_index(_foods("팥빙수", "커피 우유"))

    assert {"팥빙", "빙수", "팥빙수"} <= index.substrings2to4
    assert {"커피", "피우", "우유", "커피우", "피우유", "커피우유"} <= index.substrings2to4
    assert "팥" not in index.substrings2to4
    assert "커피 우" not in index.substrings2to4


def test_build_token_index_single_char_names():
    index = build_token_index(_foods("팥", "굴", "팥빙수", " ", ""))

    assert index.whole_single_char == frozenset({"팥", "굴"})


def test_build_token_index_is_deterministic():
    foods = _foods("커피", "녹차", "팥")
    assert build_token_index(foods) == build_token_index(list(foods))


def test_extract_hints_prefers_longer_hints_and_drops_covered_single_chars():
    index = build_token_index(_foods("팥", "팥빙수"))

    hints = extract_hints("팥빙수", index)

    assert hints[0] == "팥빙수"
    assert hints == ["팥빙수", "팥빙", "빙수"]
    assert "팥" not in hints


def test_extract_hints_keeps_single_char_when_no_longer_hint():
    index = build_token_index(_foods("팥", "팥빙수"))

    assert extract_hints("팥 주세요", index) == ["팥"]


def test_extract_hints_orders_by_position_in_query():
    index = build_token_index(_foods("녹차", "커피"))

    assert extract_hints("커피랑 녹차 중에", index) == ["커피", "녹차"]


def test_extract_hints_single_char_kept_when_not_covered():
    index = build_token_index(_foods("굴", "커피"))

    assert extract_hints("커피와 굴", index) == ["커피", "굴"]


def test_extract_hints_empty_cases():
    index = build_token_index(_foods("커피"))

    assert extract_hints("", index) == []
    assert extract_hints("   ", index) == []
    assert extract_hints("녹차", index) == []
    assert extract_hints("커피", TokenIndex()) == []


def test_expand_query_dedupes_preserving_order():
    assert expand_query("라떼", {"라떼": ["커피우유", "커피우유", "카페라떼"]}) == [
        "라떼",
        "커피우유",
        "카페라떼",
    ]


def test_expand_query_appends_normalized_form_and_its_aliases():
    synonyms = {"Ice Tea": ["아이스티"], "icetea": ["냉차", "아이스티"]}

    assert expand_query("  Ice Tea ", synonyms) == ["Ice Tea", "icetea", "아이스티", "냉차"]


def test_expand_query_filters_blank_aliases():
    assert expand_query("빙수", {"빙수": [" ", "", " 팥빙수 "]}) == ["빙수", "팥빙수"]


def test_expand_query_blank_input():
    assert expand_query("", {"": ["커피"]}) == []
    assert expand_query("   ", {}) == []


def test_token_index_cache_reuses_index_for_same_dataset(mocker):
    spy = mocker.spy(index_module, "build_token_index")
    cache = TokenIndexCache()
    foods = _foods("커피", "녹차")

    first = cache.get(foods, version=1)
    second = cache.get(foods, version=1)

    assert first is second
    assert spy.call_count == 1


def test_token_index_cache_rebuilds_on_new_dataset_or_version(mocker):
    spy = mocker.spy(index_module, "build_token_index")
    cache = TokenIndexCache()
    foods = _foods("커피")

    cache.get(foods, version=1)
    cache.get(foods, version=2)
    rebuilt = cache.get(_foods("녹차"), version=2)

    assert spy.call_count == 3
    assert "녹차" in rebuilt.substrings2to4
