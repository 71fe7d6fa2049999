from __future__ import annotations

from crisis_assistant.ranking import (
    calculate_relevance_score,
    ranking_explanation,
    rerank_organizations,
    should_filter_by_search_context,
)


def _org(name: str, description: str = "") -> dict:
    return {"slug": name.lower().replace(" ", "-"), "name": name, "description": description}


def test_exact_match_scores_highest() -> None:
    assert calculate_relevance_score("Oxfam America", _org("OXFAM AMERICA")) == 1000


def test_contained_name_with_main_org_bonus() -> None:
    # contains 500 + two matched words 200 + "america" marker 50
    assert calculate_relevance_score("red cross", _org("American Red Cross")) == 750


def test_corporate_suffix_penalty() -> None:
    assert calculate_relevance_score("helping hands", _org("Helping Hands Inc")) == 500
    assert calculate_relevance_score("helping hands inc", _org("Helping Hands Inc")) == 1000


def test_description_matches_add_points() -> None:
    plain = calculate_relevance_score("flood relief", _org("Flood Relief Network"))
    described = calculate_relevance_score("flood relief", _org("Flood Relief Network", "Flood relief in Asia"))
    assert described - plain == 100


def test_no_word_overlap_and_student_chapter_penalties() -> None:
    assert calculate_relevance_score("oxfam", _org("Save the Children")) == -500
    assert calculate_relevance_score("red cross", _org("Red Cross Student Chapter")) == 400


def test_rerank_orders_by_score_and_keeps_ties_stable() -> None:
    records = [
        _org("Red Cross Student Chapter"),
        _org("Cross Roads Red"),
        _org("Red Cross Roads"),
        _org("Red Cross"),
    ]

    ranked = rerank_organizations(records, "red cross")

    assert [r["name"] for r in ranked] == [
        "Red Cross",
        "Red Cross Roads",
        "Red Cross Student Chapter",
        "Cross Roads Red",
    ]


def test_rerank_without_term_is_identity() -> None:
    records = [_org("B"), _org("A")]
    ranked = rerank_organizations(records, "")
    assert ranked == records
    assert ranked is not records


def test_should_filter_by_search_context() -> None:
    assert should_filter_by_search_context(_org("Red Cross Student Chapter"), "red cross")
    assert not should_filter_by_search_context(_org("Red Cross Student Chapter"), "red cross student")
    assert should_filter_by_search_context(_org("Save the Children"), "oxfam")
    assert not should_filter_by_search_context(_org("Oxfam America"), "oxfam")
    assert not should_filter_by_search_context(_org("Anything"), "us")


def test_ranking_explanation() -> None:
    assert ranking_explanation(_org("Oxfam"), "oxfam", 1) == 'Exact match for "oxfam"'
    assert ranking_explanation(_org("Oxfam America"), "Oxfam", 1) == 'Name contains "Oxfam"'
    assert ranking_explanation(_org("Cross Red Org"), "red cross", 2) == "Matches all search terms"
    assert ranking_explanation(_org("Red River"), "red aid", 3) == "Matches 1 of 2 search terms"
    assert ranking_explanation(_org("Unrelated"), "red aid", 4) == "Ranked #4 by relevance"
