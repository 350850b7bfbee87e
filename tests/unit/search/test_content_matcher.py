"""Unit tests for content matching strategies."""

import pytest

from notebook_index.search.content_matcher import find_substring_match, find_token_match, find_wiki_link_match
from notebook_index.search.ranges import TextRange


@pytest.mark.unit
def test_wiki_link_match_adds_bonus_and_shifts_ranges():
    match = find_wiki_link_match("See [[Budget Notes]] for details.", "budget")

    assert match.score == 460.0 + 40.0
    assert match.snippet == "[[Budget Notes]]"
    assert match.ranges == (TextRange(2, 8),)


@pytest.mark.unit
def test_wiki_link_match_keeps_best_occurrence():
    match = find_wiki_link_match("[[Plan B]] and [[Plan]]", "plan")

    assert match.snippet == "[[Plan]]"
    assert match.score == 620.0 + 40.0


@pytest.mark.unit
def test_wiki_link_fuzzy_needs_four_characters():
    assert find_wiki_link_match("[[Budget]]", "bgt") is None

    match = find_wiki_link_match("[[Budget]]", "bdgt")
    assert match.score == 180.0 + 72.0 + 40.0
    assert match.ranges == (TextRange(2, 3), TextRange(4, 6), TextRange(7, 8))


@pytest.mark.unit
def test_wiki_link_match_without_links():
    assert find_wiki_link_match("no links here", "links") is None
    assert find_wiki_link_match("", "links") is None


@pytest.mark.unit
@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("Budget early", 180.0),
        ("x" * 100 + "budget", 130.0),
        ("x" * 400 + "budget", 40.0),
    ],
)
def test_substring_score_decays_with_position(content, expected):
    assert find_substring_match(content, "budget").score == expected


@pytest.mark.unit
def test_substring_snippet_and_ranges():
    match = find_substring_match("Budget early", "budget")

    assert match.snippet == "Budget early"
    assert match.ranges == (TextRange(0, 6),)


@pytest.mark.unit
def test_substring_missing():
    assert find_substring_match("nothing", "budget") is None


@pytest.mark.unit
def test_token_match_ignores_order():
    content = "the garden needs a spring plan"
    match = find_token_match(content, ["spring", "garden"])

    assert match.score == pytest.approx(130.0 - 4 * 0.4 + 2 * 8.0)
    assert match.ranges == (TextRange(4, 10), TextRange(19, 25))


@pytest.mark.unit
def test_token_match_deduplicates_terms():
    match = find_token_match("the garden", ["garden", "garden"])

    assert match.score == pytest.approx(130.0 - 4 * 0.4 + 8.0)


@pytest.mark.unit
def test_token_match_requires_every_term():
    assert find_token_match("the garden", ["garden", "winter"]) is None
    assert find_token_match("the garden", []) is None


@pytest.mark.unit
def test_ranges_stay_aligned_after_expanding_lowercase():
    content = "İstanbul spring budget"

    substring = find_substring_match(content, "budget")
    tokens = find_token_match(content, ["budget", "spring"])

    assert substring.snippet == content
    assert [content[item.start : item.end] for item in substring.ranges] == ["budget"]
    assert [content[item.start : item.end] for item in tokens.ranges] == ["spring", "budget"]
