"""Unit tests for similar-note ranking."""

import math

import pytest

from notebook_index.search.derived_index import build_derived_index
from notebook_index.search.similarity import inverse_document_frequency, rank_similar


pytestmark = pytest.mark.unit


@pytest.fixture
def garden_notes(make_note):
    return [
        make_note("a", "Spring garden", "Plant tomatoes and basil. See [[Seeds]] and [[Compost]]."),
        make_note("b", "Garden tools", "Tomatoes need stakes. The garden shed holds tools. [[Compost]]"),
        make_note("c", "Budget", "Monthly spending review."),
        make_note("d", "Seed catalog", "Basil and tomatoes varieties. [[Seeds]]"),
    ]


def test_inverse_document_frequency():
    assert inverse_document_frequency(1, 3) == pytest.approx(math.log(2.5))


def test_scores_shared_tokens_with_idf(plan_and_budget):
    index = build_derived_index(plan_and_budget)
    plan, budget = plan_and_budget

    [match] = rank_similar(plan, plan_and_budget, index, top_k=3)

    assert match.note.id == "budget"
    # project, budget and notes appear once in each of the two notes
    assert match.score == pytest.approx(3 * 2 * math.log(1 + 2 / 3))
    assert match.shared_tokens == ("project", "budget", "notes")
    assert match.shared_links == ()


def test_shared_links_add_three_points_each(make_note):
    first = make_note("a", "One", "[[Tea]]")
    second = make_note("b", "Two", "see [[tea]]")
    notes = [first, second]

    [match] = rank_similar(first, notes, build_derived_index(notes))

    assert match.score == 3.0
    assert match.shared_links == ("tea",)


@pytest.mark.parametrize(("left", "right"), [(0, 1), (0, 3), (1, 3), (0, 2)])
def test_scores_are_symmetric(garden_notes, left, right):
    index = build_derived_index(garden_notes)
    a, b = garden_notes[left], garden_notes[right]

    forward = {match.note.id: match.score for match in rank_similar(a, garden_notes, index, top_k=10)}
    backward = {match.note.id: match.score for match in rank_similar(b, garden_notes, index, top_k=10)}

    assert forward.get(b.id, 0.0) == pytest.approx(backward.get(a.id, 0.0))


def test_excludes_self_and_unrelated_notes(garden_notes):
    index = build_derived_index(garden_notes)

    ids = [match.note.id for match in rank_similar(garden_notes[0], garden_notes, index, top_k=10)]

    assert "a" not in ids
    assert "c" not in ids


def test_results_sorted_and_truncated(garden_notes):
    index = build_derived_index(garden_notes)

    matches = rank_similar(garden_notes[0], garden_notes, index, top_k=1)

    assert len(matches) == 1
    full = rank_similar(garden_notes[0], garden_notes, index, top_k=10)
    assert [match.score for match in full] == sorted((match.score for match in full), reverse=True)
    assert matches[0] == full[0]
    assert rank_similar(garden_notes[0], garden_notes, index, top_k=0) == []


def test_shared_tokens_are_capped_at_three(make_note):
    words = "alpha bravo charlie delta echos"
    notes = [make_note("a", "", words), make_note("b", "", words)]

    [match] = rank_similar(notes[0], notes, build_derived_index(notes))

    assert match.shared_tokens == ("alpha", "bravo", "charlie")


def test_unsaved_draft_is_scored_from_its_own_text(garden_notes, make_note):
    index = build_derived_index(garden_notes)
    draft = make_note("draft", "", "More tomatoes and basil for the garden")

    ids = [match.note.id for match in rank_similar(draft, garden_notes, index, top_k=10)]

    assert ids
    assert "c" not in ids
