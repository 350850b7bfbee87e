"""Similar-note ranking from shared vocabulary and shared links.

For a target note A and a candidate B:

    score = sum over tokens t in both A and B of
                (count_A(t) + count_B(t)) * ln(1 + N / (1 + df(t)))
            + 3 * |links(A) & links(B)|

where N is the number of notes and df the document frequency. Every term is
symmetric in A and B, so ``score(A, B) == score(B, A)``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import math

from notebook_index.domain.model import Note
from notebook_index.search.derived_index import DerivedIndex, note_link_map, note_token_counts


SHARED_LINK_WEIGHT = 3.0
MAX_SHARED_TOKENS = 3
DEFAULT_TOP_K = 3


@dataclass(frozen=True)
class SimilarityMatch:
    note: Note
    score: float
    shared_tokens: tuple[str, ...] = field(default_factory=tuple)
    shared_links: tuple[str, ...] = field(default_factory=tuple)


def inverse_document_frequency(doc_frequency: int, total_notes: int) -> float:
    return math.log(1 + total_notes / (1 + doc_frequency))


def pair_score(
    target_tokens: Mapping[str, int],
    candidate_tokens: Mapping[str, int],
    target_links: Mapping[str, str],
    candidate_links: Mapping[str, str],
    index: DerivedIndex,
    total_notes: int,
) -> tuple[float, list[str], list[str]]:
    """Score one pair and collect display examples.

    Returns the score, up to three shared tokens (in the target's token
    order), and the candidate's labels for every shared link target.
    """
    score = 0.0
    shared_tokens: list[str] = []
    for token, count in target_tokens.items():
        other_count = candidate_tokens.get(token)
        if not other_count:
            continue
        idf = inverse_document_frequency(index.document_frequency(token), total_notes)
        score += (count + other_count) * idf
        if len(shared_tokens) < MAX_SHARED_TOKENS:
            shared_tokens.append(token)

    shared_links = [label for key, label in candidate_links.items() if key in target_links]
    score += len(shared_links) * SHARED_LINK_WEIGHT
    return score, shared_tokens, shared_links


def rank_similar(
    note: Note,
    notes: Sequence[Note],
    index: DerivedIndex,
    top_k: int = DEFAULT_TOP_K,
) -> list[SimilarityMatch]:
    """Top ``top_k`` notes most similar to ``note``, best first.

    ``note`` itself is never returned. When it is not part of the indexed
    collection (an unsaved draft) its tokens and links are derived on the fly.
    """
    if top_k <= 0:
        return []

    if note.id in index.token_frequency or note.id in index.link_map:
        target_tokens = index.tokens_for(note.id)
        target_links = index.links_for(note.id)
    else:
        target_tokens = note_token_counts(note)
        target_links = note_link_map(note)

    total_notes = len(notes)
    matches: list[SimilarityMatch] = []
    for candidate in notes:
        if candidate.id == note.id:
            continue
        score, shared_tokens, shared_links = pair_score(
            target_tokens,
            index.tokens_for(candidate.id),
            target_links,
            index.links_for(candidate.id),
            index,
            total_notes,
        )
        if score > 0:
            matches.append(
                SimilarityMatch(
                    note=candidate,
                    score=score,
                    shared_tokens=tuple(shared_tokens),
                    shared_links=tuple(shared_links),
                )
            )

    matches.sort(key=lambda match: match.score, reverse=True)
    return matches[:top_k]
