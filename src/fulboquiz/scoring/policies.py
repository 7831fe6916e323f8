"""Stateless scoring policies, one per quiz mode."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from fulboquiz.ingest.normalize import normalize_free_text


# (max distance, points) checked in order; anything further scores 0.
AGE_DISTANCE_TABLE: Tuple[Tuple[int, int], ...] = (
    (0, 10),
    (1, 8),
    (2, 6),
    (3, 4),
    (5, 2),
)
AGE_MAX_POINTS = AGE_DISTANCE_TABLE[0][1]

# (minimum found ratio, score) checked in order.
FREE_TEXT_TABLE: Tuple[Tuple[float, float], ...] = (
    (0.7, 1.0),
    (0.5, 0.8),
    (0.3, 0.5),
    (0.1, 0.2),
)
FREE_TEXT_STREAK_THRESHOLD = 0.8

MIN_SUGGESTION_INPUT = 2
MAX_SUGGESTIONS = 5


def score_exact_choice(chosen: str | None, target: str | None) -> int:
    if chosen is None or target is None:
        return 0
    return 1 if chosen.strip() == target.strip() else 0


def score_age_guess(guess: int, actual: int) -> int:
    diff = abs(guess - actual)
    for max_diff, points in AGE_DISTANCE_TABLE:
        if diff <= max_diff:
            return points
    return 0


def score_free_text(found: int, total: int) -> float:
    """Partial credit for finding ``found`` of ``total`` answers."""

    if total < 1:
        raise ValueError("a question needs at least one answer")
    ratio = found / total
    for threshold, score in FREE_TEXT_TABLE:
        if ratio >= threshold:
            return score
    return 0.0


def match_answer(text: str, answers: Sequence[str], found: Iterable[str] = ()) -> str | None:
    """Return the member of ``answers`` that ``text`` names, unless already found."""

    needle = normalize_free_text(text)
    if not needle:
        return None
    found_norm = {normalize_free_text(item) for item in found}
    for answer in answers:
        norm = normalize_free_text(answer)
        if norm == needle and norm not in found_norm:
            return answer
    return None


def suggest_answers(
    partial: str,
    answers: Sequence[str],
    found: Iterable[str] = (),
    *,
    limit: int = MAX_SUGGESTIONS,
) -> List[str]:
    if len(partial) < MIN_SUGGESTION_INPUT:
        return []
    needle = normalize_free_text(partial)
    if not needle:
        return []
    found_norm = {normalize_free_text(item) for item in found}
    suggestions: List[str] = []
    for answer in answers:
        norm = normalize_free_text(answer)
        if needle in norm and norm not in found_norm:
            suggestions.append(answer)
            if len(suggestions) >= limit:
                break
    return suggestions


__all__ = [
    "AGE_DISTANCE_TABLE",
    "AGE_MAX_POINTS",
    "FREE_TEXT_STREAK_THRESHOLD",
    "FREE_TEXT_TABLE",
    "match_answer",
    "score_age_guess",
    "score_exact_choice",
    "score_free_text",
    "suggest_answers",
]
