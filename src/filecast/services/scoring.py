"""Lexical fuzzy scoring of a candidate string against a query."""

from __future__ import annotations

EXACT_SCORE = 100
PREFIX_SCORE = 90
SUBSTRING_SCORE = 70
SUBSEQUENCE_BASE = 40
CONSECUTIVE_BONUS = 5
WORD_START_BONUS = 10
SUBSEQUENCE_CAP = 65


def fuzzy_score(query: str, text: str) -> int:
    """Score ``text`` against ``query`` case-insensitively, 0 (no match) to 100 (exact).

    Exact match beats prefix, prefix beats substring, substring beats an
    in-order subsequence. Subsequence scores start at 40, gain 5 for each
    matched character directly following the previous match and 10 if any
    word of ``text`` starts with the query's first character, capped at 65.
    """
    query_lower = query.lower()
    text_lower = text.lower()

    if text_lower == query_lower:
        return EXACT_SCORE
    if text_lower.startswith(query_lower):
        return PREFIX_SCORE
    if query_lower in text_lower:
        return SUBSTRING_SCORE

    query_idx = 0
    consecutive = 0
    last_match: int | None = None
    for i, char in enumerate(text_lower):
        if query_idx < len(query_lower) and char == query_lower[query_idx]:
            if last_match is not None and i == last_match + 1:
                consecutive += CONSECUTIVE_BONUS
            last_match = i
            query_idx += 1

    if query_idx < len(query_lower):
        return 0

    first = query_lower[0]
    boundary = WORD_START_BONUS if any(w.startswith(first) for w in text_lower.split()) else 0
    return min(SUBSEQUENCE_BASE + consecutive + boundary, SUBSEQUENCE_CAP)
