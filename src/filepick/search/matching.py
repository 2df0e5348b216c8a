"""Fuzzy subsequence scoring and ranking of discovered paths."""

from __future__ import annotations

from collections.abc import Sequence

_BOUNDARY_CHARS = "/_-. "


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` against one query term.

    Returns ``None`` unless every query character occurs in order in the
    candidate (case-insensitive). Matches always score at least 1.
    """
    if not query:
        return 1
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()
    name_start = candidate_folded.rfind("/") + 1

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            run = 0
            score -= min(40, (idx - prev_idx - 1) * 2)
        if idx == 0 or candidate_folded[idx - 1] in _BOUNDARY_CHARS:
            score += 35
        if idx >= name_start:
            score += 10
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return max(1, score)


def path_score(query: str, candidate: str) -> int | None:
    """Sum of term scores for a whitespace-separated query; ``None`` when any term misses."""
    total = 0
    for term in query.split():
        score = fuzzy_score(term, candidate)
        if score is None:
            return None
        total += score
    return max(1, total)


def match_paths(paths: Sequence[str], query: str) -> list[str]:
    """Paths matching ``query`` ranked best first, ties in discovery order.

    An empty or whitespace-only query returns ``paths`` in their original order.
    """
    if not query.split():
        return list(paths)

    scored: list[tuple[int, int, str]] = []
    for idx, path in enumerate(paths):
        score = path_score(query, path)
        if score is None:
            continue
        scored.append((-score, idx, path))
    scored.sort()
    return [path for _, _, path in scored]
