"""Majority vote among the best-scored candidates.

MyMemory's top ``responseData`` can be wrong due to low-quality community
contributions, so the translation command looks at every match: take the
highest score, then the most frequent (case-insensitive) text among the
candidates that reached it. Ties on frequency keep the first one seen.

Scores are compared with exact equality. They arrive as fixed-precision JSON
numbers, but two values that differ only by rounding error would not tie.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from core.domain.translation import ScoredCandidate

EMPTY_CANDIDATE = ScoredCandidate(text="", score=0.0)


def best_candidate(candidates: Sequence[ScoredCandidate]) -> ScoredCandidate:
    if not candidates:
        return EMPTY_CANDIDATE

    best_score = max(candidate.score for candidate in candidates)
    top = [candidate for candidate in candidates if candidate.score == best_score]
    votes = Counter(candidate.tiebreak_key for candidate in top)

    winner = top[0]
    winner_votes = 0
    for candidate in top:
        if votes[candidate.tiebreak_key] > winner_votes:
            winner = candidate
            winner_votes = votes[candidate.tiebreak_key]
    return winner
