"""Weighted combination of normalised criteria and ordering."""

from typing import Dict, Optional, Sequence

from .models import (
    CRITERIA,
    FinalResult,
    NormalizedScore,
    RankedResult,
    RawScore,
    ScoringWeights,
)


def weighted_score(normalized: NormalizedScore, weights: ScoringWeights) -> float:
    score = 0.0
    for criterion in CRITERIA:
        score += weights.get(criterion) * normalized.get(criterion)
    return score


def rank_vendors(
    normalized: Sequence[NormalizedScore],
    weights: ScoringWeights,
    raw_by_index: Optional[Dict[int, RawScore]] = None,
) -> RankedResult:
    """Score every vendor and sort descending.

    ``sorted`` is stable, so equal scores keep the order the quotes came in.
    """
    raw_by_index = raw_by_index or {}
    finals = [
        FinalResult(
            vendor=n.vendor,
            components=n.components,
            score=weighted_score(n, weights),
            raw=raw_by_index.get(i),
        )
        for i, n in enumerate(normalized)
    ]
    ranked = sorted(finals, key=lambda f: f.score, reverse=True)
    return RankedResult(weights=weights, vendors=tuple(ranked))
