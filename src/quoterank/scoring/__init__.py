"""Vendor scoring engine."""

from .engine import ScoringEngine, compute_scores
from .models import (
    ScoringWeights,
    ScoringConstants,
    ScoringConfig,
    RawScore,
    NormalizedScore,
    Components,
    FinalResult,
    RankedResult,
)

__all__ = [
    "ScoringEngine",
    "compute_scores",
    "ScoringWeights",
    "ScoringConstants",
    "ScoringConfig",
    "RawScore",
    "NormalizedScore",
    "Components",
    "FinalResult",
    "RankedResult",
]
