"""Data models for vendor scoring."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple

from quoterank.config.scoring import (
    CRITERIA,
    CONTRACT_KEYS,
    ScoringWeights,
    ScoringConstants,
    ScoringConfig,
)

# lower raw value wins
LOWER_IS_BETTER = frozenset({"price", "lead_time"})

__all__ = [
    "CRITERIA",
    "CONTRACT_KEYS",
    "LOWER_IS_BETTER",
    "ScoringWeights",
    "ScoringConstants",
    "ScoringConfig",
    "RawScore",
    "Components",
    "NormalizedScore",
    "FinalResult",
    "RankedResult",
]


@dataclass(frozen=True)
class RawScore:
    """Per-vendor criteria in native units (cost in base currency, days, rates)."""
    vendor: str
    price: float
    lead_time: float
    quality: float
    reliability: float

    def get(self, criterion: str) -> float:
        return getattr(self, criterion)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"vendor": self.vendor}
        d.update({CONTRACT_KEYS[c]: self.get(c) for c in CRITERIA})
        return d


@dataclass(frozen=True)
class Components:
    """Normalised criteria of one vendor, each in [0, 1]."""
    price: float
    lead_time: float
    quality: float
    reliability: float

    def get(self, criterion: str) -> float:
        return getattr(self, criterion)

    def to_dict(self) -> Dict[str, float]:
        return {CONTRACT_KEYS[c]: self.get(c) for c in CRITERIA}


@dataclass(frozen=True)
class NormalizedScore(RawScore):
    """Same shape as RawScore, rescaled to [0, 1] across the vendor set."""

    @property
    def components(self) -> Components:
        return Components(
            price=self.price,
            lead_time=self.lead_time,
            quality=self.quality,
            reliability=self.reliability,
        )


@dataclass(frozen=True)
class FinalResult:
    vendor: str
    components: Components
    score: float
    raw: Optional[RawScore] = None  # kept for export, not part of the contract

    def to_dict(self, include_raw: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "vendor": self.vendor,
            "components": self.components.to_dict(),
            "score": self.score,
        }
        if include_raw and self.raw is not None:
            raw = self.raw.to_dict()
            raw.pop("vendor")
            d["raw"] = raw
        return d


@dataclass(frozen=True)
class RankedResult:
    weights: ScoringWeights
    vendors: Tuple[FinalResult, ...] = ()

    @property
    def winner(self) -> Optional[FinalResult]:
        return self.vendors[0] if self.vendors else None

    def to_dict(self, include_raw: bool = False) -> Dict[str, Any]:
        vendors = [v.to_dict(include_raw=include_raw) for v in self.vendors]
        return {
            "weights": self.weights.to_dict(),
            "vendors": vendors,
            "winner": vendors[0] if vendors else None,
        }

