"""Scoring configuration: weights, currency table and substitution constants."""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any, Mapping, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)

# criterion attribute -> stable contract key
CRITERIA: Tuple[str, ...] = ("price", "lead_time", "quality", "reliability")
CONTRACT_KEYS: Dict[str, str] = {
    "price": "price",
    "lead_time": "leadTime",
    "quality": "quality",
    "reliability": "reliability",
}

WEIGHT_KEY_ALIASES: Dict[str, str] = {
    "price": "price",
    "leadTime": "lead_time",
    "lead_time": "lead_time",
    "quality": "quality",
    "reliability": "reliability",
}

DEFAULT_MISSING_ITEM_PENALTY = 1e9
DEFAULT_UNKNOWN_LEAD_TIME_DAYS = 9999.0
DEFAULT_DEFECT_RATE = 0.05
DEFAULT_ON_TIME_RATE = 0.90
DEFAULT_CURRENCY_RATE = 1.0


@dataclass(frozen=True)
class ScoringWeights:
    """Relative importance of each criterion. Need not sum to 1 until normalised."""
    price: float = 0.4
    lead_time: float = 0.2
    quality: float = 0.2
    reliability: float = 0.2

    @classmethod
    def from_overrides(
        cls,
        overrides: Optional[Union["ScoringWeights", Mapping[str, float]]] = None,
        base: Optional["ScoringWeights"] = None,
    ) -> "ScoringWeights":
        """Defaults (or ``base``) first, then any recognised keys from ``overrides``.

        Keys may use the contract spelling (``leadTime``) or the attribute
        spelling (``lead_time``). Unknown keys are ignored.
        """
        start = base if base is not None else cls()
        if overrides is None:
            return start
        if isinstance(overrides, ScoringWeights):
            return overrides

        updates: Dict[str, float] = {}
        for key, value in overrides.items():
            attr = WEIGHT_KEY_ALIASES.get(key)
            if attr is None:
                logger.debug("Ignoring unknown weight key %r", key)
                continue
            updates[attr] = float(value)
        return replace(start, **updates)

    @property
    def total(self) -> float:
        return self.price + self.lead_time + self.quality + self.reliability

    def get(self, criterion: str) -> float:
        return getattr(self, criterion)

    def to_dict(self) -> Dict[str, float]:
        return {CONTRACT_KEYS[c]: self.get(c) for c in CRITERIA}


@dataclass(frozen=True)
class ScoringConstants:
    """Substitution values used when business data is missing."""
    missing_item_penalty: float = DEFAULT_MISSING_ITEM_PENALTY
    unknown_lead_time_days: float = DEFAULT_UNKNOWN_LEAD_TIME_DAYS
    default_defect_rate: float = DEFAULT_DEFECT_RATE
    default_on_time_rate: float = DEFAULT_ON_TIME_RATE
    default_currency_rate: float = DEFAULT_CURRENCY_RATE

    @classmethod
    def from_overrides(
        cls,
        overrides: Optional[Mapping[str, float]] = None,
        base: Optional["ScoringConstants"] = None,
    ) -> "ScoringConstants":
        start = base if base is not None else cls()
        if not overrides:
            return start
        known = {f.name for f in fields(cls)}
        updates = {k: float(v) for k, v in overrides.items() if k in known}
        for k in overrides:
            if k not in known:
                logger.debug("Ignoring unknown scoring constant %r", k)
        return replace(start, **updates)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ScoringConfig:
    """Weights, currency table and substitution constants for one scoring run."""
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    currency_rates: Mapping[str, float] = field(default_factory=dict)
    constants: ScoringConstants = field(default_factory=ScoringConstants)

    @classmethod
    def from_overrides(
        cls,
        *,
        weights: Optional[Union[ScoringWeights, Mapping[str, float]]] = None,
        currency_rates: Optional[Mapping[str, float]] = None,
        constants: Optional[Mapping[str, float]] = None,
        base: Optional["ScoringConfig"] = None,
    ) -> "ScoringConfig":
        """Build a config from ``base`` (or defaults) with each section overridden key by key."""
        start = base if base is not None else cls()
        rates = dict(start.currency_rates)
        if currency_rates:
            rates.update(currency_rates)
        return cls(
            weights=ScoringWeights.from_overrides(weights, base=start.weights),
            currency_rates=rates,
            constants=ScoringConstants.from_overrides(constants, base=start.constants),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": self.weights.to_dict(),
            "currencyRates": dict(self.currency_rates),
            "constants": self.constants.to_dict(),
        }

