"""Weight merging and renormalisation."""

from typing import Mapping, Optional, Union

from .models import ScoringWeights


def normalize_weights(weights: ScoringWeights) -> ScoringWeights:
    """Scale weights to sum to 1.

    An all-zero input is returned unchanged instead of dividing by zero.
    """
    total = weights.total
    if total == 0:
        return weights
    return ScoringWeights(
        price=weights.price / total,
        lead_time=weights.lead_time / total,
        quality=weights.quality / total,
        reliability=weights.reliability / total,
    )


def resolve_weights(
    overrides: Optional[Union[ScoringWeights, Mapping[str, float]]] = None,
) -> ScoringWeights:
    """Defaults, then ``overrides``, then renormalised."""
    return normalize_weights(ScoringWeights.from_overrides(overrides))
