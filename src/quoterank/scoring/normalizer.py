"""Min-max normalisation of raw criteria across one RFQ's vendor set."""

import logging
from typing import List, Sequence

import numpy as np

from .models import CRITERIA, LOWER_IS_BETTER, NormalizedScore, RawScore

logger = logging.getLogger(__name__)


def normalize_criterion(values: Sequence[float], lower_is_better: bool) -> np.ndarray:
    """Rescale one criterion to [0, 1].

    - min/max are taken over finite values only
    - a non-finite value maps to 0
    - if every finite value ties, each of them maps to 1
    - lower-is-better criteria are inverted so the cheapest/fastest gets 1
    """
    arr = np.asarray(values, dtype=float)
    finite = np.isfinite(arr)
    out = np.zeros(arr.shape, dtype=float)
    if not finite.any():
        return out

    lo = arr[finite].min()
    hi = arr[finite].max()
    if hi == lo:
        out[finite] = 1.0
        return out

    span = hi - lo
    if lower_is_better:
        out[finite] = (hi - arr[finite]) / span
    else:
        out[finite] = (arr[finite] - lo) / span
    return out


def normalize_scores(raw_scores: Sequence[RawScore]) -> List[NormalizedScore]:
    """Normalise each criterion independently; order follows ``raw_scores``."""
    if not raw_scores:
        return []

    columns = {}
    for criterion in CRITERIA:
        column = normalize_criterion(
            [r.get(criterion) for r in raw_scores],
            lower_is_better=criterion in LOWER_IS_BETTER,
        )
        columns[criterion] = column
        logger.debug("normalised %s: %s", criterion, column.tolist())

    return [
        NormalizedScore(
            vendor=raw.vendor,
            price=float(columns["price"][i]),
            lead_time=float(columns["lead_time"][i]),
            quality=float(columns["quality"][i]),
            reliability=float(columns["reliability"][i]),
        )
        for i, raw in enumerate(raw_scores)
    ]
