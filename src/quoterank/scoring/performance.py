"""Quality and reliability from vendor history."""

import math
from typing import Optional, Tuple

from quoterank.domain.models import VendorHistory
from .models import ScoringConstants


def _rate_or(x: Optional[float], default: float) -> float:
    if x is None or isinstance(x, bool) or not isinstance(x, (int, float)):
        return default
    return float(x) if math.isfinite(x) else default


def derive_quality_reliability(
    history: Optional[VendorHistory],
    constants: ScoringConstants,
) -> Tuple[float, float]:
    """Return ``(quality, reliability)``.

    New suppliers without history get the moderate defaults rather than zero,
    each field falling back on its own.
    """
    if history is None:
        history = VendorHistory()
    defect_rate = _rate_or(history.defect_rate, constants.default_defect_rate)
    on_time_rate = _rate_or(history.on_time_rate, constants.default_on_time_rate)
    return 1.0 - defect_rate, on_time_rate
