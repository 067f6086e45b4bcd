"""Comparable lead time per quote."""

import math
from typing import Optional

from quoterank.domain.models import Quote, VendorHistory
from .models import ScoringConstants


def _isfinite(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def resolve_lead_time(
    quote: Quote,
    history: Optional[VendorHistory],
    constants: ScoringConstants,
) -> float:
    """Slowest quoted line, else the vendor's historical average, else the unknown sentinel."""
    quoted = [float(item.lead_time_days) for item in quote.items if _isfinite(item.lead_time_days)]
    if quoted:
        return max(quoted)

    avg = history.avg_lead_time_days if history is not None else None
    # zero average means "not recorded"; any other finite value is taken as given
    if _isfinite(avg) and avg != 0:
        return float(avg)

    return constants.unknown_lead_time_days
