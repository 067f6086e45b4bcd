"""Comparable total cost per quote."""

import math
from typing import Optional

from quoterank.domain.models import RFQ, Quote, QuoteItem
from .models import ScoringConfig


def _finite_or(x: Optional[float], default: float = 0.0) -> float:
    if x is None or isinstance(x, bool):
        return default
    try:
        x = float(x)
    except (TypeError, ValueError):
        return default
    return x if math.isfinite(x) else default


def currency_rate(currency: Optional[str], config: ScoringConfig) -> float:
    """Multiplier into the base currency.

    Unknown currency, no rate table, or a zero/non-finite rate all fall back
    to ``config.constants.default_currency_rate``.
    """
    fallback = config.constants.default_currency_rate
    if not currency or not config.currency_rates:
        return fallback
    rate = _finite_or(config.currency_rates.get(currency), 0.0)
    return rate or fallback


def landed_cost_per_unit(item: QuoteItem, config: ScoringConfig) -> float:
    """Unit price converted to the base currency.

    Freight, duty and tax would be added here; today only conversion applies.
    """
    return _finite_or(item.unit_price, 0.0) * currency_rate(item.currency, config)


def total_cost(rfq: RFQ, quote: Quote, config: ScoringConfig) -> float:
    """Sum over the RFQ's basis lines, not the quote's own lines.

    Every vendor is priced on the RFQ quantities. An RFQ line the vendor did
    not quote costs ``quantity * missing_item_penalty``, which keeps an
    incomplete quote below any complete one.
    """
    penalty = config.constants.missing_item_penalty
    cost = 0.0
    for rfq_item in rfq.items:
        quantity = _finite_or(rfq_item.quantity, 0.0)
        quoted = quote.find_item(rfq_item.sku)
        if quoted is None:
            cost += quantity * penalty
        else:
            cost += quantity * landed_cost_per_unit(quoted, config)
    return cost
