"""Scoring engine: RFQ + quotes + vendor history + config -> ranked vendors."""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from quoterank.domain.models import RFQ, Quote, VendorHistory
from quoterank.processing.validation import InputValidator

from .cost import total_cost
from .lead_time import resolve_lead_time
from .models import RankedResult, RawScore, ScoringConfig
from .normalizer import normalize_scores
from .performance import derive_quality_reliability
from .ranker import rank_vendors
from .weights import normalize_weights

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Stateless five-stage pipeline.

    1. total cost over the RFQ's basis lines
    2. bottleneck lead time
    3. quality / reliability from history
    4. min-max normalisation across the vendor set
    5. weighted sum and stable descending sort

    Inputs are never mutated and every result object is new, so one engine
    (or none: see ``compute_scores``) can serve any number of threads.
    """

    def raw_score(
        self,
        rfq: RFQ,
        quote: Quote,
        vendor_histories: Mapping[str, VendorHistory],
        config: ScoringConfig,
    ) -> RawScore:
        history = vendor_histories.get(quote.supplier_name)
        quality, reliability = derive_quality_reliability(history, config.constants)
        return RawScore(
            vendor=quote.supplier_name,
            price=total_cost(rfq, quote, config),
            lead_time=resolve_lead_time(quote, history, config.constants),
            quality=quality,
            reliability=reliability,
        )

    def score(
        self,
        rfq: Any,
        quotes: Any,
        vendor_histories: Any = None,
        config: Any = None,
    ) -> RankedResult:
        """Rank ``quotes`` against ``rfq``.

        Accepts typed records or plain mappings as read from JSON. Raises
        ``InvalidInputError`` before any scoring if a document has the wrong
        shape; missing business values never raise.
        """
        rfq = InputValidator.parse_rfq(rfq)
        quotes = InputValidator.parse_quotes(quotes)
        histories = InputValidator.parse_vendor_histories(vendor_histories)
        config = InputValidator.parse_config(config)

        weights = normalize_weights(config.weights)
        raw: List[RawScore] = [self.raw_score(rfq, q, histories, config) for q in quotes]
        for r in raw:
            logger.debug("raw %s", r)

        normalized = normalize_scores(raw)
        result = rank_vendors(normalized, weights, raw_by_index=dict(enumerate(raw)))

        if result.winner is not None:
            logger.debug(
                "Scored %d quotes over %d RFQ lines; winner %s (%.4f)",
                len(quotes), len(rfq.items), result.winner.vendor, result.winner.score,
            )
        return result


def compute_scores(
    rfq: Any,
    quotes: Sequence[Any],
    vendor_histories: Optional[Any] = None,
    config: Optional[Any] = None,
) -> RankedResult:
    """Functional entry point; see ``ScoringEngine.score``."""
    return ScoringEngine().score(rfq, quotes, vendor_histories, config)
