"""Core domain models for RFQ comparison."""

from .models import (
    RFQItem,
    RFQ,
    QuoteItem,
    Quote,
    VendorHistory,
    ScoringRequest,
)

__all__ = [
    "RFQItem",
    "RFQ",
    "QuoteItem",
    "Quote",
    "VendorHistory",
    "ScoringRequest",
]
