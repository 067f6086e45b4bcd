"""Input records for an RFQ comparison.

These are the typed forms of the documents the RFQ/quote store and the
vendor history provider hand over. Required fields have no default; optional
business values default to ``None`` and are substituted by the scoring stages
(see ``quoterank.scoring.models.ScoringConstants``).
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple


@dataclass(frozen=True)
class RFQItem:
    """One basis line of an RFQ."""
    sku: str
    quantity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"sku": self.sku, "quantity": self.quantity}


@dataclass(frozen=True)
class RFQ:
    """Request for Quotation: the ordered basis lines every quote is priced against."""
    items: Tuple[RFQItem, ...] = ()
    id: Optional[str] = None
    title: Optional[str] = None

    @property
    def skus(self) -> Tuple[str, ...]:
        return tuple(item.sku for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class QuoteItem:
    """A priced line of a supplier quote."""
    sku: str
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    currency: Optional[str] = None
    lead_time_days: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self.sku,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "currency": self.currency,
            "leadTimeDays": self.lead_time_days,
        }


@dataclass(frozen=True)
class Quote:
    """One supplier's response to an RFQ."""
    supplier_name: str
    items: Tuple[QuoteItem, ...] = ()
    id: Optional[str] = None

    def find_item(self, sku: str) -> Optional[QuoteItem]:
        """First quote line for ``sku``, or ``None`` when the supplier did not quote it."""
        for item in self.items:
            if item.sku == sku:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "supplierName": self.supplier_name,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class VendorHistory:
    """Aggregated past performance for a supplier."""
    on_time_rate: Optional[float] = None        # 0..1
    defect_rate: Optional[float] = None         # 0..1
    avg_lead_time_days: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "onTimeRate": self.on_time_rate,
            "defectRate": self.defect_rate,
            "avgLeadTimeDays": self.avg_lead_time_days,
        }


@dataclass(frozen=True)
class ScoringRequest:
    """Everything needed for one scoring run, as read from a request file."""
    rfq: RFQ
    quotes: Tuple[Quote, ...] = ()
    vendor_histories: Dict[str, VendorHistory] = field(default_factory=dict)
    config_overrides: Dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None

    @property
    def request_id(self) -> str:
        return self.rfq.id or self.source or "request"
