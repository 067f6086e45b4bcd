import dataclasses
import pytest

from quoterank.domain import RFQ, RFQItem, Quote, QuoteItem, ScoringRequest, VendorHistory


def test_rfq_skus_keep_order():
    rfq = RFQ(items=(RFQItem("B", 1), RFQItem("A", 2)), id="rfq-1")
    assert rfq.skus == ("B", "A")
    assert rfq.to_dict() == {
        "id": "rfq-1",
        "title": None,
        "items": [{"sku": "B", "quantity": 1}, {"sku": "A", "quantity": 2}],
    }


def test_quote_find_item():
    quote = Quote("Acme", (QuoteItem("A", unit_price=1.0), QuoteItem("A", unit_price=2.0)))
    assert quote.find_item("A").unit_price == 1.0
    assert quote.find_item("Z") is None


def test_quote_to_dict_uses_document_keys():
    quote = Quote("Acme", (QuoteItem("A", 5, 2.5, "EUR", 7),), id="q-1")
    assert quote.to_dict() == {
        "id": "q-1",
        "supplierName": "Acme",
        "items": [{"sku": "A", "quantity": 5, "unitPrice": 2.5, "currency": "EUR", "leadTimeDays": 7}],
    }


def test_vendor_history_defaults_to_unknown():
    assert VendorHistory().to_dict() == {"onTimeRate": None, "defectRate": None, "avgLeadTimeDays": None}


def test_records_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        RFQItem("A").quantity = 3


def test_request_id_fallbacks():
    assert ScoringRequest(rfq=RFQ(id="rfq-1"), source="file").request_id == "rfq-1"
    assert ScoringRequest(rfq=RFQ(), source="file").request_id == "file"
    assert ScoringRequest(rfq=RFQ()).request_id == "request"
