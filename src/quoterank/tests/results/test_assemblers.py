import csv
import json
import pytest

from quoterank.results.assemblers import (
    EXPORT_COLUMNS,
    export_rows,
    ranked_result_to_dict,
    write_csv,
    write_json,
)
from quoterank.scoring import compute_scores


@pytest.fixture
def result():
    rfq = {"items": [{"sku": "A", "quantity": 10}]}
    quotes = [
        {"supplierName": "VendorX", "items": [{"sku": "A", "unitPrice": 5, "leadTimeDays": 10}]},
        {"supplierName": "VendorY", "items": [{"sku": "A", "unitPrice": 6, "leadTimeDays": 5}]},
    ]
    return compute_scores(rfq, quotes)


def test_contract_dict_has_no_raw_by_default(result):
    d = ranked_result_to_dict(result)
    assert set(d) == {"weights", "vendors", "winner"}
    assert "raw" not in d["vendors"][0]


def test_contract_dict_with_raw(result):
    d = ranked_result_to_dict(result, include_raw=True)
    raw = d["vendors"][0]["raw"]
    assert raw == {"price": 50.0, "leadTime": 10.0, "quality": pytest.approx(0.95), "reliability": pytest.approx(0.9)}
    assert d["winner"]["vendor"] == "VendorX"


def test_export_rows(result):
    rows = list(export_rows(result, rfq_id="rfq-1"))

    assert [r["vendor"] for r in rows] == ["VendorX", "VendorY"]
    assert [r["rank"] for r in rows] == [1, 2]
    assert [r["winner"] for r in rows] == [True, False]
    assert all(set(r) == set(EXPORT_COLUMNS) for r in rows)
    assert rows[0]["rfq"] == "rfq-1"
    assert rows[0]["price"] == 1.0
    assert rows[1]["leadTime"] == 1.0


def test_export_rows_empty():
    assert list(export_rows(compute_scores({"items": []}, []))) == []


def test_write_json_creates_parent(tmp_path, result):
    path = write_json(ranked_result_to_dict(result), tmp_path / "nested" / "out.json")

    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["winner"]["vendor"] == "VendorX"
    assert loaded["vendors"][1]["score"] == pytest.approx(0.6)


def test_write_csv(tmp_path, result):
    path = write_csv(export_rows(result, rfq_id="rfq-1"), tmp_path / "out.csv")

    with open(path, newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert tuple(rows[0]) == EXPORT_COLUMNS
    assert [r["vendor"] for r in rows] == ["VendorX", "VendorY"]
    assert rows[0]["winner"] == "True"
    assert float(rows[0]["score"]) == pytest.approx(0.8)
