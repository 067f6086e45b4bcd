# results/assemblers.py
"""Shape a RankedResult for the comparison view and report export.

The field names ``weights``, ``vendors``, ``winner``, ``vendor``,
``components`` and ``score`` are consumed downstream and must not change.
"""
import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from quoterank.scoring.models import CONTRACT_KEYS, CRITERIA, RankedResult

EXPORT_COLUMNS = (
    "rfq",
    "rank",
    "vendor",
    *(CONTRACT_KEYS[c] for c in CRITERIA),
    "score",
    "winner",
)


def ranked_result_to_dict(result: RankedResult, include_raw: bool = False) -> Dict[str, Any]:
    """Contract form: ``{"weights", "vendors", "winner"}``."""
    return result.to_dict(include_raw=include_raw)


def export_rows(result: RankedResult, rfq_id: Optional[str] = None) -> Iterable[Dict[str, Any]]:
    """
    One flat row per vendor in rank order, for spreadsheet-style export.

    Yields dicts keyed by ``EXPORT_COLUMNS``; component values are the
    normalised ones, as in the contract.
    """
    for rank, final in enumerate(result.vendors, start=1):
        row: Dict[str, Any] = {"rfq": rfq_id, "rank": rank, "vendor": final.vendor}
        row.update(final.components.to_dict())
        row["score"] = final.score
        row["winner"] = rank == 1
        yield row


def write_json(
    payload: Mapping[str, Any],
    path: Path,
    indent: Optional[int] = 2,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=indent or None)
        fh.write("\n")
    return path


def write_csv(rows: Iterable[Mapping[str, Any]], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=list(EXPORT_COLUMNS))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path
