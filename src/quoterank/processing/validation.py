"""Boundary validation: loose documents in, typed records out."""

import json
import logging
import math
import os
from pathlib import Path
from dataclasses import fields
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from quoterank.domain.models import (
    RFQ,
    RFQItem,
    Quote,
    QuoteItem,
    VendorHistory,
    ScoringRequest,
)
from quoterank.domain.exceptions import (
    FileValidationError,
    InvalidFileFormatError,
    InvalidInputError,
)
from quoterank.config.scoring import ScoringConfig, ScoringConstants, WEIGHT_KEY_ALIASES

logger = logging.getLogger(__name__)


def _number(x: Any) -> Optional[float]:
    """Numeric business value or ``None``; never raises."""
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        return None
    return float(x)


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _optional_str(x: Any) -> Optional[str]:
    if x is None:
        return None
    return str(x)


class InputValidator:
    """Validates and parses the documents a scoring run needs.

    Only structural problems raise ``InvalidInputError``. Absent or
    non-numeric business values become ``None`` and are substituted later by
    the scoring stages.
    """

    VALID_EXTENSIONS = {'.json'}

    # ---- RFQ -------------------------------------------------------------

    @staticmethod
    def parse_rfq(doc: Any) -> RFQ:
        if isinstance(doc, RFQ):
            return doc
        if not isinstance(doc, Mapping):
            raise InvalidInputError(
                f"RFQ must be a mapping, got {type(doc).__name__}",
                document="rfq",
            ).add_suggestion("Pass an object like {\"items\": [{\"sku\": ..., \"quantity\": ...}]}")

        raw_items = doc.get("items") or []
        if not isinstance(raw_items, (list, tuple)):
            raise InvalidInputError(
                "RFQ items must be a list",
                document="rfq",
                field_name="items",
                field_value=type(raw_items).__name__,
            )

        items = []
        for i, raw in enumerate(raw_items):
            if not isinstance(raw, Mapping):
                raise InvalidInputError(
                    f"RFQ item {i} must be a mapping",
                    document="rfq",
                    index=i,
                )
            sku = raw.get("sku")
            if not isinstance(sku, str):
                raise InvalidInputError(
                    f"RFQ item {i} has no string 'sku'",
                    document="rfq",
                    index=i,
                    field_name="sku",
                    field_value=sku,
                )
            items.append(RFQItem(sku=sku, quantity=_number(raw.get("quantity"))))

        return RFQ(
            items=tuple(items),
            id=_optional_str(doc.get("id", doc.get("_id"))),
            title=_optional_str(doc.get("title")),
        )

    # ---- Quotes ----------------------------------------------------------

    @staticmethod
    def parse_quote(doc: Any, index: int = 0) -> Quote:
        if isinstance(doc, Quote):
            return doc
        if not isinstance(doc, Mapping):
            raise InvalidInputError(
                f"Quote {index} must be a mapping, got {type(doc).__name__}",
                document="quotes",
                index=index,
            )

        supplier = doc.get("supplierName")
        if not isinstance(supplier, str):
            raise InvalidInputError(
                f"Quote {index} has no string 'supplierName'",
                document="quotes",
                index=index,
                field_name="supplierName",
                field_value=supplier,
            )

        raw_items = doc.get("items") or []
        if not isinstance(raw_items, (list, tuple)):
            raise InvalidInputError(
                f"Quote {index} items must be a list",
                document="quotes",
                index=index,
                field_name="items",
            )

        items = []
        for j, raw in enumerate(raw_items):
            if not isinstance(raw, Mapping) or not isinstance(raw.get("sku"), str):
                raise InvalidInputError(
                    f"Quote {index} item {j} must be a mapping with a string 'sku'",
                    document="quotes",
                    index=index,
                    field_name=f"items[{j}].sku",
                )
            currency = raw.get("currency")
            items.append(QuoteItem(
                sku=raw["sku"],
                quantity=_number(raw.get("quantity")),
                unit_price=_number(raw.get("unitPrice")),
                currency=currency if isinstance(currency, str) else None,
                lead_time_days=_number(raw.get("leadTimeDays")),
            ))

        return Quote(
            supplier_name=supplier,
            items=tuple(items),
            id=_optional_str(doc.get("id", doc.get("_id"))),
        )

    @staticmethod
    def parse_quotes(docs: Any) -> Tuple[Quote, ...]:
        if docs is None:
            return ()
        if isinstance(docs, (str, bytes, Mapping)) or not isinstance(docs, Sequence):
            raise InvalidInputError(
                f"quotes must be a list, got {type(docs).__name__}",
                document="quotes",
            )
        return tuple(InputValidator.parse_quote(doc, i) for i, doc in enumerate(docs))

    # ---- Vendor history --------------------------------------------------

    @staticmethod
    def parse_vendor_histories(doc: Any) -> Dict[str, VendorHistory]:
        if doc is None:
            return {}
        if not isinstance(doc, Mapping):
            raise InvalidInputError(
                f"vendor histories must be a mapping keyed by supplier name, got {type(doc).__name__}",
                document="vendor_histories",
            )

        histories: Dict[str, VendorHistory] = {}
        for name, entry in doc.items():
            if isinstance(entry, VendorHistory):
                histories[str(name)] = entry
                continue
            if not isinstance(entry, Mapping):
                raise InvalidInputError(
                    f"vendor history for {name!r} must be a mapping",
                    document="vendor_histories",
                    field_name=str(name),
                )
            histories[str(name)] = VendorHistory(
                on_time_rate=_number(entry.get("onTimeRate")),
                defect_rate=_number(entry.get("defectRate")),
                avg_lead_time_days=_number(entry.get("avgLeadTimeDays")),
            )
        return histories

    # ---- Config ----------------------------------------------------------

    @staticmethod
    def _numeric_section(
        doc: Mapping,
        key: str,
        known: Optional[Iterable[str]] = None,
    ) -> Optional[Dict[str, float]]:
        """Numeric sub-mapping of a config document; keys outside ``known`` are dropped."""
        section = doc.get(key)
        if section is None:
            return None
        if not isinstance(section, Mapping):
            raise InvalidInputError(
                f"config '{key}' must be a mapping",
                document="config",
                field_name=key,
            )
        known = set(known) if known is not None else None
        values: Dict[str, float] = {}
        for name, value in section.items():
            if known is not None and name not in known:
                logger.debug("Ignoring unknown config key %s.%s", key, name)
                continue
            if not _is_number(value):
                raise InvalidInputError(
                    f"config '{key}.{name}' must be a number",
                    document="config",
                    field_name=f"{key}.{name}",
                    field_value=value,
                )
            values[name] = value
        return values

    @staticmethod
    def _currency_rates(doc: Mapping) -> Optional[Dict[str, float]]:
        """Currency table of a config document.

        A missing or non-numeric rate (``null``, a string) is dropped, so that
        currency falls back to ``default_currency_rate`` like any unlisted one.
        Zero means "not configured" as well. A negative or non-finite number is
        a malformed table and raises, the same policy ``ScoringSettings`` applies.
        """
        section = doc.get("currencyRates")
        if section is None:
            return None
        if not isinstance(section, Mapping):
            raise InvalidInputError(
                "config 'currencyRates' must be a mapping",
                document="config",
                field_name="currencyRates",
            )
        rates: Dict[str, float] = {}
        for currency, rate in section.items():
            if not _is_number(rate):
                logger.debug("Ignoring non-numeric rate for %s: %r", currency, rate)
                continue
            if rate < 0 or not math.isfinite(rate):
                raise InvalidInputError(
                    f"currency rate for {currency} must be a non-negative finite number",
                    document="config",
                    field_name=f"currencyRates.{currency}",
                    field_value=rate,
                ).add_suggestion("Use 0 or omit the currency to fall back to the default rate")
            rates[currency] = rate
        return rates

    @staticmethod
    def parse_config(doc: Any, base: Optional[ScoringConfig] = None) -> ScoringConfig:
        """Merge a config document over ``base`` (or defaults)."""
        if isinstance(doc, ScoringConfig):
            return doc
        if doc is None:
            return base if base is not None else ScoringConfig()
        if not isinstance(doc, Mapping):
            raise InvalidInputError(
                f"config must be a mapping, got {type(doc).__name__}",
                document="config",
            )

        weights = InputValidator._numeric_section(doc, "weights", known=WEIGHT_KEY_ALIASES)
        for name, value in (weights or {}).items():
            if value < 0 or not math.isfinite(value):
                raise InvalidInputError(
                    f"weight '{name}' must be a non-negative finite number",
                    document="config",
                    field_name=f"weights.{name}",
                    field_value=value,
                ).add_suggestion("Weights are relative; any non-negative values are renormalised")

        return ScoringConfig.from_overrides(
            weights=weights,
            currency_rates=InputValidator._currency_rates(doc),
            constants=InputValidator._numeric_section(
                doc, "constants", known=[f.name for f in fields(ScoringConstants)]
            ),
            base=base,
        )

    # ---- Request files ---------------------------------------------------

    @staticmethod
    def parse_request(
        doc: Any,
        source: Optional[str] = None,
    ) -> ScoringRequest:
        if not isinstance(doc, Mapping):
            raise InvalidInputError(
                "request must be a mapping with 'rfq' and 'quotes'",
                document="request",
            )
        if "rfq" not in doc:
            raise InvalidInputError("request has no 'rfq'", document="request", field_name="rfq")

        overrides = doc.get("config") or {}
        if not isinstance(overrides, Mapping):
            raise InvalidInputError(
                "request 'config' must be a mapping",
                document="config",
            )
        # parse once here so a bad config fails before scoring
        InputValidator.parse_config(overrides)

        return ScoringRequest(
            rfq=InputValidator.parse_rfq(doc["rfq"]),
            quotes=InputValidator.parse_quotes(doc.get("quotes")),
            vendor_histories=InputValidator.parse_vendor_histories(doc.get("vendorHistories")),
            config_overrides=dict(overrides),
            source=source,
        )

    @staticmethod
    def load_request_file(path: str) -> ScoringRequest:
        p = Path(path)
        try:
            with open(p, "r", encoding="utf-8") as fh:
                doc = json.load(fh)
        except json.JSONDecodeError as e:
            raise InvalidFileFormatError(str(p), ["JSON"]).add_context('decode_error', str(e)) from e
        except OSError as e:
            raise FileValidationError(
                f"Cannot read request file: {p}",
                file_path=str(p),
                validation_type="read",
            ) from e

        request = InputValidator.parse_request(doc, source=p.stem)
        logger.debug(
            "Loaded %s: %d RFQ lines, %d quotes",
            p, len(request.rfq.items), len(request.quotes),
        )
        return request

    @staticmethod
    def validate_request_paths(file_paths: List[str]) -> Tuple[List[str], List[str]]:
        """
        Validate that request paths exist and are readable.

        Returns:
            (valid_paths, invalid_paths)
        """
        valid_paths = []
        invalid_paths = []

        for path_str in file_paths:
            path = Path(path_str).expanduser().resolve()

            if not path.exists():
                logger.warning("File does not exist: %s", path_str)
                invalid_paths.append(path_str)
            elif not path.is_file():
                logger.warning("Path is not a file: %s", path_str)
                invalid_paths.append(path_str)
            elif path.suffix.lower() not in InputValidator.VALID_EXTENSIONS:
                logger.warning("File does not have a request extension: %s", path_str)
                invalid_paths.append(path_str)
            elif not os.access(path, os.R_OK):
                logger.warning("File is not readable: %s", path_str)
                invalid_paths.append(path_str)
            else:
                valid_paths.append(str(path))

        return valid_paths, invalid_paths
