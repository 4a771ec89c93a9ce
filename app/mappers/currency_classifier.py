"""
app/mappers/currency_classifier.py

Heuristic USD/KRW detection for raw spreadsheet price cells.

A marker in the cell text decides the currency. Without a marker the
magnitude decides: values of 1000 and above are won, smaller values are
dollars. A cell carrying both kinds of marker is left unclassified.
"""

from __future__ import annotations

import math
import re
from typing import Any

from app.domain.catalog import CurrencyClassification

KRW_MAGNITUDE_THRESHOLD = 1000

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_DOLLAR_MARKERS = re.compile(r"\$|dollar|usd", re.IGNORECASE)
_WON_MARKERS = re.compile(r"원|₩|won|krw", re.IGNORECASE)

_UNCLASSIFIED = CurrencyClassification()


def parse_magnitude(text: str) -> float | None:
    """
    Strip everything but digits and decimal points, then read the leading number.

    ``"₩1,200"`` -> 1200.0, ``"$4.50"`` -> 4.5, ``"n/a"`` -> None.
    """

    digits = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(digits)
    if match is None:
        return None
    value = float(match.group(0))
    return value if math.isfinite(value) else None


def classify_currency(raw: Any) -> CurrencyClassification:
    """
    Classify one raw price cell (string, number or empty) as USD or KRW.
    """

    if raw is None or isinstance(raw, bool):
        return _UNCLASSIFIED
    if isinstance(raw, (int, float)) and (raw == 0 or math.isnan(raw)):
        return _UNCLASSIFIED

    text = str(raw).strip()
    if not text:
        return _UNCLASSIFIED

    magnitude = parse_magnitude(text)
    if magnitude is None:
        return _UNCLASSIFIED

    is_dollar = _DOLLAR_MARKERS.search(text) is not None
    is_won = _WON_MARKERS.search(text) is not None

    if is_dollar and is_won:
        return _UNCLASSIFIED
    if is_dollar:
        return CurrencyClassification(price_usd=magnitude)
    if is_won:
        return CurrencyClassification(price_krw=magnitude)

    if magnitude >= KRW_MAGNITUDE_THRESHOLD:
        return CurrencyClassification(price_krw=magnitude)
    return CurrencyClassification(price_usd=magnitude)
