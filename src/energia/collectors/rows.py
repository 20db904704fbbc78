"""Row normalizer for tabular energy exports.

Turns one raw record (column name -> raw cell value) into a Reading.
Column names and fallback order:

  timestamp: datetime, date, timestamp
  load:      load_kwh, load, kwh          (missing/unparseable -> 0)
  pv:        pv_kwh, solar_kwh            (missing -> None = no PV system)
  price:     price_eur_per_kwh, price     (missing/unparseable -> None)

Rows without a usable timestamp are dropped, never raised.
"""

import math
import numbers
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from typing import Any

from ..models import Reading

TIMESTAMP_COLUMNS = ("datetime", "date", "timestamp")
LOAD_COLUMNS = ("load_kwh", "load", "kwh")
PV_COLUMNS = ("pv_kwh", "solar_kwh")
PRICE_COLUMNS = ("price_eur_per_kwh", "price")

# Tried in order after datetime.fromisoformat
TIMESTAMP_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%d-%m-%Y %H:%M",
    "%d-%m-%Y",
)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def first_present(raw: Mapping[str, Any], columns: Iterable[str]) -> Any:
    """Return the value of the first column present in the record.

    A column is present when the key exists and its value is not None.
    Returns MISSING if none is present, so a legitimate 0 is never lost.
    """
    for column in columns:
        if column in raw and raw[column] is not None:
            return raw[column]
    return MISSING


def parse_number(value: Any) -> float | None:
    """Best-effort conversion of a raw cell to a finite float.

    Accepts numbers and numeric strings, including a decimal comma
    ("0,5") when the string has no dot. Returns None for anything else.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def _from_epoch_ms(value) -> datetime | None:
    try:
        seconds = float(value) / 1000
        return datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a raw cell into a naive datetime, or None if it isn't one.

    Aware datetimes keep their wall-clock time and drop the offset, so
    hour-of-day is always the hour written in the source data. Numbers
    and all-digit strings are epoch milliseconds, read in local time.
    """
    parsed = None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, numbers.Real) and not isinstance(value, bool):
        return _from_epoch_ms(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isascii() and text.isdigit():
            return _from_epoch_ms(int(text))
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            for fmt in TIMESTAMP_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue

    if parsed is None:
        return None
    return parsed.replace(tzinfo=None)


def normalize_row(raw: Mapping[str, Any]) -> Reading | None:
    """Convert one raw record into a Reading, or None if it is unusable."""
    timestamp = None
    for column in TIMESTAMP_COLUMNS:
        if column in raw and raw[column] is not None:
            timestamp = parse_timestamp(raw[column])
            if timestamp is not None:
                break
    if timestamp is None:
        return None

    load = parse_number(first_present(raw, LOAD_COLUMNS))
    if load is None or load < 0:
        load = 0.0

    pv_raw = first_present(raw, PV_COLUMNS)
    pv = None
    if pv_raw is not MISSING:
        pv = parse_number(pv_raw)
        if pv is None:
            pv = 0.0

    price_raw = first_present(raw, PRICE_COLUMNS)
    price = None if price_raw is MISSING else parse_number(price_raw)

    return Reading(
        timestamp=timestamp,
        load_kwh=load,
        pv_kwh=pv,
        price_eur_per_kwh=price,
    )


def normalize_rows(records: Iterable[Mapping[str, Any]]) -> list[Reading]:
    """Normalize a sequence of raw records, dropping the unusable ones."""
    readings = []
    for raw in records:
        reading = normalize_row(raw)
        if reading is not None:
            readings.append(reading)
    return readings
