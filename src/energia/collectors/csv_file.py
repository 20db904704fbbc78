"""CSV energy export importer.

Reads spreadsheet exports with a header row, separated by commas or
semicolons. Minimum columns: datetime, load_kwh. Optional: pv_kwh,
price_eur_per_kwh (see collectors.rows for accepted aliases).
"""

import csv
import io
import logging
from pathlib import Path

from ..models import Reading
from .rows import normalize_rows

logger = logging.getLogger(__name__)

DELIMITERS = (",", ";")


class CsvImportError(Exception):
    """Raised when a CSV file cannot be read."""
    pass


def detect_delimiter(header_line: str) -> str:
    """Pick ',' or ';' based on which one splits the header more."""
    counts = {d: header_line.count(d) for d in DELIMITERS}
    if counts[";"] > counts[","]:
        return ";"
    return ","


def parse_csv_text(text: str) -> list[dict]:
    """Parse CSV text into a list of raw records keyed by header name.

    Header names are stripped and lower-cased. Blank lines are skipped.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines()
    header_line = next((line for line in lines if line.strip()), None)
    if header_line is None:
        raise CsvImportError("CSV file has no header row")

    text = text[text.index(header_line):]
    reader = csv.DictReader(io.StringIO(text), delimiter=detect_delimiter(header_line))
    reader.fieldnames = [name.strip().lower() for name in reader.fieldnames or []]

    records = []
    for row in reader:
        if all(value is None or not str(value).strip() for key, value in row.items() if key is not None):
            continue
        records.append({key: value for key, value in row.items() if key is not None})
    return records


def read_records(csv_path: Path) -> list[dict]:
    """Read raw records from a CSV file."""
    try:
        text = Path(csv_path).read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise CsvImportError(f"CSV file not found: {csv_path}")
    except (OSError, UnicodeDecodeError) as e:
        raise CsvImportError(f"Could not read {csv_path}: {e}")
    return parse_csv_text(text)


def load_readings(csv_path: Path) -> list[Reading]:
    """Read a CSV export and normalize it into Readings.

    Invalid rows are dropped; the result may be empty.
    """
    records = read_records(csv_path)
    readings = normalize_rows(records)

    dropped = len(records) - len(readings)
    if dropped:
        logger.debug("Dropped %d of %d rows from %s", dropped, len(records), csv_path)
    logger.debug("Loaded %d readings from %s", len(readings), csv_path)
    return readings


def write_readings(readings: list[Reading], csv_path: Path) -> int:
    """Write readings as a CSV in the import format. Returns rows written.

    The pv_kwh and price_eur_per_kwh columns are only written when at
    least one reading has a value, so "no PV system" survives a re-import.
    """
    with_pv = any(r.pv_kwh is not None for r in readings)
    with_price = any(r.price_eur_per_kwh is not None for r in readings)

    header = ["datetime", "load_kwh"]
    if with_pv:
        header.append("pv_kwh")
    if with_price:
        header.append("price_eur_per_kwh")

    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for reading in readings:
            row = [reading.timestamp.isoformat(timespec="seconds"), reading.load_kwh]
            if with_pv:
                row.append("" if reading.pv_kwh is None else reading.pv_kwh)
            if with_price:
                row.append("" if reading.price_eur_per_kwh is None else reading.price_eur_per_kwh)
            writer.writerow(row)
    return len(readings)
