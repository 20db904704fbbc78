"""Tests for the row normalizer."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction

from energia.collectors.rows import (
    MISSING,
    first_present,
    normalize_row,
    normalize_rows,
    parse_number,
    parse_timestamp,
)


def test_normalize_minimal_row():
    """Test a row with only datetime and load."""
    reading = normalize_row({"datetime": "2024-03-02 13:00", "load_kwh": "1.5"})
    assert reading.timestamp == datetime(2024, 3, 2, 13, 0)
    assert reading.load_kwh == 1.5
    assert reading.pv_kwh is None
    assert reading.price_eur_per_kwh is None


def test_timestamp_column_fallback():
    """Test that date and timestamp columns are used when datetime is missing."""
    assert normalize_row({"date": "2024-03-02T01:00:00", "load": 1}).timestamp == datetime(2024, 3, 2, 1)
    assert normalize_row({"timestamp": "2024-03-02 02:00", "kwh": 1}).timestamp == datetime(2024, 3, 2, 2)


def test_timestamp_falls_through_unparseable_column():
    """Test that a later timestamp column is tried if an earlier one is garbage."""
    reading = normalize_row({"datetime": "not a date", "date": "2024-03-02 05:00", "load_kwh": 1})
    assert reading.timestamp == datetime(2024, 3, 2, 5)


def test_invalid_timestamp_rejected():
    """Test that rows without a parseable timestamp are dropped."""
    assert normalize_row({"datetime": "yesterday", "load_kwh": 1}) is None
    assert normalize_row({"datetime": "", "load_kwh": 1}) is None
    assert normalize_row({"load_kwh": 1}) is None


def test_load_fallback_order():
    """Test load_kwh > load > kwh."""
    row = {"datetime": "2024-03-02 10:00", "load_kwh": "2", "load": "3", "kwh": "4"}
    assert normalize_row(row).load_kwh == 2.0
    del row["load_kwh"]
    assert normalize_row(row).load_kwh == 3.0
    del row["load"]
    assert normalize_row(row).load_kwh == 4.0


def test_load_zero_is_not_treated_as_missing():
    """Test that a load of 0 does not fall back to the next column."""
    reading = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 0, "load": 9})
    assert reading.load_kwh == 0.0


def test_unparseable_load_defaults_to_zero():
    """Test that a bad load keeps the row with load 0."""
    reading = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": "abc"})
    assert reading is not None
    assert reading.load_kwh == 0.0
    assert normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": float("nan")}).load_kwh == 0.0
    assert normalize_row({"datetime": "2024-03-02 10:00"}).load_kwh == 0.0


def test_pv_absent_vs_zero():
    """Test that a missing PV column is None but a blank PV cell is 0."""
    no_pv = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1})
    assert no_pv.pv_kwh is None

    blank_pv = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "pv_kwh": ""})
    assert blank_pv.pv_kwh == 0.0

    zero_pv = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "pv_kwh": "0"})
    assert zero_pv.pv_kwh == 0.0

    bad_pv = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "pv_kwh": "abc"})
    assert bad_pv.pv_kwh == 0.0

    bad_solar = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "solar_kwh": "abc"})
    assert bad_solar.pv_kwh == 0.0


def test_pv_solar_kwh_alias():
    """Test solar_kwh is used when pv_kwh is not present."""
    reading = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "solar_kwh": "2.5"})
    assert reading.pv_kwh == 2.5


def test_price_zero_is_kept():
    """Test that a price of 0 stays 0 and does not become absent."""
    reading = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "price_eur_per_kwh": "0"})
    assert reading.price_eur_per_kwh == 0.0


def test_price_unparseable_is_absent():
    """Test that a bad price disables cost for that reading."""
    reading = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "price_eur_per_kwh": "n/a"})
    assert reading.price_eur_per_kwh is None

    alias = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 1, "price": "0.15"})
    assert alias.price_eur_per_kwh == 0.15


def test_first_present_skips_none():
    """Test that None values count as not present."""
    assert first_present({"a": None, "b": 0}, ("a", "b")) == 0
    assert first_present({"a": None}, ("a", "b")) is MISSING


def test_parse_number():
    """Test numeric coercion of raw cells."""
    assert parse_number("1.25") == 1.25
    assert parse_number(" 3 ") == 3.0
    assert parse_number("0,5") == 0.5
    assert parse_number(2) == 2.0
    assert parse_number("inf") is None
    assert parse_number(True) is None
    assert parse_number(None) is None
    assert parse_number("1,000.5") is None


def test_parse_timestamp_variants():
    """Test the accepted timestamp forms."""
    assert parse_timestamp("2024-03-02T13:00:00Z") == datetime(2024, 3, 2, 13)
    assert parse_timestamp("2024-03-02") == datetime(2024, 3, 2)
    assert parse_timestamp("02/03/2024 13:30") == datetime(2024, 3, 2, 13, 30)
    assert parse_timestamp(date(2024, 3, 2)) == datetime(2024, 3, 2)
    aware = datetime(2024, 3, 2, 13, tzinfo=timezone(timedelta(hours=2)))
    assert parse_timestamp(aware) == datetime(2024, 3, 2, 13)
    assert parse_timestamp(None) is None


def test_normalize_rows_drops_malformed():
    """Test that a malformed row contributes nothing."""
    rows = [
        {"datetime": "garbage", "load_kwh": 100},
        {"datetime": "2024-03-02 10:00", "load_kwh": 1},
    ]
    readings = normalize_rows(rows)
    assert len(readings) == 1
    assert readings[0].load_kwh == 1.0


def test_huge_integer_load_is_dropped_to_zero():
    """Test that an integer too large for a float is unparseable, not an error."""
    assert parse_number(10**400) is None

    reading = normalize_row({"datetime": "2024-03-02 10:00", "load_kwh": 10**400})
    assert reading is not None
    assert reading.load_kwh == 0.0


def test_decimal_and_fraction_values():
    """Test that Decimal and Fraction cells are read as numbers."""
    reading = normalize_row(
        {"datetime": "2024-03-02 10:00", "load_kwh": Decimal("1.5"), "pv_kwh": Fraction(1, 2)}
    )
    assert reading.load_kwh == 1.5
    assert reading.pv_kwh == 0.5
    assert parse_number(Decimal("NaN")) is None


def test_epoch_millisecond_timestamps():
    """Test that numeric and all-digit timestamps are epoch milliseconds."""
    expected = datetime.fromtimestamp(1709337600)

    from_number = normalize_row({"datetime": 1709337600000, "load_kwh": 1})
    assert from_number.timestamp == expected

    from_text = normalize_row({"datetime": "1709337600000", "load_kwh": 1})
    assert from_text.timestamp == expected

    assert parse_timestamp(10**400) is None
    assert parse_timestamp(float("nan")) is None
    assert parse_timestamp("²³") is None
