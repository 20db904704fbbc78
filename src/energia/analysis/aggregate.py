"""Totals, daily rollups and the average hourly profile."""

from datetime import datetime

from ..models import Aggregates, DailyRollup, HourlyBucket, Reading
from ..rounding import round_to

# Overnight window used to estimate always-on consumption (inclusive)
BASE_LOAD_START_HOUR = 2
BASE_LOAD_END_HOUR = 5

PROFILE_PRECISION = 3


def sort_readings(readings: list[Reading]) -> list[Reading]:
    """Return a time-ordered copy; the input is left untouched."""
    return sorted(readings, key=lambda r: r.timestamp)


def is_base_load_hour(ts: datetime) -> bool:
    """Check if a timestamp falls in the overnight base-load window."""
    return BASE_LOAD_START_HOUR <= ts.hour <= BASE_LOAD_END_HOUR


def hourly_profile(readings: list[Reading]) -> list[HourlyBucket]:
    """Average load and PV per hour of day.

    Always returns 24 buckets in hour order. Hours with no readings
    average to 0. Means are rounded to 3 decimals.
    """
    load_sums = [0.0] * 24
    pv_sums = [0.0] * 24
    counts = [0] * 24

    for reading in readings:
        hour = reading.timestamp.hour
        load_sums[hour] += reading.load_kwh
        pv_sums[hour] += reading.pv_or_zero
        counts[hour] += 1

    return [
        HourlyBucket(
            hour=hour,
            load=round_to(load_sums[hour] / counts[hour] if counts[hour] else 0.0, PROFILE_PRECISION),
            pv=round_to(pv_sums[hour] / counts[hour] if counts[hour] else 0.0, PROFILE_PRECISION),
        )
        for hour in range(24)
    ]


def daily_rollup(readings: list[Reading]) -> list[DailyRollup]:
    """Sum load, PV and cost per calendar day, oldest day first.

    Only days present in the input appear; gaps are not filled.
    Readings without a price add nothing to the day's cost.
    """
    days: dict[str, dict] = {}

    for reading in readings:
        key = reading.timestamp.date().isoformat()
        if key not in days:
            days[key] = {"load": 0.0, "pv": 0.0, "cost": 0.0, "pts": 0}
        day = days[key]
        day["load"] += reading.load_kwh
        day["pv"] += reading.pv_or_zero
        if reading.price_eur_per_kwh is not None:
            day["cost"] += reading.grid_import_kwh * reading.price_eur_per_kwh
        day["pts"] += 1

    return [
        DailyRollup(day=key, load=d["load"], pv=d["pv"], cost=d["cost"], pts=d["pts"])
        for key, d in sorted(days.items())
    ]


def aggregate(readings: list[Reading]) -> Aggregates | None:
    """Compute totals and rollups for a set of readings.

    Returns None when there are no readings.
    """
    if not readings:
        return None

    ordered = sort_readings(readings)

    energy_kwh = 0.0
    solar_kwh = 0.0
    import_kwh = 0.0
    export_kwh = 0.0
    cost_eur = 0.0
    pv_used_kwh = 0.0
    peak_kw = 0.0
    night_total = 0.0
    night_count = 0

    for reading in ordered:
        load = reading.load_kwh
        pv = reading.pv_or_zero
        grid = reading.grid_import_kwh

        energy_kwh += load
        solar_kwh += pv
        import_kwh += grid
        export_kwh += max(pv - load, 0.0)
        if reading.price_eur_per_kwh is not None:
            cost_eur += grid * reading.price_eur_per_kwh
        pv_used_kwh += min(pv, load)
        peak_kw = max(peak_kw, load)

        if is_base_load_hour(reading.timestamp):
            night_total += load
            night_count += 1

    return Aggregates(
        energy_kwh=energy_kwh,
        solar_kwh=solar_kwh,
        import_kwh=import_kwh,
        export_kwh=export_kwh,
        cost_eur=cost_eur,
        base_load_kw=night_total / night_count if night_count else 0.0,
        peak_kw=peak_kw,
        pv_used_kwh=pv_used_kwh,
        hourly_profile=tuple(hourly_profile(ordered)),
        daily=tuple(daily_rollup(ordered)),
    )
