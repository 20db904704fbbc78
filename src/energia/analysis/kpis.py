"""KPI calculation from aggregated readings."""

import math

from ..models import Aggregates, DailyRollup, HourlyBucket, KPISet, Reading
from ..rounding import round_optional, round_to
from .aggregate import aggregate

ENERGY_PRECISION = 2
PERCENT_PRECISION = 1
RATIO_PRECISION = 2


def self_consumption_pct(pv_used_kwh: float, solar_kwh: float) -> float | None:
    """Share of on-site PV consumed locally, or None with no PV generation."""
    if solar_kwh > 0:
        return pv_used_kwh / solar_kwh * 100
    return None


def energy_use_intensity(energy_kwh: float, area_m2: float | None) -> float | None:
    """kWh per square metre, or None without a positive floor area."""
    if area_m2 is None or not math.isfinite(area_m2) or area_m2 <= 0:
        return None
    return energy_kwh / area_m2


def peak_valley_ratio(profile: tuple[HourlyBucket, ...] | list[HourlyBucket]) -> float | None:
    """Highest over lowest hourly mean load.

    Uses the averaged hourly profile, not raw readings. None when the
    lowest hour averages to zero.
    """
    if not profile:
        return None
    loads = [bucket.load for bucket in profile]
    valley = min(loads)
    if not math.isfinite(valley) or valley <= 0:
        return None
    return max(loads) / valley


def _rounded_daily(day: DailyRollup) -> DailyRollup:
    return DailyRollup(
        day=day.day,
        load=round_to(day.load, ENERGY_PRECISION),
        pv=round_to(day.pv, ENERGY_PRECISION),
        cost=round_to(day.cost, ENERGY_PRECISION),
        pts=day.pts,
    )


def kpis_from_aggregates(agg: Aggregates, area_m2: float | None = None) -> KPISet:
    """Derive the KPI set from aggregates, rounding as the last step."""
    return KPISet(
        energy_kwh=round_to(agg.energy_kwh, ENERGY_PRECISION),
        solar_kwh=round_to(agg.solar_kwh, ENERGY_PRECISION),
        import_kwh=round_to(agg.import_kwh, ENERGY_PRECISION),
        export_kwh=round_to(agg.export_kwh, ENERGY_PRECISION),
        cost_eur=round_to(agg.cost_eur, ENERGY_PRECISION),
        base_load_kw=round_to(agg.base_load_kw, ENERGY_PRECISION),
        peak_kw=round_to(agg.peak_kw, ENERGY_PRECISION),
        pv_used_kwh=round_to(agg.pv_used_kwh, ENERGY_PRECISION),
        hourly_profile=agg.hourly_profile,
        daily=tuple(_rounded_daily(day) for day in agg.daily),
        autoconsumo_pct=round_optional(
            self_consumption_pct(agg.pv_used_kwh, agg.solar_kwh), PERCENT_PRECISION
        ),
        eui=round_optional(energy_use_intensity(agg.energy_kwh, area_m2), ENERGY_PRECISION),
        ratio_peak_valley=round_optional(peak_valley_ratio(agg.hourly_profile), RATIO_PRECISION),
    )


def compute_kpis(readings: list[Reading], area_m2: float | None = None) -> KPISet | None:
    """Compute KPIs for a set of readings.

    Returns None when there are no readings; callers must check for this
    before using any value.
    """
    agg = aggregate(readings)
    if agg is None:
        return None
    return kpis_from_aggregates(agg, area_m2)
