"""Synthetic demo dataset.

Hourly readings with a bell-shaped solar curve peaking at 13:00, a
bimodal load (morning and evening peaks) and a time-of-use price with
an evening surcharge and an overnight discount.
"""

import math
import random
from datetime import datetime, time, timedelta

from .models import Reading
from .rounding import round_to

DEMO_HOURS = 48

PV_PEAK_KWH = 3.0
PV_PEAK_HOUR = 13
PV_SPREAD_HOURS = 3.5

MIN_LOAD_KWH = 0.3

BASE_PRICE = 0.14
EVENING_SURCHARGE = 0.08  # 19:00-23:59
NIGHT_DISCOUNT = 0.03  # 02:00-05:59


def solar_kwh(hour: int, jitter: float = 0.0) -> float:
    curve = PV_PEAK_KWH * math.exp(-((hour - PV_PEAK_HOUR) ** 2) / (2 * PV_SPREAD_HOURS**2))
    return max(0.0, curve + jitter)


def load_kwh(hour: int, jitter: float = 0.0) -> float:
    base = 0.6 + 0.15 * math.sin(hour / 24 * 2 * math.pi)
    morning = 0.8 * math.exp(-((hour - 9) ** 2) / (2 * 2))
    evening = 1.2 * math.exp(-((hour - 20) ** 2) / (2 * 2.5))
    return max(MIN_LOAD_KWH, base + morning + evening + jitter)


def price_eur_per_kwh(hour: int, jitter: float = 0.0) -> float:
    price = BASE_PRICE
    if 19 <= hour <= 23:
        price += EVENING_SURCHARGE
    if 2 <= hour <= 5:
        price -= NIGHT_DISCOUNT
    return price + jitter


def synthetic_readings(
    start: datetime | None = None,
    hours: int = DEMO_HOURS,
    seed: int | None = None,
) -> list[Reading]:
    """Generate hourly demo readings starting at midnight of `start`.

    Args:
        start: Any time on the first day (default: today)
        hours: Number of hourly readings
        seed: Random seed for reproducible jitter

    Returns:
        List of Readings with load, PV and price set
    """
    rng = random.Random(seed)
    first_day = (start or datetime.now()).date()
    midnight = datetime.combine(first_day, time.min)

    readings = []
    for i in range(hours):
        dt = midnight + timedelta(hours=i)
        h = dt.hour
        pv = solar_kwh(h, rng.uniform(-0.1, 0.1))
        load = load_kwh(h, rng.uniform(-0.1, 0.1))
        price = price_eur_per_kwh(h, rng.uniform(-0.005, 0.005))
        readings.append(
            Reading(
                timestamp=dt,
                load_kwh=round_to(load, 3),
                pv_kwh=round_to(pv, 3),
                price_eur_per_kwh=round_to(price, 3),
            )
        )
    return readings
