"""Data models for energy readings, KPIs and report output."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Reading:
    """A single time-sampled energy observation."""

    timestamp: datetime
    load_kwh: float
    pv_kwh: float | None = None  # None = no PV system, not zero generation
    price_eur_per_kwh: float | None = None

    @property
    def pv_or_zero(self) -> float:
        return self.pv_kwh if self.pv_kwh is not None else 0.0

    @property
    def grid_import_kwh(self) -> float:
        """Energy drawn from the grid in this interval."""
        return max(self.load_kwh - self.pv_or_zero, 0.0)


@dataclass(frozen=True)
class DailyRollup:
    """Totals for one calendar day."""

    day: str  # YYYY-MM-DD
    load: float
    pv: float
    cost: float
    pts: int


@dataclass(frozen=True)
class HourlyBucket:
    """Average load and PV for one hour of the day."""

    hour: int
    load: float
    pv: float


@dataclass(frozen=True)
class Aggregates:
    """Unrounded totals and rollups for a non-empty set of readings."""

    energy_kwh: float
    solar_kwh: float
    import_kwh: float
    export_kwh: float
    cost_eur: float
    base_load_kw: float
    peak_kw: float
    pv_used_kwh: float
    hourly_profile: tuple[HourlyBucket, ...]
    daily: tuple[DailyRollup, ...]


@dataclass(frozen=True)
class KPISet:
    """Indicators for one analysis run, rounded for display."""

    energy_kwh: float
    solar_kwh: float
    import_kwh: float
    export_kwh: float
    cost_eur: float
    base_load_kw: float
    peak_kw: float
    pv_used_kwh: float
    hourly_profile: tuple[HourlyBucket, ...]
    daily: tuple[DailyRollup, ...]
    autoconsumo_pct: float | None = None
    eui: float | None = None
    ratio_peak_valley: float | None = None


@dataclass(frozen=True)
class Recommendation:
    """A prioritized energy-saving measure."""

    priority: int
    text: str


@dataclass(frozen=True)
class Site:
    """Metadata about the audited building."""

    name: str = "ENERGIA Analytics"
    area_m2: float | None = None
    period: str | None = None


@dataclass(frozen=True)
class KPIRow:
    """One label/value row of the report KPI table."""

    label: str
    value: float | str


@dataclass(frozen=True)
class ReportData:
    """Everything a renderer needs to draw the audit report."""

    title: str
    period_line: str
    area_line: str
    kpi_header: tuple[str, str]
    kpi_rows: tuple[KPIRow, ...]
    recommendation_header: tuple[str, str]
    recommendation_rows: tuple[tuple[int, str], ...]
    hourly_profile: tuple[HourlyBucket, ...] = field(default_factory=tuple)
    daily: tuple[DailyRollup, ...] = field(default_factory=tuple)
    show_pv: bool = False

    @property
    def has_data(self) -> bool:
        return bool(self.hourly_profile)
