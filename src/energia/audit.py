"""End-to-end energy audit: readings in, KPIs, recommendations and report out."""

from dataclasses import dataclass

from .analysis.kpis import compute_kpis
from .analysis.recommendations import recommend
from .models import KPISet, Reading, Recommendation, ReportData, Site
from .reports.report_data import build_report


@dataclass(frozen=True)
class AuditResult:
    """Output of one audit run. kpis is None when there was no data."""

    site: Site
    reading_count: int
    kpis: KPISet | None
    recommendations: tuple[Recommendation, ...]
    report: ReportData

    @property
    def has_data(self) -> bool:
        return self.kpis is not None


def run_audit(readings: list[Reading], site: Site | None = None) -> AuditResult:
    """Run the full analysis for a set of readings.

    With no readings the result has kpis=None, no recommendations and
    an all-N/D report.
    """
    site = site or Site()
    kpis = compute_kpis(readings, site.area_m2)
    recommendations = recommend(kpis) if kpis is not None else []

    return AuditResult(
        site=site,
        reading_count=len(readings),
        kpis=kpis,
        recommendations=tuple(recommendations),
        report=build_report(kpis, recommendations, site),
    )
