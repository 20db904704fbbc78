"""Assemble KPI and recommendation output into report tables.

This is the boundary to presentation: absent values become "N/D" here
and nowhere else.
"""

import re

from ..models import KPIRow, KPISet, Recommendation, ReportData, Site

NOT_AVAILABLE = "N/D"
DEFAULT_SITE_NAME = "ENERGIA Analytics"
DEFAULT_PERIOD = "(según datos)"

KPI_HEADER = ("KPI", "Valor")
RECOMMENDATION_HEADER = ("Prioridad", "Medida")

# (label, KPISet attribute), in report order
KPI_LABELS = (
    ("Energía (kWh)", "energy_kwh"),
    ("Consumo base nocturno (kW)", "base_load_kw"),
    ("Pico horario (kW)", "peak_kw"),
    ("Importación (kWh)", "import_kwh"),
    ("Exportación/Excedentes (kWh)", "export_kwh"),
    ("Autoconsumo (%)", "autoconsumo_pct"),
    ("Coste estimado (€)", "cost_eur"),
    ("EUI (kWh/m²)", "eui"),
    ("Ratio punta/valle", "ratio_peak_valley"),
)


def display_value(value: float | None) -> float | str:
    """Return the value, or the N/D placeholder if it is absent."""
    return NOT_AVAILABLE if value is None else value


def kpi_rows(kpis: KPISet | None) -> list[KPIRow]:
    """Build the KPI table rows. With no data every value is N/D."""
    return [
        KPIRow(label=label, value=display_value(getattr(kpis, attr) if kpis else None))
        for label, attr in KPI_LABELS
    ]


def recommendation_rows(recommendations: list[Recommendation]) -> list[tuple[int, str]]:
    """Build (rank, text) rows, ranked from 1 in the given order."""
    return [(rank, rec.text) for rank, rec in enumerate(recommendations, start=1)]


def format_area(area_m2: float | None) -> str:
    if area_m2 is None or not area_m2 > 0:
        return NOT_AVAILABLE
    if float(area_m2).is_integer():
        return str(int(area_m2))
    return str(area_m2)


def build_report(
    kpis: KPISet | None,
    recommendations: list[Recommendation],
    site: Site | None = None,
) -> ReportData:
    """Combine KPIs, recommendations and site metadata for a renderer."""
    site = site or Site()
    name = site.name or DEFAULT_SITE_NAME

    profile = kpis.hourly_profile if kpis else ()
    daily = kpis.daily if kpis else ()
    show_pv = any(b.pv > 0 for b in profile) or any(d.pv > 0 for d in daily)

    return ReportData(
        title=f"Informe energético – {name}",
        period_line=f"Periodo: {site.period or DEFAULT_PERIOD}",
        area_line=f"Área (m²): {format_area(site.area_m2)}",
        kpi_header=KPI_HEADER,
        kpi_rows=tuple(kpi_rows(kpis)),
        recommendation_header=RECOMMENDATION_HEADER,
        recommendation_rows=tuple(recommendation_rows(recommendations)),
        hourly_profile=tuple(profile),
        daily=tuple(daily),
        show_pv=show_pv,
    )


def report_filename(site: Site | None = None, extension: str = "pdf") -> str:
    """File name for an exported report, e.g. informe_energetico_Casa_Sol.pdf."""
    name = (site.name if site else None) or "ENERGIA"
    slug = re.sub(r"\s+", "_", name)
    return f"informe_energetico_{slug}.{extension}"


def report_to_dict(report: ReportData) -> dict:
    """Plain dict form of a report, for JSON output."""
    return {
        "title": report.title,
        "period": report.period_line,
        "area": report.area_line,
        "kpis": {
            "header": list(report.kpi_header),
            "rows": [[row.label, row.value] for row in report.kpi_rows],
        },
        "recommendations": {
            "header": list(report.recommendation_header),
            "rows": [[rank, text] for rank, text in report.recommendation_rows],
        },
        "hourly_profile": [
            {"hour": b.hour, "load": b.load, "pv": b.pv} for b in report.hourly_profile
        ],
        "daily": [
            {"day": d.day, "load": d.load, "pv": d.pv, "cost": d.cost, "pts": d.pts}
            for d in report.daily
        ],
        "show_pv": report.show_pv,
    }
