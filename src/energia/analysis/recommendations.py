"""Rule-based energy-saving recommendations.

Each rule is checked independently, in table order. Priority is the
position among the rules that fired, starting at 1. To add a rule,
append a (predicate, text) pair to RULES.
"""

from collections.abc import Callable

from ..models import KPISet, Recommendation

# Thresholds
BASE_LOAD_LIMIT_KW = 0.3
PEAK_VALLEY_LIMIT = 2
SELF_CONSUMPTION_MIN_PCT = 60
EXPORT_LIMIT_KWH = 1

FALLBACK_TEXT = "Operación correcta. Mantener horarios y revisar trimestralmente."

RULES: list[tuple[Callable[[KPISet], bool], str]] = [
    (
        lambda k: k.base_load_kw > BASE_LOAD_LIMIT_KW,
        "Reducir consumo base nocturno: programar apagados y temporizadores.",
    ),
    (
        lambda k: k.ratio_peak_valley is not None and k.ratio_peak_valley > PEAK_VALLEY_LIMIT,
        "Desplazar cargas a horas valle para suavizar picos.",
    ),
    (
        lambda k: k.autoconsumo_pct is not None and k.autoconsumo_pct < SELF_CONSUMPTION_MIN_PCT,
        "Bajo autoconsumo: valorar batería 3–7 kWh y reprogramar consumos.",
    ),
    (
        lambda k: k.export_kwh > EXPORT_LIMIT_KWH,
        "Excedentes frecuentes: aprovechar para ACS programando resistencias o batería.",
    ),
]


def recommend(kpis: KPISet) -> list[Recommendation]:
    """Return prioritized recommendations for a KPI set (never empty)."""
    texts = [text for predicate, text in RULES if predicate(kpis)]
    if not texts:
        texts = [FALLBACK_TEXT]
    return [Recommendation(priority=i, text=text) for i, text in enumerate(texts, start=1)]
