"""Render an audit report as a self-contained HTML page."""

import json
from datetime import datetime
from html import escape

from ..models import ReportData


def _table_html(header: tuple[str, str], rows: list[tuple]) -> str:
    head = "".join(f'<th class="text-left px-3 py-2">{escape(str(h))}</th>' for h in header)
    body = "\n".join(
        "<tr class=\"border-t\">"
        + "".join(f'<td class="px-3 py-2">{escape(str(cell))}</td>' for cell in row)
        + "</tr>"
        for row in rows
    )
    return f"""<table class="w-full text-sm">
                <thead class="bg-gray-100"><tr>{head}</tr></thead>
                <tbody>
{body}
                </tbody>
            </table>"""


def chart_data(report: ReportData) -> dict:
    """Series for the hourly profile and daily energy charts."""
    data = {
        "hours": [b.hour for b in report.hourly_profile],
        "hourlyLoad": [b.load for b in report.hourly_profile],
        "days": [d.day for d in report.daily],
        "dailyLoad": [d.load for d in report.daily],
        "showPv": report.show_pv,
    }
    if report.show_pv:
        data["hourlyPv"] = [b.pv for b in report.hourly_profile]
        data["dailyPv"] = [d.pv for d in report.daily]
    return data


def render_report_html(report: ReportData) -> str:
    """Generate the HTML report.

    Args:
        report: Report data from build_report

    Returns:
        Complete HTML document as a string
    """
    generated_date = datetime.now().strftime("%Y-%m-%d %H:%M")
    kpi_table = _table_html(report.kpi_header, [(row.label, row.value) for row in report.kpi_rows])
    rec_table = _table_html(report.recommendation_header, list(report.recommendation_rows))

    if report.has_data:
        charts = '''
        <div class="grid grid-cols-1 md:grid-cols-2 gap-4 mb-6">
            <div class="card rounded-xl p-4 shadow-lg">
                <h3 class="font-bold text-gray-800 mb-2">Perfil horario medio</h3>
                <div class="h-64"><canvas id="hourly-chart"></canvas></div>
            </div>
            <div class="card rounded-xl p-4 shadow-lg">
                <h3 class="font-bold text-gray-800 mb-2">Energía diaria</h3>
                <div class="h-64"><canvas id="daily-chart"></canvas></div>
            </div>
        </div>'''
        script = f'''
    <script>
        const data = {json.dumps(chart_data(report))};

        const hourlySets = [{{
            label: 'Demanda (kWh)',
            data: data.hourlyLoad,
            borderColor: 'rgb(59, 130, 246)',
            tension: 0.3,
            pointRadius: 0
        }}];
        const dailySets = [{{
            label: 'Consumo (kWh)',
            data: data.dailyLoad,
            backgroundColor: 'rgba(59, 130, 246, 0.7)'
        }}];
        if (data.showPv) {{
            hourlySets.push({{
                label: 'PV (kWh)',
                data: data.hourlyPv,
                borderColor: 'rgb(245, 158, 11)',
                tension: 0.3,
                pointRadius: 0
            }});
            dailySets.push({{
                label: 'PV (kWh)',
                data: data.dailyPv,
                backgroundColor: 'rgba(245, 158, 11, 0.7)'
            }});
        }}

        new Chart(document.getElementById('hourly-chart'), {{
            type: 'line',
            data: {{ labels: data.hours, datasets: hourlySets }},
            options: {{ responsive: true, maintainAspectRatio: false }}
        }});
        new Chart(document.getElementById('daily-chart'), {{
            type: 'bar',
            data: {{ labels: data.days, datasets: dailySets }},
            options: {{ responsive: true, maintainAspectRatio: false }}
        }});
    </script>'''
    else:
        charts = '''
        <div class="card rounded-xl p-4 shadow-lg mb-6">
            <p class="text-gray-500">Sin datos válidos para analizar.</p>
        </div>'''
        script = ""

    return f'''<!DOCTYPE html>
<html lang="es">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(report.title)}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
    <style>
        .gradient-bg {{
            background: linear-gradient(135deg, #3DDC84 0%, #1FBF78 45%, #0E8A5F 100%);
        }}
        .card {{
            background: rgba(255, 255, 255, 0.95);
        }}
    </style>
</head>
<body class="gradient-bg min-h-screen">
    <div class="container mx-auto px-4 py-8">
        <header class="mb-8">
            <h1 class="text-4xl font-bold text-white mb-2">{escape(report.title)}</h1>
            <p class="text-green-50">{escape(report.period_line)}</p>
            <p class="text-green-50">{escape(report.area_line)}</p>
        </header>
{charts}
        <div class="grid grid-cols-1 md:grid-cols-2 gap-4">
            <div class="card rounded-xl p-4 shadow-lg">
                <h3 class="font-bold text-gray-800 mb-2">Indicadores</h3>
            {kpi_table}
            </div>
            <div class="card rounded-xl p-4 shadow-lg">
                <h3 class="font-bold text-gray-800 mb-2">Recomendaciones automáticas</h3>
            {rec_table}
            </div>
        </div>

        <footer class="text-center text-green-50 text-sm py-8">
            <p>Generated {generated_date}</p>
        </footer>
    </div>
{script}
</body>
</html>'''
