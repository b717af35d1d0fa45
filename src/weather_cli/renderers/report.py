"""Weather report rendering: ASCII table and JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_cli.renderers import render_template

if TYPE_CHECKING:
    from weather_cli.schemas import WeatherReport

NOT_AVAILABLE = "n/a"


def _fmt(value: float | None, unit: str, digits: int = 0) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{digits}f} {unit}"


def report_rows(report: WeatherReport) -> list[tuple[str, str]]:
    """Flatten a report into ``(label, value)`` display rows."""
    observed = report.observed_at.strftime("%Y-%m-%d %H:%M UTC") if report.observed_at else None
    return [
        ("Location", report.location),
        ("Region", report.region or NOT_AVAILABLE),
        ("Coordinates", report.coordinates or NOT_AVAILABLE),
        ("Observed at", observed or NOT_AVAILABLE),
        ("Description", report.description.title() or NOT_AVAILABLE),
        ("Temperature", _fmt(report.temperature_c, "°C", 2)),
        ("Humidity", _fmt(report.humidity_pct, "%")),
        ("Pressure", _fmt(report.pressure_hpa, "hPa")),
        ("Wind speed", _fmt(report.wind_speed_ms, "m/sec", 2)),
        ("Visibility", _fmt(report.visibility_m, "m")),
    ]


def build_report_table(report: WeatherReport) -> str:
    """Render a report as a two-column ASCII table."""
    rows = report_rows(report)
    return render_template(
        "report_table.txt.j2",
        rows=rows,
        name_width=max(len("Name"), *(len(label) for label, _ in rows)),
        value_width=max(len("Value"), *(len(value) for _, value in rows)),
    )


def build_report_json(report: WeatherReport, *, indent: int | None = None) -> str:
    """Render a report as a flat JSON object."""
    return report.model_dump_json(indent=indent)
