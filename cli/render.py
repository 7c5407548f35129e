from __future__ import annotations

from typing import Any, Iterable, Sequence

import typer

from services.aggregator import ChartSeries, DeviceSummary

_BAR_WIDTH = 40


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def render_summary(summary: DeviceSummary) -> None:
    device = summary.device
    echo_heading(device.name or "(unnamed)")
    echo_key_values(
        [
            ("Wattage", f"{device.wattage}W"),
            ("Usage", f"{device.start_time} - {device.end_time}"),
            ("Total kWh", f"{summary.total_kwh:.2f}"),
            ("Total Cost", f"${summary.total_cost:.2f}"),
            ("Carbon Footprint", f"{summary.total_carbon_footprint:.2f} kg CO2"),
        ]
    )


def render_summaries(summaries: Sequence[DeviceSummary]) -> None:
    echo_heading("Devices and Consumption")
    if not summaries:
        typer.echo("No devices registered yet.")
        return
    for summary in summaries:
        typer.echo()
        render_summary(summary)


def render_chart(series: ChartSeries) -> None:
    echo_heading("Consumption Chart")
    typer.echo(series.label)
    if not series.labels:
        typer.echo("No devices registered yet.")
        return
    peak = max((value for value in series.data if value > 0), default=0.0)
    label_width = max(len(label) for label in series.labels)
    for label, value in zip(series.labels, series.data):
        length = int(round(max(value, 0.0) / peak * _BAR_WIDTH)) if peak else 0
        typer.echo(f"{label.ljust(label_width)} | {'#' * length} {value:.2f}")
