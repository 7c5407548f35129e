from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_chart, render_error, render_summaries, render_summary
from cli.tracker import DeviceDraft, TrackerSession


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Register devices and review their energy use through the tracker API.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _loaded_session(state: CLIState) -> TrackerSession:
    session = TrackerSession(state.client)
    if not session.load():
        render_error(session.error or "")
        raise typer.Exit(code=1)
    return session


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Tracker API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP response.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, request_timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("devices")
def devices_command(ctx: typer.Context) -> None:
    """List devices with their consumption totals."""
    session = _loaded_session(_get_state(ctx))
    render_summaries(session.summaries())


@app.command("chart")
def chart_command(ctx: typer.Context) -> None:
    """Show total kWh per device as a bar chart."""
    session = _loaded_session(_get_state(ctx))
    render_chart(session.chart())


@app.command("add")
def add_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Device name."),
    wattage: float = typer.Option(..., "--wattage", "-w", help="Rated power in watts."),
    start: str = typer.Option(..., "--start", help="Usage start time, HH:MM."),
    end: str = typer.Option(..., "--end", help="Usage end time, HH:MM (may be past midnight)."),
) -> None:
    """Register a device and record its derived daily consumption."""
    state = _get_state(ctx)
    session = _loaded_session(state)
    session.draft = DeviceDraft(name=name, wattage=wattage, start_time=start, end_time=end)
    typer.echo(f"Adding {name} to {state.config.base_url} ...")
    if not session.add_device():
        render_error(session.error or "")
        raise typer.Exit(code=1)

    device = session.devices[-1]
    typer.secho(f"Device added. id={device.id}", fg=typer.colors.GREEN)
    typer.echo()
    summary = next(item for item in session.summaries() if item.device.id == device.id)
    render_summary(summary)
