from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_observers, render_reading, render_scheduler, render_status


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the weather station service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Station API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show the active strategy, the last reading and the observers."""
    state = _get_state(ctx)
    render_status(
        state.client.get_current(),
        state.client.get_strategy(),
        state.client.list_observers(),
    )


@app.command("strategy")
def strategy_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(
        None, help="Strategy to activate (MANUAL, REALTIME or SCHEDULED). Omit to show."
    ),
) -> None:
    """Show or switch the update strategy."""
    state = _get_state(ctx)
    if name is not None:
        payload = state.client.set_strategy(name)
        typer.secho(payload.get("message", "Strategy updated."), fg=typer.colors.GREEN)
        return
    payload = state.client.get_strategy()
    typer.echo(f"current: {payload.get('current')}")
    typer.echo(f"available: {', '.join(payload.get('available') or [])}")


@app.command("poll")
def poll_command(ctx: typer.Context) -> None:
    """Ask the active strategy for a new reading."""
    state = _get_state(ctx)
    render_reading(state.client.poll(), heading="Poll successful")


@app.command("manual")
def manual_command(
    ctx: typer.Context,
    temperature: float = typer.Option(..., "--temperature", "-t", help="Temperature in °C."),
    humidity: float = typer.Option(..., "--humidity", "-u", help="Relative humidity in %."),
    wind: float = typer.Option(..., "--wind", "-w", help="Wind speed in kph."),
) -> None:
    """Submit a reading while the MANUAL strategy is active."""
    state = _get_state(ctx)
    payload = state.client.manual_update(temperature, humidity, wind)
    render_reading(payload, heading="Manual update successful")


@app.command("subscribe")
def subscribe_command(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="PHONE, WEBAPP or OUTDOOR."),
    subscriber_id: str = typer.Argument(..., help="Unique observer id."),
) -> None:
    """Register an observer."""
    state = _get_state(ctx)
    payload = state.client.subscribe(kind, subscriber_id)
    typer.secho(
        f"Observer subscribed: {payload.get('type')}/{payload.get('id')}",
        fg=typer.colors.GREEN,
    )


@app.command("unsubscribe")
def unsubscribe_command(
    ctx: typer.Context,
    subscriber_id: str = typer.Argument(..., help="Observer id to remove."),
) -> None:
    """Remove an observer."""
    state = _get_state(ctx)
    state.client.unsubscribe(subscriber_id)
    typer.secho(f"Observer unsubscribed: {subscriber_id}", fg=typer.colors.GREEN)


@app.command("observers")
def observers_command(ctx: typer.Context) -> None:
    """List observers in registration order."""
    state = _get_state(ctx)
    render_observers(state.client.list_observers())


@app.command("scheduler")
def scheduler_command(
    ctx: typer.Context,
    enable: Optional[bool] = typer.Option(
        None,
        "--enable/--disable",
        help="Turn scheduled updates on or off. Omit to show the current state.",
    ),
) -> None:
    """Show or toggle scheduled updates."""
    state = _get_state(ctx)
    if enable is None:
        payload = state.client.get_scheduler()
    else:
        payload = state.client.set_scheduler(enable)
    render_scheduler(payload)
