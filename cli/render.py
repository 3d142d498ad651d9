from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_reading(payload: Optional[Dict[str, Any]], heading: str = "Reading") -> None:
    echo_heading(heading)
    if not payload:
        typer.echo("No weather data available.")
        return
    echo_key_values(
        [
            ("temperatureCelsius", _fmt(payload.get("temperatureCelsius"))),
            ("humidityPercent", _fmt(payload.get("humidityPercent"))),
            ("windKph", _fmt(payload.get("windKph"))),
            ("observedAt", payload.get("observedAt")),
        ]
    )


def render_observers(payload: Dict[str, Any]) -> None:
    observers = payload.get("observers") or []
    echo_heading(f"Observers ({payload.get('count', len(observers))})")
    if not observers:
        typer.echo("No observers subscribed.")
        return
    for observer in observers:
        typer.echo(f"  - {observer.get('id')} ({observer.get('type')})")


def render_status(
    current: Dict[str, Any],
    strategy: Dict[str, Any],
    observers: Dict[str, Any],
) -> None:
    echo_heading("Strategy")
    echo_key_values(
        [
            ("current", strategy.get("current")),
            ("available", ", ".join(strategy.get("available") or [])),
        ]
    )
    typer.echo()
    reading = current.get("reading")
    render_reading(reading, heading="Last Reading")
    if not reading and current.get("message"):
        typer.echo(current["message"])
    typer.echo()
    render_observers(observers)


def render_scheduler(payload: Dict[str, Any]) -> None:
    echo_heading("Scheduled Updates")
    echo_key_values(
        [
            ("enabled", payload.get("enabled")),
            ("running", payload.get("running")),
            ("active", payload.get("active")),
            ("interval_seconds", payload.get("interval_seconds")),
        ]
    )


def _fmt(value: Any) -> Any:
    if isinstance(value, float):
        return f"{value:.1f}"
    return value
