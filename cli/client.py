from __future__ import annotations

from typing import Any, Dict, NoReturn

import httpx
import typer

from cli.config import CLIConfig

_API_PREFIX = "/api/weather"


class ApiClient:
    """Minimal HTTP client for the weather station service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def get_current(self) -> Dict[str, Any]:
        return self._request("GET", "/current")

    def get_strategy(self) -> Dict[str, Any]:
        return self._request("GET", "/strategy")

    def set_strategy(self, name: str) -> Dict[str, Any]:
        return self._request("PUT", f"/strategy/{name}")

    def poll(self) -> Dict[str, Any]:
        return self._request("POST", "/update")

    def manual_update(self, temperature: float, humidity: float, wind: float) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/update/manual",
            json={
                "temperatureCelsius": temperature,
                "humidityPercent": humidity,
                "windKph": wind,
            },
        )

    def list_observers(self) -> Dict[str, Any]:
        return self._request("GET", "/observers")

    def subscribe(self, kind: str, subscriber_id: str) -> Dict[str, Any]:
        return self._request("POST", "/observers", json={"id": subscriber_id, "type": kind})

    def unsubscribe(self, subscriber_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/observers/{subscriber_id}")

    def get_scheduler(self) -> Dict[str, Any]:
        return self._request("GET", "/scheduler")

    def set_scheduler(self, enabled: bool) -> Dict[str, Any]:
        return self._request("PUT", "/scheduler", json={"enabled": enabled})

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._client.request(method, f"{_API_PREFIX}{path}", **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
