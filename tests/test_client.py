from __future__ import annotations

import json

import httpx
import pytest
import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config


def _client_with(handler) -> ApiClient:
    client = ApiClient(CLIConfig(base_url="http://station.test"))
    client._client = httpx.Client(  # type: ignore[attr-defined]
        base_url="http://station.test", transport=httpx.MockTransport(handler)
    )
    return client


def test_manual_update_posts_camel_case_payload() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"temperatureCelsius": 1.0})

    client = _client_with(handler)
    try:
        payload = client.manual_update(1.0, 2.0, 3.0)
    finally:
        client.close()

    assert payload == {"temperatureCelsius": 1.0}
    assert seen == {
        "method": "POST",
        "path": "/api/weather/update/manual",
        "body": {"temperatureCelsius": 1.0, "humidityPercent": 2.0, "windKph": 3.0},
    }


def test_http_error_reports_detail_and_exits(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"detail": "Observer with id 'p1' already exists"})

    client = _client_with(handler)
    with pytest.raises(typer.Exit) as excinfo:
        client.subscribe("PHONE", "p1")
    client.close()

    assert excinfo.value.exit_code == 1
    assert "status 409: Observer with id 'p1' already exists" in capsys.readouterr().err


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://weather:8080/")
    monkeypatch.setenv("CLI_HTTP_TIMEOUT", "nope")

    config = load_config()

    assert config.base_url == "http://weather:8080"
    assert config.timeout == 30.0
