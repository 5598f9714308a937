"""Shared pytest fixtures and helpers.

The InfluxDB server is replaced by an ``httpx.MockTransport`` so tests run
without any live services.  ``FakeInflux`` records every request it receives
and answers with whatever response the test configured.
"""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest

from influxdb_http.client import InfluxDbClient
from influxdb_http.config import get_settings
from influxdb_http.models import Authentication

# ── Constants ─────────────────────────────────────────────────────────────────

INFLUX_URL = "http://influx.test:8086"
DATABASE = "weather_db"

SELECT_BODY = (
    '{"results":[{"statement_id":0,"series":[{"name":"weather",'
    '"columns":["time","temperature"],'
    '"values":[["2019-01-01T00:00:00Z",82],["2019-01-01T01:00:00Z",79]]}]}]}'
)
ERROR_BODY = '{"results":[{"statement_id":0,"error":"database not found: weather_db"}]}'

# ── Fake server ───────────────────────────────────────────────────────────────


class FakeInflux:
    """Records requests and replies with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.content: bytes = b""
        self.headers: dict[str, str] = {
            "X-Influxdb-Build": "OSS",
            "X-Influxdb-Version": "1.7.6",
        }
        self.exc: Exception | None = None

    def reply(self, content: str | bytes, status_code: int = 200) -> None:
        self.content = content.encode() if isinstance(content, str) else content
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(
            self.status_code, headers=self.headers, content=self.content
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture()
def fake_influx() -> FakeInflux:
    return FakeInflux()


@pytest.fixture()
def client(fake_influx: FakeInflux) -> InfluxDbClient:
    return InfluxDbClient(INFLUX_URL, DATABASE, transport=fake_influx.transport)


@pytest.fixture()
def auth_client(fake_influx: FakeInflux) -> InfluxDbClient:
    return InfluxDbClient(
        INFLUX_URL,
        DATABASE,
        Authentication(username="admin", password="s3cret"),
        transport=fake_influx.transport,
    )


@pytest.fixture()
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear INFLUX_* variables and the cached settings around a test."""
    for name in (
        "INFLUX_URL",
        "INFLUX_DATABASE",
        "INFLUX_USERNAME",
        "INFLUX_PASSWORD",
        "INFLUX_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
