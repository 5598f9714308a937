"""Async client for the InfluxDB 1.x HTTP API.

Every call opens its own ``httpx.AsyncClient``, sends one request and reads
the whole body.  Errors reported by the server are detected by looking for
``"error"`` in the body rather than by parsing it, so a successful write
(which returns an empty body) and a successful read are both returned as raw
text.  ``json_query`` parses read results into pydantic models on top of that.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from influxdb_http.config import Settings
from influxdb_http.errors import (
    DatabaseError,
    DeserializationError,
    InvalidQueryError,
    ProtocolError,
)
from influxdb_http.models import Authentication, QueryResponse
from influxdb_http.query import Query, ReadQuery, WriteQuery

logger = logging.getLogger(__name__)

_BUILD_HEADER = "X-Influxdb-Build"
_VERSION_HEADER = "X-Influxdb-Version"


class InfluxDbClient:
    """Reads and writes data against a single InfluxDB database."""

    def __init__(
        self,
        url: str,
        database: str,
        auth: Authentication | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._database = database
        self._auth = auth
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> InfluxDbClient:
        auth = None
        if settings.influx_username:
            auth = Authentication(
                username=settings.influx_username,
                password=settings.influx_password,
            )
        return cls(
            settings.influx_url,
            settings.influx_database,
            auth,
            timeout=settings.influx_timeout,
            transport=transport,
        )

    @property
    def database_name(self) -> str:
        """Name of the database queries and writes are run against."""
        return self._database

    @property
    def database_url(self) -> str:
        """Base URL of the InfluxDB server (without a trailing slash)."""
        return self._url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self._timeout)

    def _params(self, **extra: str) -> dict[str, str]:
        params = {"db": self._database, **extra}
        if self._auth is not None:
            params["u"] = self._auth.username
            params["p"] = self._auth.password
        return params

    # ── Ping ─────────────────────────────────────────────────────────────────

    async def ping(self) -> tuple[str, str]:
        """Ping the server.

        Returns:
            ``(build, version)`` taken from the ``X-Influxdb-Build`` and
            ``X-Influxdb-Version`` response headers.

        Raises:
            ProtocolError: if the request fails or either header is missing.
        """
        logger.debug("GET %s/ping", self._url)
        try:
            async with self._client() as client:
                resp = await client.get(f"{self._url}/ping")
        except httpx.HTTPError as exc:
            raise ProtocolError(str(exc)) from exc

        build = resp.headers.get(_BUILD_HEADER)
        version = resp.headers.get(_VERSION_HEADER)
        if build is None or version is None:
            raise ProtocolError(
                f"ping response (HTTP {resp.status_code}) is missing "
                f"{_BUILD_HEADER} / {_VERSION_HEADER} headers"
            )
        return build, version

    # ── Queries ──────────────────────────────────────────────────────────────

    async def query(self, q: Query) -> str:
        """Send a read or write query and return the raw response body.

        Args:
            q: A ``ReadQuery`` or ``WriteQuery``.

        Returns:
            The response body as text (empty for a successful write).

        Raises:
            InvalidQueryError:    if ``q`` cannot be built.
            ProtocolError:        on connection or transport failures.
            DeserializationError: if the body is not valid UTF-8.
            DatabaseError:        if the body reports an ``"error"``.
            TypeError:            if ``q`` is neither a read nor a write query.
        """
        if not isinstance(q, (ReadQuery, WriteQuery)):
            raise TypeError(f"unsupported query type: {type(q).__name__}")

        text = q.build()
        headers: dict[str, str] = {}

        if isinstance(q, ReadQuery):
            method = "GET" if "SELECT" in text or "SHOW" in text else "POST"
            endpoint = f"{self._url}/query"
            params = self._params(q=text)
            content = None
        else:
            method = "POST"
            endpoint = f"{self._url}/write"
            precision = q.get_precision_modifier()
            params = self._params(precision=precision) if precision else self._params()
            headers["Content-Type"] = "text/plain; charset=utf-8"
            content = text.encode("utf-8")

        logger.debug("%s %s", method, endpoint)
        try:
            async with self._client() as client:
                resp = await client.request(
                    method, endpoint, params=params, headers=headers, content=content
                )
        except httpx.HTTPError as exc:
            raise ProtocolError(str(exc)) from exc

        try:
            body = resp.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DeserializationError(
                "response could not be converted to UTF-8"
            ) from exc

        if '"error"' in body:
            logger.warning(
                "InfluxDB reported an error (HTTP %s) for %s %s",
                resp.status_code,
                method,
                endpoint,
            )
            raise DatabaseError(f'influxdb error: "{body}"')

        return body

    async def json_query(self, q: ReadQuery) -> QueryResponse:
        """Run a read query and parse its JSON body.

        Raises:
            InvalidQueryError:    if ``q`` is not a read query or cannot be built.
            DeserializationError: if the body is not a valid query response.
            (plus everything ``query`` raises)
        """
        if not isinstance(q, ReadQuery):
            raise InvalidQueryError("only read queries can be deserialized")

        body = await self.query(q)
        try:
            return QueryResponse.model_validate_json(body)
        except ValidationError as exc:
            raise DeserializationError(
                f"unable to parse query response: {exc}"
            ) from exc
