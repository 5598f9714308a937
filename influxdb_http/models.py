"""Pydantic models for authentication and JSON query responses."""

from typing import Any

from pydantic import BaseModel, Field

# ── Authentication ────────────────────────────────────────────────────────────


class Authentication(BaseModel):
    """Credentials sent as the ``u`` / ``p`` query parameters."""

    username: str
    password: str = Field(..., repr=False)


# ── JSON query results ────────────────────────────────────────────────────────


class Series(BaseModel):
    """A single series returned by a ``SELECT`` or ``SHOW`` statement."""

    name: str = ""
    columns: list[str] = Field(default_factory=list)
    values: list[list[Any]] = Field(default_factory=list)
    tags: dict[str, str] | None = None

    def records(self) -> list[dict[str, Any]]:
        """Return each row as a ``{column: value}`` dict."""
        return [dict(zip(self.columns, row)) for row in self.values]


class StatementResult(BaseModel):
    statement_id: int = 0
    series: list[Series] = Field(default_factory=list)


class QueryResponse(BaseModel):
    """Top-level body of an InfluxDB ``/query`` response."""

    results: list[StatementResult] = Field(default_factory=list)
