"""Read and write query builders.

A write query renders a single point in InfluxDB line protocol::

    weather,location=us-midwest temperature=82i,raining=false 1465839830

A read query is one or more InfluxQL statements joined by ``;``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum

from influxdb_http.errors import InvalidQueryError

FieldValue = bool | int | float | str


class Precision(str, Enum):
    """Timestamp resolution, valued by its ``precision`` query modifier."""

    NOW = ""
    NANOSECONDS = "ns"
    MICROSECONDS = "u"
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "m"
    HOURS = "h"


class Timestamp:
    """A point in time expressed in a given precision, or ``NOW``.

    ``Timestamp.NOW`` leaves the timestamp out of the line so the server
    stamps the point on arrival.
    """

    NOW: Timestamp

    def __init__(self, precision: Precision, value: int | None = None) -> None:
        if precision is Precision.NOW and value is not None:
            raise ValueError("Timestamp.NOW carries no value")
        if precision is not Precision.NOW and value is None:
            raise ValueError(f"a {precision.name.lower()} timestamp needs a value")
        self.precision = precision
        self.value = value

    @classmethod
    def nanoseconds(cls, value: int) -> Timestamp:
        return cls(Precision.NANOSECONDS, value)

    @classmethod
    def microseconds(cls, value: int) -> Timestamp:
        return cls(Precision.MICROSECONDS, value)

    @classmethod
    def milliseconds(cls, value: int) -> Timestamp:
        return cls(Precision.MILLISECONDS, value)

    @classmethod
    def seconds(cls, value: int) -> Timestamp:
        return cls(Precision.SECONDS, value)

    @classmethod
    def minutes(cls, value: int) -> Timestamp:
        return cls(Precision.MINUTES, value)

    @classmethod
    def hours(cls, value: int) -> Timestamp:
        return cls(Precision.HOURS, value)

    @property
    def precision_modifier(self) -> str:
        return self.precision.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self.precision, self.value) == (other.precision, other.value)

    def __hash__(self) -> int:
        return hash((self.precision, self.value))

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)

    def __repr__(self) -> str:
        if self.precision is Precision.NOW:
            return "Timestamp.NOW"
        return f"Timestamp.{self.precision.name.lower()}({self.value})"


Timestamp.NOW = Timestamp(Precision.NOW)


# ── Line protocol escaping ────────────────────────────────────────────────────


def _escape(text: str, chars: str) -> str:
    for char in chars:
        text = text.replace(char, "\\" + char)
    return text


def _escape_measurement(name: str) -> str:
    return _escape(name, ", ")


def _escape_key(key: str) -> str:
    return _escape(key, ",= ")


def _format_field_value(value: FieldValue) -> str:
    # bool is a subclass of int and must be matched first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidQueryError(f"field value must be finite, got {value!r}")
        return repr(value)
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    raise InvalidQueryError(f"unsupported field value type: {type(value).__name__}")


# ── Queries ───────────────────────────────────────────────────────────────────


class Query(ABC):
    """Common base of read and write queries."""

    @abstractmethod
    def build(self) -> str:
        """Return the request text, or raise ``InvalidQueryError``."""


class WriteQuery(Query):
    """Appends a single point to ``measurement``."""

    def __init__(self, timestamp: Timestamp, measurement: str) -> None:
        self.timestamp = timestamp
        self.measurement = measurement
        self.fields: list[tuple[str, FieldValue]] = []
        self.tags: list[tuple[str, str]] = []

    def add_field(self, name: str, value: FieldValue) -> WriteQuery:
        self.fields.append((name, value))
        return self

    def add_tag(self, name: str, value: object) -> WriteQuery:
        self.tags.append((name, str(value)))
        return self

    def get_precision_modifier(self) -> str:
        return self.timestamp.precision_modifier

    def build(self) -> str:
        """Render the point as one line of line protocol.

        Raises:
            InvalidQueryError: if no fields were added or a field value has an
                unsupported type.
        """
        if not self.fields:
            raise InvalidQueryError("fields cannot be empty")

        line = _escape_measurement(self.measurement)
        for name, value in self.tags:
            line += f",{_escape_key(name)}={_escape_key(value)}"

        line += " " + ",".join(
            f"{_escape_key(name)}={_format_field_value(value)}"
            for name, value in self.fields
        )

        if self.timestamp.value is not None:
            line += f" {self.timestamp}"
        return line


class ReadQuery(Query):
    """One or more InfluxQL statements sent in a single request."""

    def __init__(self, query: str) -> None:
        self.queries: list[str] = [query]

    def add_query(self, query: str) -> ReadQuery:
        self.queries.append(query)
        return self

    def build(self) -> str:
        statements = [q for q in self.queries if q.strip()]
        if not statements:
            raise InvalidQueryError("query cannot be empty")
        return ";".join(statements)


def write_query(timestamp: Timestamp, measurement: str) -> WriteQuery:
    """Create a write query for ``measurement`` at ``timestamp``."""
    return WriteQuery(timestamp, measurement)


def raw_read_query(query: str) -> ReadQuery:
    """Create a read query from a raw InfluxQL statement."""
    return ReadQuery(query)
