"""Minimal async client for the InfluxDB HTTP write/query API."""

from influxdb_http.client import InfluxDbClient
from influxdb_http.errors import (
    DatabaseError,
    DeserializationError,
    InfluxDbError,
    InvalidQueryError,
    ProtocolError,
)
from influxdb_http.models import Authentication, QueryResponse, Series, StatementResult
from influxdb_http.query import (
    Precision,
    Query,
    ReadQuery,
    Timestamp,
    WriteQuery,
    raw_read_query,
    write_query,
)

__all__ = [
    "Authentication",
    "DatabaseError",
    "DeserializationError",
    "InfluxDbClient",
    "InfluxDbError",
    "InvalidQueryError",
    "Precision",
    "ProtocolError",
    "Query",
    "QueryResponse",
    "ReadQuery",
    "Series",
    "StatementResult",
    "Timestamp",
    "WriteQuery",
    "raw_read_query",
    "write_query",
]
