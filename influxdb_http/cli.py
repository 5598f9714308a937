"""``influxdb-http`` command-line entry point.

Examples::

    influxdb-http ping
    influxdb-http query "SELECT * FROM weather" --json
    influxdb-http write weather --field temperature=82 --tag location=us-midwest
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from influxdb_http.client import InfluxDbClient
from influxdb_http.config import Settings, get_settings
from influxdb_http.errors import InfluxDbError
from influxdb_http.query import FieldValue, Precision, Timestamp, raw_read_query, write_query

logger = logging.getLogger(__name__)


def parse_field_value(raw: str) -> FieldValue:
    """Interpret a CLI field value as bool, int, float or (fallback) string."""
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="influxdb-http")
    parser.add_argument("--url", help="InfluxDB base URL (default: INFLUX_URL)")
    parser.add_argument("--database", "-d", help="Database name (default: INFLUX_DATABASE)")
    parser.add_argument("--username", "-u", help="Username (default: INFLUX_USERNAME)")
    parser.add_argument("--password", "-p", help="Password (default: INFLUX_PASSWORD)")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("ping", help="Print the server build and version")

    query = sub.add_parser("query", help="Run an InfluxQL statement")
    query.add_argument("text", help="Query text, e.g. 'SELECT * FROM weather'")
    query.add_argument("--json", action="store_true", help="Print parsed series records")

    write = sub.add_parser("write", help="Write a single point")
    write.add_argument("measurement")
    write.add_argument("--field", "-f", type=_key_value, action="append", required=True)
    write.add_argument("--tag", "-t", type=_key_value, action="append", default=[])
    write.add_argument("--timestamp", type=int, default=None)
    write.add_argument(
        "--precision",
        choices=[p.value for p in Precision if p is not Precision.NOW],
        default=Precision.SECONDS.value,
        help="Unit of --timestamp",
    )
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        "influx_url": args.url,
        "influx_database": args.database,
        "influx_username": args.username,
        "influx_password": args.password,
    }
    return settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


async def _run(client: InfluxDbClient, args: argparse.Namespace) -> None:
    if args.command == "ping":
        build, version = await client.ping()
        print(f"build={build} version={version}")

    elif args.command == "query":
        q = raw_read_query(args.text)
        if not args.json:
            print(await client.query(q))
            return
        response = await client.json_query(q)
        for result in response.results:
            for series in result.series:
                print(json.dumps({"name": series.name, "tags": series.tags,
                                  "records": series.records()}))

    elif args.command == "write":
        if args.timestamp is None:
            timestamp = Timestamp.NOW
        else:
            timestamp = Timestamp(Precision(args.precision), args.timestamp)
        q = write_query(timestamp, args.measurement)
        for key, value in args.tag:
            q.add_tag(key, value)
        for key, value in args.field:
            q.add_field(key, parse_field_value(value))
        await client.query(q)
        logger.info("Wrote 1 point to '%s'", args.measurement)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = _apply_overrides(get_settings(), args)
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client = InfluxDbClient.from_settings(settings)
    try:
        asyncio.run(_run(client, args))
    except InfluxDbError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
