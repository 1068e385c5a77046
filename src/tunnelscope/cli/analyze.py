"""Analysis commands for Tunnelscope CLI."""

import asyncio
import random
from pathlib import Path
from typing import NoReturn

import click

from tunnelscope.analytics.alerts import MAX_ALERTS, build_alerts, filter_records
from tunnelscope.analytics.stats import compute_feature_stats
from tunnelscope.cli.output import OutputFormatter
from tunnelscope.core.errors import NoValidRecordsError, TunnelscopeError
from tunnelscope.core.logging import debug, info
from tunnelscope.core.metrics import collect_metrics
from tunnelscope.enrichment.geo import DEFAULT_ENRICH_LIMIT, IpWhoIsProvider, enrich_records
from tunnelscope.models.config import DetectionConfig
from tunnelscope.models.record import DNSQueryRecord, Label, Reputation
from tunnelscope.normalizer.query import LogNormalizer
from tunnelscope.parsers import MultiFormatParser

EXIT_ERROR = 1
EXIT_NO_RECORDS = 4

RECORD_COLUMNS = ["timestamp", "sourceIp", "query", "type", "label", "threatScore", "reputation"]
ALERT_COLUMNS = ["timestamp", "severity", "type", "message"]

source_argument = click.argument(
    "source",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=str),
)


def _build_normalizer(ctx: click.Context) -> LogNormalizer:
    config: DetectionConfig = ctx.obj["config"]
    seed: int | None = ctx.obj.get("seed")
    rng = random.Random(seed) if seed is not None else None
    return LogNormalizer.from_config(config, rng=rng)


def _read_source(source: str) -> str:
    if source == "-":
        return click.get_text_stream("stdin").read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _fail(ctx: click.Context, error: TunnelscopeError) -> NoReturn:
    formatter: OutputFormatter = ctx.obj["formatter"]
    formatter.error(error.to_structured_error())
    ctx.exit(EXIT_NO_RECORDS if isinstance(error, NoValidRecordsError) else EXIT_ERROR)


def _load_records(
    ctx: click.Context, source: str, step_name: str
) -> tuple[LogNormalizer, list[DNSQueryRecord]]:
    """Parse a log source, emitting run metrics to stderr."""
    normalizer = _build_normalizer(ctx)
    parser = MultiFormatParser(normalizer)

    with collect_metrics(step_name) as metrics:
        content = _read_source(source)
        metrics.add_bytes_read(len(content.encode("utf-8")))
        try:
            result = parser.parse_detailed(content, source_name=source)
        except TunnelscopeError as e:
            _fail(ctx, e)
        metrics.strategy = result.strategy
        metrics.add_records_processed(len(result.records) + result.skipped)
        metrics.add_records_output(len(result.records))
        metrics.add_skipped(result.skipped)

    debug("Run metrics", **metrics.to_dict())
    info(
        f"Parsed {len(result.records)} records in {metrics.duration_ms}ms"
        + (f" ({result.strategy})" if result.strategy else "")
    )
    return normalizer, result.records


@click.command()
@source_argument
@click.option("--limit", "-l", type=int, default=None, help="Limit number of records")
@click.option("--tunneling-only", is_flag=True, default=False, help="Only emit Tunneling records")
@click.option("--search", "-s", default=None, help="Substring match on query, source IP or id")
@click.option("--type", "query_type", default=None, help="Record type filter (e.g. TXT)")
@click.option("--rcode", "response_code", default=None, help="Response code filter (e.g. NXDOMAIN)")
@click.option(
    "--band",
    type=click.Choice(["CRITICAL", "HIGH", "MEDIUM", "LOW"]),
    default=None,
    help="Minimum threat band (HIGH includes CRITICAL; LOW is score <= 20)",
)
@click.option(
    "--reputation",
    type=click.Choice([r.value for r in Reputation]),
    default=None,
    help="Source reputation filter",
)
@click.option("--geolocate", is_flag=True, default=False, help="Look up source locations (network)")
@click.option(
    "--geo-limit",
    type=int,
    default=DEFAULT_ENRICH_LIMIT,
    show_default=True,
    help="Maximum records to geolocate",
)
@click.pass_context
def parse(
    ctx: click.Context,
    source: str,
    limit: int | None,
    tunneling_only: bool,
    search: str | None,
    query_type: str | None,
    response_code: str | None,
    band: str | None,
    reputation: str | None,
    geolocate: bool,
    geo_limit: int,
) -> None:
    """Parse a DNS log (JSON, JSONL, CSV or text) into scored records.

    \b
    Examples:
      tunnelscope parse queries.csv
      tunnelscope --format jsonl parse dns.log --tunneling-only
      cat export.json | tunnelscope parse -
    """
    formatter: OutputFormatter = ctx.obj["formatter"]
    normalizer, records = _load_records(ctx, source, "parse")

    if geolocate:
        asyncio.run(
            enrich_records(records, IpWhoIsProvider(), scorer=normalizer.scorer, limit=geo_limit)
        )

    if tunneling_only:
        records = [r for r in records if r.label is Label.TUNNELING]

    records = filter_records(
        records,
        search=search,
        query_type=query_type,
        response_code=response_code,
        band=band,
        reputation=Reputation(reputation) if reputation else None,
    )

    if limit is not None:
        records = records[:limit]

    formatter.records(records, columns=RECORD_COLUMNS, title=f"DNS Queries ({len(records)} total)")


@click.command()
@source_argument
@click.pass_context
def stats(ctx: click.Context, source: str) -> None:
    """Compute feature statistics for a DNS log."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    _, records = _load_records(ctx, source, "stats")
    formatter.output(compute_feature_stats(records), title="Feature Stats")


@click.command()
@source_argument
@click.option("--limit", "-l", type=int, default=MAX_ALERTS, show_default=True, help="Maximum alerts")
@click.pass_context
def alerts(ctx: click.Context, source: str, limit: int) -> None:
    """Raise alerts for tunneling queries in a DNS log, newest first."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    _, records = _load_records(ctx, source, "alerts")
    formatter.records(
        build_alerts(records, limit=limit),
        columns=ALERT_COLUMNS,
        title="Security Alerts",
    )


@click.command()
@click.argument("query")
@click.option("--source-ip", default=None, help="Client address")
@click.option("--type", "query_type", default=None, help="Record type (default A)")
@click.option("--rcode", "response_code", default=None, help="Response code (default NOERROR)")
@click.option("--location", default=None, help="Known location of the client")
@click.pass_context
def score(
    ctx: click.Context,
    query: str,
    source_ip: str | None,
    query_type: str | None,
    response_code: str | None,
    location: str | None,
) -> None:
    """Normalize and score a single query, with the factor breakdown."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    normalizer = _build_normalizer(ctx)

    try:
        record = normalizer.normalize(
            {
                "query": query,
                "sourceIp": source_ip,
                "type": query_type,
                "responseCode": response_code,
            }
        )
    except TunnelscopeError as e:
        _fail(ctx, e)

    if location:
        record.apply_enrichment(location=location)
        record.apply_enrichment(threat_score=normalizer.scorer.score(record))

    formatter.output(
        {
            "record": record.to_json_dict(),
            "breakdown": normalizer.scorer.breakdown(record).to_dict(),
        },
        title="Threat Score",
    )
