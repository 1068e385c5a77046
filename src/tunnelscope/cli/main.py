"""Tunnelscope CLI entry point and global options."""

import sys
from pathlib import Path
from typing import Literal

import click

from tunnelscope import __version__
from tunnelscope.cli.analyze import alerts, parse, score, stats
from tunnelscope.cli.output import OutputFormat, OutputFormatter, set_output_format
from tunnelscope.core.config import load_config
from tunnelscope.core.errors import TunnelscopeError, handle_error
from tunnelscope.core.logging import configure_logging, set_verbose

EXIT_ERROR = 1


@click.group()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "jsonl", "human"]),
    default="json",
    help="Output format (default: json)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging to stderr",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress informational output",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log format for stderr (default: text)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML detection configuration (default: built-in tables)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for confidence jitter, for reproducible output",
)
@click.version_option(version=__version__, prog_name="tunnelscope")
@click.pass_context
def cli(
    ctx: click.Context,
    format: OutputFormat,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
    config_path: Path | None,
    seed: int | None,
) -> None:
    """Tunnelscope: DNS tunneling detection for heterogeneous query logs.

    Normalizes JSON, JSONL, CSV and free-text DNS logs into canonical
    records scored for covert-channel behavior.
    """
    set_output_format(format)
    set_verbose(verbose)
    configure_logging(log_format=log_format, quiet=quiet)

    formatter = OutputFormatter(format=format)
    try:
        config = load_config(config_path)
    except TunnelscopeError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(EXIT_ERROR)

    ctx.ensure_object(dict)
    ctx.obj = {
        "format": format,
        "verbose": verbose,
        "quiet": quiet,
        "log_format": log_format,
        "config": config,
        "seed": seed,
        "formatter": formatter,
    }


# Register commands
cli.add_command(parse)
cli.add_command(stats)
cli.add_command(alerts)
cli.add_command(score)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except TunnelscopeError as e:
        handle_error(e, exit_code=EXIT_ERROR)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
