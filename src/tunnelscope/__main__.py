"""Allow ``python -m tunnelscope``."""

from tunnelscope.cli import cli

cli()
