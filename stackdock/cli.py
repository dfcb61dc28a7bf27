"""
Command-line interface for stackdock.

Every mutating command applies its change optimistically, waits for the
(simulated) remote to answer, and reports whether it committed or was
rolled back.
"""
from pathlib import Path

import click

from stackdock.commands.card import card
from stackdock.commands.init import init
from stackdock.commands.stack import stack
from stackdock.commands.status import status
from stackdock.log_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Data directory (default: .stackdock).",
)
@click.option("--failure-rate", type=click.FloatRange(0.0, 1.0), default=None, help="Simulated failure probability.")
@click.option("--min-delay", type=click.FloatRange(min=0.0), default=None, help="Minimum simulated latency (s).")
@click.option("--max-delay", type=click.FloatRange(min=0.0), default=None, help="Maximum simulated latency (s).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, data_dir, failure_rate, min_delay, max_delay, verbose):
    """Manage stacks of cards with optimistic sync."""
    configure_logging(verbose=verbose)
    ctx.obj = {
        "data_dir": data_dir,
        "failure_rate": failure_rate,
        "min_delay": min_delay,
        "max_delay": max_delay,
    }


cli.add_command(init)
cli.add_command(status)
cli.add_command(stack)
cli.add_command(card)


if __name__ == '__main__':
    cli()
