"""
Status command for stackdock.

Shows every stack with its card count, optionally as JSON, and can push
the whole snapshot to the remote first.
"""

import json

import click

from stackdock.commands._common import get_core, run_operation
from stackdock.managers import selectors
from stackdock.models.base import SyncStatus
from stackdock.utils import format_date


@click.command()
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output the full snapshot as JSON.",
)
@click.option("--sync", is_flag=True, help="Push the whole snapshot to the remote first.")
@click.pass_context
def status(ctx, sync, json_output):
    """Show stacks, card counts and the sync state."""
    core = get_core(ctx)
    if sync:
        run_operation(ctx, lambda c: c.engine.resync(), core=core, check=False)
    engine = core.engine

    if json_output:
        click.echo(json.dumps(engine.snapshot.model_dump(mode="json"), indent=2))
        return

    counts = selectors.card_counts(engine.snapshot)
    if engine.error_message:
        click.echo(f"Sync: {engine.sync_status.value} ({engine.error_message})")
    else:
        click.echo(f"Sync: {engine.sync_status.value}")
    for s in engine.stacks:
        click.echo(f"- {s.name}: {counts[s.id]} cards (updated {format_date(s.updated_at)})")
    orphans = selectors.dangling_cards(engine.snapshot)
    if orphans:
        click.echo(f"Warning: {len(orphans)} cards reference missing stacks.", err=True)
    if engine.sync_status == SyncStatus.ERROR:
        ctx.exit(1)
