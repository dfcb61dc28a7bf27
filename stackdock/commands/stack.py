"""
Stack commands for stackdock.

Stacks are referenced by id or by name.
"""
import click

from stackdock.commands._common import get_core, run_operation
from stackdock.managers import selectors
from stackdock.models.updates import StackUpdate


@click.group()
def stack():
    """Manage stacks."""
    pass


@stack.command(name="add")
@click.argument("name")
@click.pass_context
def add_stack(ctx, name):
    """Create a stack called NAME."""
    result = run_operation(ctx, lambda core: core.engine.create_stack(name))
    click.echo(f"Stack '{result.record.name}' created ({result.record.id}).")


@stack.command(name="list")
@click.pass_context
def list_stacks(ctx):
    """List stacks with their card counts."""
    core = get_core(ctx)
    counts = selectors.card_counts(core.engine.snapshot)
    if not core.engine.stacks:
        click.echo("No stacks.")
        return
    for s in core.engine.stacks:
        click.echo(f"{s.id}  {s.name} ({counts[s.id]} cards)")


@stack.command(name="rename")
@click.argument("ref")
@click.argument("new_name")
@click.pass_context
def rename_stack(ctx, ref, new_name):
    """Rename the stack REF to NEW_NAME."""

    def start(core):
        target = core.find_stack(ref)
        return core.engine.update_stack(target.id, StackUpdate(name=new_name))

    result = run_operation(ctx, start)
    click.echo(f"Stack renamed to '{result.record.name}'.")


@stack.command(name="delete")
@click.argument("ref")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete_stack(ctx, ref, yes):
    """Delete the stack REF and all of its cards."""
    if not yes:
        click.confirm(f"Delete stack '{ref}' and all of its cards?", abort=True)

    def start(core):
        return core.engine.delete_stack(core.find_stack(ref).id)

    result = run_operation(ctx, start)
    click.echo(f"Stack '{result.record.name}' deleted.")
