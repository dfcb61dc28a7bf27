"""
Card commands for stackdock.

Cards and stacks are referenced by id or by name.
"""
import click

from stackdock.commands._common import get_core, run_operation
from stackdock.constants import DEFAULT_TRUNCATE_LENGTH
from stackdock.exceptions import NotFoundError
from stackdock.models.updates import CardUpdate, NewCard
from stackdock.utils import format_date, truncate_text


@click.group()
def card():
    """Manage cards."""
    pass


@card.command(name="add")
@click.argument("stack_ref")
@click.argument("name")
@click.option("--desc", "description", default=None, help="Card description.")
@click.option("--cover", default=None, help="Cover image URL.")
@click.pass_context
def add_card(ctx, stack_ref, name, description, cover):
    """Add a card called NAME to the stack STACK_REF."""

    def start(core):
        target = core.find_stack(stack_ref)
        return core.engine.create_card(
            NewCard(name=name, description=description, cover=cover, stack_id=target.id)
        )

    result = run_operation(ctx, start)
    click.echo(f"Card '{result.record.name}' created ({result.record.id}).")


@card.command(name="list")
@click.argument("stack_ref")
@click.pass_context
def list_cards(ctx, stack_ref):
    """List the cards in STACK_REF."""
    core = get_core(ctx)
    try:
        target = core.find_stack(stack_ref)
    except NotFoundError as e:
        raise click.ClickException(str(e))
    cards = core.engine.cards_for_stack(target.id)
    if not cards:
        click.echo(f"No cards in '{target.name}'.")
        return
    for c in cards:
        line = f"{c.id}  {c.name}  [{format_date(c.updated_at)}]"
        if c.description:
            line += f"  {truncate_text(c.description, DEFAULT_TRUNCATE_LENGTH)}"
        click.echo(line)


@card.command(name="edit")
@click.argument("ref")
@click.option("--name", default=None, help="New name.")
@click.option("--desc", "description", default=None, help="New description.")
@click.option("--cover", default=None, help="New cover image URL.")
@click.pass_context
def edit_card(ctx, ref, name, description, cover):
    """Edit the card REF."""
    fields = {k: v for k, v in (("name", name), ("description", description), ("cover", cover)) if v is not None}
    if not fields:
        raise click.ClickException("Nothing to change. Use --name, --desc or --cover.")

    def start(core):
        return core.engine.update_card(core.find_card(ref).id, CardUpdate(**fields))

    result = run_operation(ctx, start)
    click.echo(f"Card '{result.record.name}' updated.")


@card.command(name="move")
@click.argument("ref")
@click.argument("stack_ref")
@click.pass_context
def move_card(ctx, ref, stack_ref):
    """Move the card REF to the stack STACK_REF."""

    def start(core):
        target = core.find_stack(stack_ref)
        return core.engine.move_card(core.find_card(ref).id, target.id)

    result = run_operation(ctx, start)
    click.echo(f"Card '{result.record.name}' moved.")


@card.command(name="delete")
@click.argument("ref")
@click.pass_context
def delete_card(ctx, ref):
    """Delete the card REF."""

    def start(core):
        return core.engine.delete_card(core.find_card(ref).id)

    result = run_operation(ctx, start)
    click.echo(f"Card '{result.record.name}' deleted.")
