import click

from stackdock.commands._common import get_core
from stackdock.models.files import ConfigFile


@click.command()
@click.option(
    "--force",
    is_flag=True,
    help="Discard existing data and reseed the demo stacks.",
)
@click.pass_context
def init(ctx, force):
    """Initializes the data directory, seeding demo stacks if it is empty."""
    core = get_core(ctx)
    if force:
        click.confirm(
            f"This will discard all data in {core.storage.snapshot_path.resolve()}. Continue?",
            abort=True,
        )
        core.reset()

    config_path = core.config.config_path
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(ConfigFile().model_dump_json(indent=2), encoding="utf-8")
        click.echo(f"Wrote default settings to {config_path.resolve()}")

    click.echo(
        f"stackdock data at {core.storage.snapshot_path.resolve()} "
        f"({len(core.engine.stacks)} stacks, {len(core.engine.cards)} cards)"
    )
